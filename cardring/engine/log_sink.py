# cardring/engine/log_sink.py
"""
Where game-log lines end up.

The engine only needs something with ``write(stream_id, line)``. Lines for the
same stream must land in call order; nothing is promised across streams.
"""

import os
import threading
from collections import defaultdict
from typing import IO, Dict, List, Protocol

from cardring.common.constants import OUTPUT_DIR, OUTPUT_FILE
from cardring.common.logging_utils import get_logger

log = get_logger("engine.log_sink")


class LogSink(Protocol):
    def write(self, stream_id: str, line: str) -> None:
        ...


class MemorySink:
    """Keeps every stream in memory. Default sink, and what the tests inspect."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._streams: Dict[str, List[str]] = defaultdict(list)

    def write(self, stream_id: str, line: str) -> None:
        with self._lock:
            self._streams[stream_id].append(line)

    def lines(self, stream_id: str) -> List[str]:
        with self._lock:
            return list(self._streams.get(stream_id, []))

    def streams(self) -> List[str]:
        with self._lock:
            return sorted(self._streams)


class FileSink:
    """
    One ``<stream_id>_output.txt`` per stream under ``directory``.

    Each file is opened (and truncated) on its first line, flushed after every
    line, and closed by ``close()`` / leaving the ``with`` block.
    """

    def __init__(self, directory: str = OUTPUT_DIR) -> None:
        self.directory = directory
        self._files: Dict[str, IO[str]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._closed = False

    def path_for(self, stream_id: str) -> str:
        return os.path.join(self.directory, OUTPUT_FILE.format(stream=stream_id))

    def _stream(self, stream_id: str):
        with self._registry_lock:
            if self._closed:
                raise ValueError(f"FileSink is closed (write to {stream_id})")
            if stream_id not in self._files:
                os.makedirs(self.directory, exist_ok=True)
                path = self.path_for(stream_id)
                self._files[stream_id] = open(path, "w", encoding="utf-8")
                self._locks[stream_id] = threading.Lock()
                log.debug(f"Opened {path}")
            return self._files[stream_id], self._locks[stream_id]

    def write(self, stream_id: str, line: str) -> None:
        fh, lock = self._stream(stream_id)
        with lock:
            fh.write(line + "\n")
            fh.flush()

    def close(self) -> None:
        with self._registry_lock:
            if self._closed:
                return
            self._closed = True
            files = list(self._files.items())
        for stream_id, fh in files:
            with self._locks[stream_id]:
                fh.close()
        log.debug(f"Closed {len(files)} output files in {self.directory}")

    def __enter__(self) -> "FileSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

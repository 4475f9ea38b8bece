# cardring/engine/winner_gate.py

import threading
from typing import Optional


class WinnerGate:
    """
    Single check-and-set point for the end of the game.

    The winner id and the ended signal change together under one lock, so
    nobody can observe "ended" without also seeing who won.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._winner: Optional[int] = None
        self._ended = threading.Event()

    def try_claim(self, actor_id: int) -> bool:
        with self._lock:
            if self._winner is not None:
                return False
            self._winner = actor_id
            self._ended.set()
            return True

    @property
    def winner(self) -> Optional[int]:
        with self._lock:
            return self._winner

    @property
    def ended(self) -> bool:
        return self._ended.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._ended.wait(timeout)

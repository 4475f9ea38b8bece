# cardring/common/logging_utils.py

import logging
import os

# Environment switches:
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
# At DEBUG every game-log line written to a sink is mirrored here as well.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Call once at program start (app/main.py)."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger,
    stream_id: str,
    line: str,
    level: int = logging.DEBUG,
) -> None:
    """
    Unified game-event log.
    stream_id: the sink stream the line went to ("player3", "deck1", ...).
    """
    logger.log(level, f"[{stream_id}] {line}")

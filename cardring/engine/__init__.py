# cardring/engine/__init__.py

from .deck import Deck, build_ring
from .winner_gate import WinnerGate
from .log_sink import LogSink, MemorySink, FileSink
from .player import Player, PlayerState
from .game import Game, GameResult

__all__ = [
    "Deck",
    "build_ring",
    "WinnerGate",
    "LogSink",
    "MemorySink",
    "FileSink",
    "Player",
    "PlayerState",
    "Game",
    "GameResult",
]

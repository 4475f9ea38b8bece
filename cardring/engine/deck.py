# cardring/engine/deck.py

import threading
from collections import deque
from typing import Deque, List, Optional

from cardring.common.cards import Card
from cardring.common.constants import DECK_STREAM
from cardring.common.errors import require


class Deck:
    """
    FIFO pile of cards shared by two neighbouring players.

    The player on the left discards into it, the player on the right draws
    from it. One lock per deck guards every operation; there is no
    ring-wide lock.
    """

    def __init__(self, deck_id: int) -> None:
        require(
            isinstance(deck_id, int) and deck_id >= 1,
            f"Deck id must be positive. Received: {deck_id}",
        )
        self.deck_id = deck_id
        self._cards: Deque[Card] = deque()
        self._lock = threading.Lock()

    @property
    def stream_id(self) -> str:
        return DECK_STREAM.format(id=self.deck_id)

    def append(self, card: Card) -> None:
        require(isinstance(card, Card), f"Deck {self.deck_id} only accepts cards, got {card!r}")
        with self._lock:
            self._cards.append(card)

    def draw(self) -> Optional[Card]:
        """Oldest card, or None when the deck is empty."""
        with self._lock:
            if not self._cards:
                return None
            return self._cards.popleft()

    def snapshot(self) -> List[Card]:
        """Point-in-time copy, ascending by rank (for reporting only)."""
        with self._lock:
            return sorted(self._cards)

    def describe(self) -> str:
        contents = "".join(f" {c}" for c in self.snapshot())
        return f"deck{self.deck_id} contents:{contents}"

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"Deck(deck_id={self.deck_id}, size={len(self)})"


def build_ring(n: int) -> List[Deck]:
    """Decks 1..n. Player i draws from ring[i-1] and discards to ring[i % n]."""
    require(isinstance(n, int) and n >= 1, f"Number of decks must be positive. Received: {n}")
    return [Deck(i) for i in range(1, n + 1)]

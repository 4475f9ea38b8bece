# cardring/common/cards.py

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import require


@dataclass(frozen=True, order=True)
class Card:
    rank: int  # >= 0

    def __post_init__(self) -> None:
        require(
            isinstance(self.rank, int) and not isinstance(self.rank, bool),
            f"Card rank must be an integer, got {self.rank!r}",
        )
        require(self.rank >= 0, f"Card rank cannot be negative, got {self.rank}")

    def __str__(self) -> str:
        return str(self.rank)


CardLike = Union[Card, int]


def to_card(value: CardLike) -> Card:
    if isinstance(value, Card):
        return value
    return Card(value)


def to_cards(values: Iterable[CardLike]) -> List[Card]:
    return [to_card(v) for v in values]


def ranks(cards: Iterable[Card]) -> Tuple[int, ...]:
    return tuple(c.rank for c in cards)

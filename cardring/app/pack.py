# cardring/app/pack.py

import random
from typing import Iterable, List, Optional

from cardring.common.cards import Card
from cardring.common.constants import CARDS_PER_PLAYER, RANK_SPREAD
from cardring.common.errors import InvalidInput, require
from cardring.common.logging_utils import get_logger

log = get_logger("app.pack")


def parse_pack(text: str) -> List[Card]:
    """Whitespace-separated ranks -> cards."""
    cards: List[Card] = []
    for token in text.split():
        try:
            rank = int(token)
        except ValueError:
            raise InvalidInput(f"Pack contains a non-integer value: {token!r}") from None
        cards.append(Card(rank))
    return cards


def load_pack(path: str, n: int) -> List[Card]:
    require(isinstance(n, int) and n >= 1, f"Number of players must be positive. Received: {n}")
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise InvalidInput(f"Invalid pack file {path!r}: {e}") from e

    cards = parse_pack(text)
    expected = CARDS_PER_PLAYER * n
    require(len(cards) == expected, f"Pack must contain exactly {expected} cards, got {len(cards)}")
    log.info(f"Loaded {len(cards)} cards from {path}")
    return cards


def generate_random_pack(n: int, rng: Optional[random.Random] = None) -> List[int]:
    require(isinstance(n, int) and n >= 1, f"Number of players must be positive. Received: {n}")
    rng = rng or random.Random()
    upper = RANK_SPREAD * n
    return [rng.randrange(upper) for _ in range(CARDS_PER_PLAYER * n)]


def write_pack(path: str, ranks: Iterable[int]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for r in ranks:
            f.write(f"{r}\n")
    log.info(f"Pack written to {path}")

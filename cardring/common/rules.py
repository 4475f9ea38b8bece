# cardring/common/rules.py

from typing import Sequence

from .cards import Card
from .constants import HAND_SIZE


def has_winning_hand(hand: Sequence[Card]) -> bool:
    # exactly four cards, all of one rank
    if len(hand) != HAND_SIZE:
        return False
    first = hand[0].rank
    return all(c.rank == first for c in hand)


def choose_discard(hand: Sequence[Card], preferred_rank: int) -> Card:
    """
    First card (hand order) whose rank is not the preferred one.
    If every card is preferred, the first card in the hand.
    """
    if not hand:
        raise ValueError("Cannot choose a discard from an empty hand")
    for card in hand:
        if card.rank != preferred_rank:
            return card
    return hand[0]


def format_hand(hand: Sequence[Card]) -> str:
    return " ".join(str(c) for c in hand)

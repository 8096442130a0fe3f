"""Deck creation and dealing for coinche."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, PLAIN_ORDER, Suit
from .seats import NUM_SEATS, seats_from, next_seat

DECK_SIZE = 32
HAND_SIZE = 8
DEAL_PATTERN: Tuple[int, ...] = (3, 2, 3)


def build_deck() -> List[Card]:
    """Return the ordered 32-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in PLAIN_ORDER]


def validate_deck(cards: Sequence[Card]) -> List[Card]:
    """Return the cards as a list, ensuring they form exactly one full deck."""
    cards = list(cards)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if set(cards) != set(build_deck()):
        raise ValueError("Deck must contain every card exactly once.")
    return cards


def shuffled_deck(rng: Optional[Random] = None) -> List[Card]:
    cards = build_deck()
    if rng is None:
        rng = Random()
    rng.shuffle(cards)
    return cards


def _validate_pattern(pattern: Sequence[int]) -> None:
    if sum(pattern) != HAND_SIZE or any(size <= 0 for size in pattern):
        raise ValueError(f"Deal pattern {tuple(pattern)} must be positive and sum to {HAND_SIZE}.")


def deal(
    deck: Sequence[Card],
    dealer: int,
    *,
    pattern: Sequence[int] = DEAL_PATTERN,
) -> List[List[Card]]:
    """Deal four 8-card hands, in packets, starting left of the dealer."""
    cards = validate_deck(deck)
    _validate_pattern(pattern)

    hands: List[List[Card]] = [[] for _ in range(NUM_SEATS)]
    position = 0
    for packet in pattern:
        for seat in seats_from(next_seat(dealer)):
            hands[seat].extend(cards[position : position + packet])
            position += packet
    return hands


def stack_deck(
    hands: Sequence[Sequence[Card]],
    dealer: int,
    *,
    pattern: Sequence[int] = DEAL_PATTERN,
) -> List[Card]:
    """Return the deck order that ``deal`` turns into the given hands."""
    _validate_pattern(pattern)
    if len(hands) != NUM_SEATS or any(len(hand) != HAND_SIZE for hand in hands):
        raise ValueError(f"Expected {NUM_SEATS} hands of {HAND_SIZE} cards.")

    offsets = [0] * NUM_SEATS
    cards: List[Card] = []
    for packet in pattern:
        for seat in seats_from(next_seat(dealer)):
            cards.extend(hands[seat][offsets[seat] : offsets[seat] + packet])
            offsets[seat] += packet
    return validate_deck(cards)

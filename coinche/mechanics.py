"""Legal move generation for coinche."""

from __future__ import annotations

from typing import Iterable, Optional, Set

from .cards import Card, Suit, beats
from .errors import CardNotHeld, MustFollowSuit, MustOvertrump, MustTrump
from .trick import Trick


def legal_plays(hand: Iterable[Card], trick: Trick, trump: Optional[Suit]) -> Set[Card]:
    """Return the subset of cards the seat due to play in ``trick`` may play."""
    cards = set(hand)
    if trick.is_empty():
        return cards

    led = trick.led_suit()
    assert led is not None

    in_led = {card for card in cards if card.suit is led}
    if in_led:
        if led is trump:
            return _overtrumps(in_led, trick, trump) or in_led
        return in_led

    trump_cards: Set[Card] = set()
    raised: Set[Card] = set()
    if trump is not None:
        trump_cards = {card for card in cards if card.suit is trump}
        raised = _overtrumps(trump_cards, trick, trump) or trump_cards

    player = trick.next_to_play()
    if player is not None and trick.partner_winning(player, trump):
        # No obligation to trump, but a trump played must still raise when possible.
        return (cards - trump_cards) | raised

    if raised:
        return raised

    return cards


def _overtrumps(trump_cards: Set[Card], trick: Trick, trump: Suit) -> Set[Card]:
    best = trick.highest_trump(trump)
    if best is None:
        return set(trump_cards)
    return {card for card in trump_cards if beats(card, best, trump, trump)}


def check_play(hand: Iterable[Card], trick: Trick, trump: Optional[Suit], card: Card) -> None:
    """Raise the matching IllegalPlay error if ``card`` cannot be played."""
    cards = list(hand)
    if card not in cards:
        raise CardNotHeld(f"{card} is not in hand.")
    if card in legal_plays(cards, trick, trump):
        return

    led = trick.led_suit()
    if card.suit is not led and any(held.suit is led for held in cards):
        raise MustFollowSuit(f"{card} does not follow the lead suit {led}.")
    if trump is not None and card.suit is trump:
        raise MustOvertrump(f"{card} does not beat the best trump in the trick.")
    raise MustTrump(f"{card} must be replaced by a trump.")

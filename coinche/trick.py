"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import Card, Suit, beats, card_points
from .errors import TrickError
from .seats import NUM_SEATS, are_partners, next_seat


@dataclass
class Trick:
    leader: int
    plays: List[Tuple[int, Card]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == NUM_SEATS

    def next_to_play(self) -> Optional[int]:
        if self.is_full():
            return None
        return next_seat(self.leader, len(self.plays))

    def add_play(self, player: int, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        expected = self.next_to_play()
        if player != expected:
            raise TrickError(f"Seat {expected} must play next, not seat {player}.")
        self.plays.append((player, card))

    def led_suit(self) -> Optional[Suit]:
        return self.plays[0][1].suit if self.plays else None

    def cards(self) -> List[Card]:
        return [card for _, card in self.plays]

    def winning_play(self, trump: Optional[Suit]) -> Tuple[int, Card]:
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        led = self.led_suit()
        assert led is not None
        winning_player, winning_card = self.plays[0]
        for player, card in self.plays[1:]:
            if beats(card, winning_card, led, trump):
                winning_player, winning_card = player, card
        return winning_player, winning_card

    def winner(self, trump: Optional[Suit]) -> int:
        return self.winning_play(trump)[0]

    def partner_winning(self, player: int, trump: Optional[Suit]) -> bool:
        """Return True if the player's partner currently holds the trick."""
        if not self.plays:
            return False
        current, _ = self.winning_play(trump)
        return current != player and are_partners(current, player)

    def highest_trump(self, trump: Optional[Suit]) -> Optional[Card]:
        if trump is None:
            return None
        trumps = [card for card in self.cards() if card.suit is trump]
        if not trumps:
            return None
        best = trumps[0]
        for card in trumps[1:]:
            if beats(card, best, trump, trump):
                best = card
        return best

    def points(self, trump: Optional[Suit]) -> int:
        return sum(card_points(card, trump) for card in self.cards())

"""Card-play state for one coinche round."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .cards import Card, Rank, Suit
from .errors import NotYourTurn, TrickError
from .mechanics import check_play, legal_plays
from .seats import NUM_SEATS, NUM_TEAMS, next_seat, team_of
from .trick import Trick

logger = logging.getLogger(__name__)

BELOTE_RANKS = (Rank.KING, Rank.QUEEN)


@dataclass
class PlayState:
    hands: List[List[Card]]
    leader: int
    trump: Optional[Suit]
    last_trick_bonus: int = 10
    belote_bonus: int = 20
    current_player: int = field(init=False)
    current_trick: Trick = field(init=False)
    tricks: List[Trick] = field(init=False)
    card_points: List[int] = field(init=False)
    tricks_won: List[int] = field(init=False)
    belote_holder: Optional[int] = field(init=False)
    belote_calls: List[Tuple[int, str]] = field(init=False)
    last_trick_winner: Optional[int] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if len(self.hands) != NUM_SEATS:
            raise ValueError(f"PlayState needs exactly {NUM_SEATS} hands.")
        self.hands = [list(hand) for hand in self.hands]
        self.current_player = self.leader
        self.current_trick = Trick(leader=self.leader)
        self.tricks = []
        self.card_points = [0] * NUM_TEAMS
        self.tricks_won = [0] * NUM_TEAMS
        self.belote_holder = self._find_belote_holder()
        self.belote_calls = []

    def _find_belote_holder(self) -> Optional[int]:
        if self.trump is None:
            return None
        needed = {Card(rank, self.trump) for rank in BELOTE_RANKS}
        for seat, hand in enumerate(self.hands):
            if needed.issubset(hand):
                return seat
        return None

    def legal_plays(self, player: int) -> Set[Card]:
        if self.is_finished() or player != self.current_player:
            return set()
        return legal_plays(self.hands[player], self.current_trick, self.trump)

    def play_card(self, player: int, card: Card) -> Optional[int]:
        """Play a card; return the trick winner when the card completes a trick."""
        if self.is_finished():
            raise TrickError("All tricks have been played.")
        if player != self.current_player:
            raise NotYourTurn(f"Seat {self.current_player} is due to play, not seat {player}.")
        check_play(self.hands[player], self.current_trick, self.trump, card)

        self.hands[player].remove(card)
        self.current_trick.add_play(player, card)
        logger.debug("Seat %d plays %s", player, card)
        self._track_belote(player, card)

        if self.current_trick.is_full():
            return self._complete_trick()
        self.current_player = next_seat(player)
        return None

    def _track_belote(self, player: int, card: Card) -> None:
        if player != self.belote_holder or card.suit is not self.trump or card.rank not in BELOTE_RANKS:
            return
        call = "rebelote" if self.belote_calls else "belote"
        self.belote_calls.append((player, call))
        logger.debug("Seat %d announces %s", player, call)

    def _complete_trick(self) -> int:
        trick = self.current_trick
        winner = trick.winner(self.trump)
        team = team_of(winner)
        self.card_points[team] += trick.points(self.trump)
        self.tricks_won[team] += 1
        self.tricks.append(trick)
        self.last_trick_winner = winner

        if all(not hand for hand in self.hands):
            self.card_points[team] += self.last_trick_bonus

        self.current_player = winner
        self.current_trick = Trick(leader=winner)
        return winner

    @property
    def belote_team(self) -> Optional[int]:
        """Team credited with belote once both cards have been played."""
        if self.belote_holder is None or len(self.belote_calls) < len(BELOTE_RANKS):
            return None
        return team_of(self.belote_holder)

    def bonus_points(self) -> List[int]:
        bonuses = [0] * NUM_TEAMS
        if self.belote_team is not None:
            bonuses[self.belote_team] += self.belote_bonus
        return bonuses

    def last_trick(self) -> Trick:
        if not self.tricks:
            raise TrickError("No trick has been completed yet.")
        return self.tricks[-1]

    def is_finished(self) -> bool:
        hands_empty = all(len(hand) == 0 for hand in self.hands)
        return hands_empty and self.current_trick.is_empty()

    def played_cards(self) -> List[Card]:
        cards = [card for trick in self.tricks for card in trick.cards()]
        return cards + self.current_trick.cards()

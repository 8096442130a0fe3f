"""High-level round and game orchestration for coinche."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import List, Optional, Sequence, Set, Tuple

from .bidding import Auction, Bid, Contract
from .cards import Card
from .deck import deal, shuffled_deck, validate_deck
from .errors import (
    GameFinished,
    NoActiveRound,
    RoundAlreadyTerminal,
    RoundInProgress,
    RoundNotInBiddingPhase,
    RoundNotInPlayPhase,
)
from .rules_schema import RuleSet
from .scoring import RoundResult, score_round
from .seats import NUM_TEAMS, TEAMS, next_seat, validate_seat
from .state import PlayState

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    BIDDING = auto()
    PLAY = auto()
    COMPLETE = auto()
    VOID = auto()


TERMINAL_PHASES = (RoundPhase.COMPLETE, RoundPhase.VOID)


@dataclass
class RoundEngine:
    """Manage a single deal: auction, eight tricks and scoring."""

    dealer: int
    rng: Optional[Random] = None
    deck: Optional[Sequence[Card]] = None
    rules: RuleSet = field(default_factory=RuleSet)

    phase: RoundPhase = field(init=False, default=RoundPhase.BIDDING)
    hands: List[List[Card]] = field(init=False)
    auction: Auction = field(init=False)
    contract: Optional[Contract] = field(init=False, default=None)
    state: Optional[PlayState] = field(init=False, default=None)
    _result: Optional[RoundResult] = field(default=None, init=False)

    def __post_init__(self) -> None:
        validate_seat(self.dealer)
        if self.deck is not None:
            cards = validate_deck(self.deck)
        else:
            cards = shuffled_deck(self.rng)
        self.deck = tuple(cards)
        self.hands = deal(cards, self.dealer, pattern=self.rules.deal_pattern)
        self.auction = Auction(dealer=self.dealer, allow_no_trump=self.rules.allow_no_trump)

    @property
    def leader(self) -> int:
        """Seat that speaks first in the auction and leads the first trick."""
        return next_seat(self.dealer)

    @property
    def current_player(self) -> Optional[int]:
        if self.phase is RoundPhase.BIDDING:
            return self.auction.current_player
        if self.phase is RoundPhase.PLAY:
            assert self.state is not None
            return self.state.current_player
        return None

    def hand(self, seat: int) -> List[Card]:
        """Cards the seat currently holds."""
        if self.state is not None:
            return list(self.state.hands[seat])
        return list(self.hands[seat])

    # Actions -----------------------------------------------------------

    def submit_bid(self, player: int, bid: Bid) -> "RoundEngine":
        self._ensure_phase(RoundPhase.BIDDING)
        self.auction.submit(player, bid)
        if self.auction.is_void():
            self.phase = RoundPhase.VOID
            logger.info("Round dealt by seat %d is void; redeal.", self.dealer)
        elif self.auction.is_complete():
            self.contract = self.auction.contract()
            self._start_play()
        return self

    def submit_play(self, player: int, card: Card) -> "RoundEngine":
        self._ensure_phase(RoundPhase.PLAY)
        assert self.state is not None
        self.state.play_card(player, card)
        if self.state.is_finished():
            self._score()
        return self

    # Queries -----------------------------------------------------------

    def legal_bids(self, player: int) -> Set[Bid]:
        if self.phase is not RoundPhase.BIDDING:
            return set()
        return self.auction.legal_bids(player)

    def legal_plays(self, player: int) -> Set[Card]:
        if self.phase is not RoundPhase.PLAY:
            return set()
        assert self.state is not None
        return self.state.legal_plays(player)

    def outcome(self) -> Optional[RoundResult]:
        """Scored result once the round is complete; None while playing or when void."""
        return self._result

    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    # Helpers -----------------------------------------------------------

    def _start_play(self) -> None:
        assert self.contract is not None
        scoring = self.rules.scoring
        self.state = PlayState(
            hands=[hand[:] for hand in self.hands],
            leader=self.leader,
            trump=self.contract.trump,
            last_trick_bonus=scoring.last_trick_bonus,
            belote_bonus=scoring.belote_bonus,
        )
        self.phase = RoundPhase.PLAY

    def _score(self) -> None:
        assert self.state is not None and self.contract is not None
        self._result = score_round(
            contract=self.contract,
            card_points=self.state.card_points,
            tricks_won=self.state.tricks_won,
            belote_team=self.state.belote_team,
            config=self.rules.scoring,
        )
        self.phase = RoundPhase.COMPLETE
        logger.info(
            "Round scored: %s %s, scores %s",
            self.contract.label(),
            self._result.outcome.name.lower(),
            self._result.scores,
        )

    def _ensure_phase(self, expected: RoundPhase) -> None:
        if self.phase in TERMINAL_PHASES:
            raise RoundAlreadyTerminal(f"Round is already {self.phase.name.lower()}.")
        if self.phase is expected:
            return
        if expected is RoundPhase.BIDDING:
            raise RoundNotInBiddingPhase(f"Action not allowed in phase {self.phase.name.lower()}.")
        raise RoundNotInPlayPhase(f"Action not allowed in phase {self.phase.name.lower()}.")


def new_round(dealer: int, shuffled: Sequence[Card], rules: Optional[RuleSet] = None) -> RoundEngine:
    """Start a round from a deck the caller has already shuffled."""
    return RoundEngine(dealer=dealer, deck=shuffled, rules=rules or RuleSet())


class GameStatus(Enum):
    IN_PROGRESS = auto()
    FINISHED = auto()


@dataclass(frozen=True)
class GameStatusView:
    team_scores: Tuple[int, int]
    current_round: Optional[RoundEngine]
    status: GameStatus
    winning_team: Optional[int]
    dealer: int
    rounds_played: int


@dataclass
class GameSession:
    """Track scores across rounds until a team reaches the target."""

    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=RuleSet)
    dealer: int = 0
    scores: List[int] = field(default_factory=lambda: [0] * NUM_TEAMS)
    rng: Random = field(init=False)
    current_round: Optional[RoundEngine] = field(default=None, init=False)
    last_round: Optional[RoundEngine] = field(default=None, init=False)
    round_history: List[Optional[RoundResult]] = field(default_factory=list)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    winning_team: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        validate_seat(self.dealer)
        self.rng = Random(self.seed)

    def start_round(self, deck: Optional[Sequence[Card]] = None) -> RoundEngine:
        if self.status is GameStatus.FINISHED:
            raise GameFinished(f"Game already won by team {self.winning_team}.")
        if self.current_round is not None:
            raise RoundInProgress("Finish the current round before dealing again.")
        self.current_round = RoundEngine(dealer=self.dealer, rng=self.rng, deck=deck, rules=self.rules)
        logger.debug("Seat %d deals round %d", self.dealer, len(self.round_history) + 1)
        return self.current_round

    def submit_bid(self, player: int, bid: Bid) -> RoundEngine:
        current = self._require_round()
        current.submit_bid(player, bid)
        self._after_action(current)
        return current

    def submit_play(self, player: int, card: Card) -> RoundEngine:
        current = self._require_round()
        current.submit_play(player, card)
        self._after_action(current)
        return current

    def legal_bids(self, player: int) -> Set[Bid]:
        if self.current_round is None:
            return set()
        return self.current_round.legal_bids(player)

    def legal_plays(self, player: int) -> Set[Card]:
        if self.current_round is None:
            return set()
        return self.current_round.legal_plays(player)

    def game_state(self) -> GameStatusView:
        return GameStatusView(
            team_scores=(self.scores[0], self.scores[1]),
            current_round=self.current_round,
            status=self.status,
            winning_team=self.winning_team,
            dealer=self.dealer,
            rounds_played=len(self.round_history),
        )

    def is_finished(self) -> bool:
        return self.status is GameStatus.FINISHED

    def _after_action(self, current: RoundEngine) -> None:
        if current.is_terminal():
            self._finish_round(current)

    def _finish_round(self, finished: RoundEngine) -> None:
        result = finished.outcome()
        if result is not None:
            for team in TEAMS:
                self.scores[team] += result.scores[team]
        self.round_history.append(result)
        self.last_round = finished
        self.current_round = None
        self.dealer = next_seat(self.dealer)
        logger.info("Scores after round %d: %s", len(self.round_history), self.scores)
        self._check_termination(result)

    def _check_termination(self, result: Optional[RoundResult]) -> None:
        target = self.rules.game.target_score
        crossed = [team for team in TEAMS if self.scores[team] >= target]
        if not crossed:
            return

        if len(crossed) == 1:
            winner = crossed[0]
        elif self.rules.game.simultaneous_target == "taking_team" and result is not None:
            winner = result.contract.taking_team
        elif self.scores[0] != self.scores[1]:
            winner = 0 if self.scores[0] > self.scores[1] else 1
        else:
            logger.info("Both teams tied at %d past the target; playing another round.", self.scores[0])
            return

        self.status = GameStatus.FINISHED
        self.winning_team = winner
        logger.info("Team %d wins %d to %d.", winner, self.scores[winner], self.scores[1 - winner])

    def _require_round(self) -> RoundEngine:
        if self.current_round is None:
            raise NoActiveRound("No active round.")
        return self.current_round

"""Round scoring helpers for coinche."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from .bidding import Contract
from .cards import Suit, card_points
from .deck import HAND_SIZE, build_deck
from .errors import ScoringError
from .rules_schema import ScoringConfig
from .seats import NUM_TEAMS

TRICKS_PER_ROUND = HAND_SIZE


class ContractOutcome(Enum):
    SUCCESS = auto()
    CAPOT = auto()
    FAILURE = auto()


@dataclass(frozen=True)
class RoundResult:
    contract: Contract
    outcome: ContractOutcome
    card_points: Tuple[int, int]
    tricks_won: Tuple[int, int]
    belote_team: Optional[int]
    scores: Tuple[int, int]

    @property
    def contract_success(self) -> bool:
        return self.outcome is not ContractOutcome.FAILURE

    @property
    def winning_team(self) -> int:
        return self.contract.taking_team if self.contract_success else self.contract.defending_team


def round_total(trump: Optional[Suit], last_trick_bonus: int = 10) -> int:
    """Card points available in a round, dix de der included."""
    return sum(card_points(card, trump) for card in build_deck()) + last_trick_bonus


def round_to_ten(value: int) -> int:
    remainder = value % 10
    if remainder >= 5:
        return value + (10 - remainder)
    return value - remainder


def score_round(
    *,
    contract: Contract,
    card_points: Sequence[int],
    tricks_won: Sequence[int],
    belote_team: Optional[int] = None,
    config: Optional[ScoringConfig] = None,
) -> RoundResult:
    config = config or ScoringConfig()
    if len(card_points) != NUM_TEAMS or len(tricks_won) != NUM_TEAMS:
        raise ScoringError("Exactly two teams are supported.")
    if sum(tricks_won) != TRICKS_PER_ROUND:
        raise ScoringError(f"A round has {TRICKS_PER_ROUND} tricks, got {sum(tricks_won)}.")
    if belote_team is not None and belote_team not in range(NUM_TEAMS):
        raise ScoringError(f"Unknown belote team {belote_team!r}.")

    taker = contract.taking_team
    defender = contract.defending_team
    multiplier = contract.multiplier
    belote = [0] * NUM_TEAMS
    if belote_team is not None:
        belote[belote_team] = config.belote_bonus

    scores = [0] * NUM_TEAMS
    if contract.is_capot:
        if tricks_won[taker] == TRICKS_PER_ROUND:
            outcome = ContractOutcome.CAPOT
            scores[taker] = config.capot_points * multiplier + belote[taker]
            scores[defender] = belote[defender]
        else:
            outcome = ContractOutcome.FAILURE
    elif card_points[taker] >= contract.target.value:
        outcome = ContractOutcome.SUCCESS
        scores[taker] = (card_points[taker] + belote[taker]) * multiplier
        scores[defender] = card_points[defender] + belote[defender]
    else:
        outcome = ContractOutcome.FAILURE

    if outcome is ContractOutcome.FAILURE:
        total = round_total(contract.trump, config.last_trick_bonus)
        scores[defender] = (total + belote[defender]) * multiplier
        scores[taker] = belote[taker]

    if config.rounding == "nearest_ten":
        scores = [round_to_ten(score) for score in scores]

    return RoundResult(
        contract=contract,
        outcome=outcome,
        card_points=(card_points[0], card_points[1]),
        tricks_won=(tricks_won[0], tricks_won[1]),
        belote_team=belote_team,
        scores=(scores[0], scores[1]),
    )

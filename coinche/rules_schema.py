"""Validation schema for coinche rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator

from .deck import HAND_SIZE


class ScoringConfig(BaseModel):
    last_trick_bonus: int = Field(10, ge=0, description="Dix de der: bonus points for winning the last trick.")
    belote_bonus: int = Field(20, ge=0, description="Bonus for playing both the King and Queen of trumps.")
    capot_points: int = Field(250, gt=0, description="Fixed score of a successful capot contract.")
    rounding: Literal["none", "nearest_ten"] = Field(
        "none",
        description="How round scores are rounded before being added to the game totals.",
    )


class GameConfig(BaseModel):
    target_score: int = Field(1000, gt=0, description="Cumulative score that ends the game.")
    simultaneous_target: Literal["highest_total", "taking_team"] = Field(
        "highest_total",
        description="Who wins when both teams reach the target on the same round.",
    )


class RuleSet(BaseModel):
    deal_pattern: list[int] = Field(default_factory=lambda: [3, 2, 3])
    allow_no_trump: bool = Field(True, description="Whether contracts may be bid without a trump suit.")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    game: GameConfig = Field(default_factory=GameConfig)

    @field_validator("deal_pattern")
    @classmethod
    def validate_deal_pattern(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("Deal pattern must not be empty.")
        if any(packet <= 0 for packet in value):
            raise ValueError("Deal packets must be positive.")
        if sum(value) != HAND_SIZE:
            raise ValueError(f"Deal pattern must hand out exactly {HAND_SIZE} cards per seat.")
        return value


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read a JSON rules file; missing keys fall back to the defaults."""
    return RuleSet.model_validate_json(Path(path).read_text())

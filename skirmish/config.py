"""
Rules configuration.

Every tunable constant of the rules engine lives here so a ruleset can be
loaded from JSON and validated in one place.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Optional
import logging

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class WinnerPolicyName(str, Enum):
    """How the winner is chosen when the last turn ends."""
    VICTORY_POINTS = "victory_points"
    FIRST_SIDE = "first_side"


class RulesConfig(BaseModel):
    """Tunable rules for one game."""
    max_turn_num: int = Field(10, ge=1, description="Turn on which the game ends")
    dice_sides: int = Field(10, ge=1, description="Attack roll is uniform in [0, dice_sides)")
    hit_base: int = Field(5, description="Hit threshold before the defense/attack correction")
    critical_base: int = Field(9, description="Critical threshold before the correction")
    critical_divisor: int = Field(5, ge=1, description="Correction is divided by this for criticals")
    critical_bonus: int = Field(1, ge=0, description="Extra damage on a critical")
    winner_policy: WinnerPolicyName = WinnerPolicyName.VICTORY_POINTS
    seed: Optional[int] = Field(None, description="Seed for the attack roll; None draws from OS entropy")

    model_config = {"frozen": True}


DEFAULT_RULES = RulesConfig()


def load_config(path: str | Path) -> RulesConfig:
    """Load and validate a RulesConfig from a JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    config = RulesConfig.model_validate_json(text)
    logger.debug("Loaded rules config from %s: %s", path, config)
    return config

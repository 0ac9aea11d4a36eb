"""
Combat Resolution - Stochastic attack outcome.

An attack draws ``r`` uniformly from ``[0, dice_sides)`` and compares it
against two thresholds shifted by the defense/attack difference:

    correction         = receiver.defense - attacker.loadout.atk
    hit_threshold      = correction + hit_base
    critical_threshold = correction / critical_divisor + critical_base

``r >= critical_threshold`` is a critical (base damage + bonus),
``r >= hit_threshold`` a plain hit, anything lower is defended.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TYPE_CHECKING
import logging
import random

from .state import Fighter, HexCoordinate

if TYPE_CHECKING:
    from ..config import RulesConfig

logger = logging.getLogger(__name__)


class HitType(Enum):
    """Presentation-facing classification of an attack."""
    CRITICAL = "CRITICAL"
    ATTACKED = "ATTACKED"
    DEFENDED = "DEFENDED"


@dataclass(frozen=True)
class HitEffect:
    """Notification for the hit-effect renderer."""
    coordinate: HexCoordinate
    hit_type: HitType


@dataclass(frozen=True)
class AttackThresholds:
    hit: float
    critical: float


@dataclass(frozen=True)
class CombatOutcome:
    """Everything decided by one attack roll."""
    roll: float
    thresholds: AttackThresholds
    hit_type: HitType
    damage: int


def compute_thresholds(
    attacker: Fighter,
    receiver: Fighter,
    hit_base: float = 5,
    critical_base: float = 9,
    critical_divisor: float = 5,
) -> AttackThresholds:
    """Compute hit and critical thresholds for ``attacker`` against ``receiver``."""
    correction = receiver.defense - attacker.loadout.atk
    return AttackThresholds(
        hit=correction + hit_base,
        critical=correction / critical_divisor + critical_base,
    )


def classify_roll(
    roll: float,
    thresholds: AttackThresholds,
    base_damage: int,
    critical_bonus: int = 1,
) -> tuple[HitType, int]:
    """Map a roll to ``(hit_type, damage)``. Critical is checked first."""
    if roll >= thresholds.critical:
        return HitType.CRITICAL, base_damage + critical_bonus
    if roll >= thresholds.hit:
        return HitType.ATTACKED, base_damage
    return HitType.DEFENDED, 0


@dataclass
class CombatResolver:
    """
    Resolves attacks against the configured rules.

    The random source is a ``random.Random`` so a seed makes a whole
    battle reproducible. ``roll`` may be replaced with any zero-argument
    callable returning a float in ``[0, dice_sides)``.
    """
    dice_sides: int = 10
    hit_base: int = 5
    critical_base: int = 9
    critical_divisor: int = 5
    critical_bonus: int = 1
    rng: random.Random = field(default_factory=random.Random)
    roll: Callable[[], float] | None = None

    @classmethod
    def from_config(
        cls,
        config: RulesConfig,
        rng: random.Random | None = None,
        roll: Callable[[], float] | None = None,
    ) -> CombatResolver:
        return cls(
            dice_sides=config.dice_sides,
            hit_base=config.hit_base,
            critical_base=config.critical_base,
            critical_divisor=config.critical_divisor,
            critical_bonus=config.critical_bonus,
            rng=rng or random.Random(config.seed),
            roll=roll,
        )

    def draw(self) -> float:
        """Draw a roll in ``[0, dice_sides)``."""
        if self.roll is not None:
            return self.roll()
        return self.rng.random() * self.dice_sides

    def resolve(
        self,
        attacker: Fighter,
        receiver: Fighter,
        roll: float | None = None,
    ) -> CombatOutcome:
        """Resolve one attack. A given ``roll`` skips the random draw."""
        if roll is None:
            roll = self.draw()
        thresholds = compute_thresholds(
            attacker,
            receiver,
            hit_base=self.hit_base,
            critical_base=self.critical_base,
            critical_divisor=self.critical_divisor,
        )
        hit_type, damage = classify_roll(
            roll,
            thresholds,
            attacker.loadout.dmg,
            critical_bonus=self.critical_bonus,
        )
        logger.debug(
            "%s -> %s: roll=%.3f hit>=%.2f crit>=%.2f => %s (%d dmg)",
            attacker.name, receiver.name, roll,
            thresholds.hit, thresholds.critical, hit_type.value, damage,
        )
        return CombatOutcome(
            roll=roll,
            thresholds=thresholds,
            hit_type=hit_type,
            damage=damage,
        )

"""
Action System - Intents, payloads, and results.

Intents represent every way the roster can change:
1. Movement (the only intent that ends a turn segment)
2. Combat (attack, heal)
3. Scoring (victory points)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ERRORS_BY_CODE, EngineError
from .state import HexCoordinate, SideId


class ActionType(Enum):
    """Types of intents the reducer understands."""
    MOVE = "move"
    ATTACK = "attack"
    HEAL = "heal"
    ADD_VICTORY_POINT = "add_victory_point"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    fighter_id: int | None = None  # mover or attacker
    target_id: int | None = None  # receiver of an attack or heal
    side_id: SideId | None = None
    coordinate: HexCoordinate | None = None
    amount: int | None = None  # heal HP

    # Generic params (e.g. a fixed attack roll)
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete intent to be applied to the battle state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def move(cls, fighter_id: int, coordinate: HexCoordinate) -> Action:
        """Factory for move action."""
        return cls(
            action_type=ActionType.MOVE,
            payload=ActionPayload(fighter_id=fighter_id, coordinate=coordinate),
        )

    @classmethod
    def attack(
        cls,
        attacker_id: int,
        receiver_id: int,
        coordinate: HexCoordinate,
        roll: float | None = None,
    ) -> Action:
        """Factory for attack action. ``roll`` pins the random draw."""
        params = {} if roll is None else {"roll": roll}
        return cls(
            action_type=ActionType.ATTACK,
            payload=ActionPayload(
                fighter_id=attacker_id,
                target_id=receiver_id,
                coordinate=coordinate,
                params=params,
            ),
        )

    @classmethod
    def heal(cls, receiver_id: int, heal_hp: int) -> Action:
        """Factory for heal action."""
        return cls(
            action_type=ActionType.HEAL,
            payload=ActionPayload(target_id=receiver_id, amount=heal_hp),
        )

    @classmethod
    def add_victory_point(cls, side_id: SideId) -> Action:
        """Factory for victory point award."""
        return cls(
            action_type=ActionType.ADD_VICTORY_POINT,
            payload=ActionPayload(side_id=side_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Side effects (for presentation)
    """
    success: bool
    new_state: Any | None = None  # BattleState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes
    hit_effect: Any | None = None  # HitEffect, attacks only

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        hit_effect: Any | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            hit_effect=hit_effect,
        )

    def raise_for_error(self) -> None:
        """Raise the engine error matching ``error_code`` if the action failed."""
        if self.success:
            return
        error_cls = ERRORS_BY_CODE.get(self.error_code or "", EngineError)
        raise error_cls(self.error)

"""
Engine Core - Roster state management and action resolution.

The engine is the runtime that:
1. Holds the BattleState for both sides
2. Applies intents via the reducer
3. Resolves attacks stochastically
4. Answers lookup queries for the UI layer
"""

from .state import (
    BattleState,
    Fighter,
    HexCoordinate,
    Loadout,
    SideId,
    SideState,
    SIDE_A,
    SIDE_B,
    SIDE_IDS,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .combat import CombatResolver, CombatOutcome, HitEffect, HitType
from .reducer import Reducer, apply_action
from .engine import ActionEngine
from .errors import EngineError, InvalidStateError, NotFoundError

__all__ = [
    "BattleState",
    "Fighter",
    "HexCoordinate",
    "Loadout",
    "SideId",
    "SideState",
    "SIDE_A",
    "SIDE_B",
    "SIDE_IDS",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "CombatResolver",
    "CombatOutcome",
    "HitEffect",
    "HitType",
    "Reducer",
    "apply_action",
    "ActionEngine",
    "EngineError",
    "InvalidStateError",
    "NotFoundError",
]

"""
Winner policies - Who wins when the last turn ends.

A policy takes the final roster and the two side ids in turn order and
returns the winning side id.
"""

from __future__ import annotations
from typing import Callable

from ..config import WinnerPolicyName
from ..engine_core.lookup import find_side
from ..engine_core.state import BattleState, SideId

WinnerPolicy = Callable[[BattleState | None, SideId, SideId], SideId]


def first_side_wins(state: BattleState | None, first: SideId, second: SideId) -> SideId:
    """The first side always wins, whatever the score."""
    return first


def most_victory_points(state: BattleState, first: SideId, second: SideId) -> SideId:
    """Higher victory points wins; a tie goes to the first side."""
    if find_side(state, second).victory_point > find_side(state, first).victory_point:
        return second
    return first


WINNER_POLICIES: dict[WinnerPolicyName, WinnerPolicy] = {
    WinnerPolicyName.VICTORY_POINTS: most_victory_points,
    WinnerPolicyName.FIRST_SIDE: first_side_wins,
}


def get_winner_policy(name: WinnerPolicyName | str) -> WinnerPolicy:
    """Look up a policy by name. Raises ValueError for unknown names."""
    return WINNER_POLICIES[WinnerPolicyName(name)]

"""
Lookup helpers - Pure, read-only queries over a BattleState.

Used by the reducer to resolve intent references and by the UI layer
to decide what to offer next. Everything matches by id.
"""

from __future__ import annotations

from .errors import NotFoundError
from .state import BattleState, Fighter, HexCoordinate, SideId, SideState


def find_side(state: BattleState, side_id: SideId) -> SideState:
    """Get a side by id, or raise NotFoundError."""
    side = state.get_side(side_id)
    if side is None:
        raise NotFoundError(f"Side {side_id!r} was not found")
    return side


def current_side(state: BattleState, which_turn: SideId) -> SideState:
    """Get the side currently acting."""
    return find_side(state, which_turn)


def all_fighters(state: BattleState) -> list[Fighter]:
    """Flatten fighters across both sides, first side first."""
    return [fighter for _, fighter in state.iter_fighters()]


def fighters_of(state: BattleState, side_id: SideId) -> list[Fighter]:
    """Get one side's fighters, or raise NotFoundError for an unknown side."""
    return list(find_side(state, side_id).fighters)


def find_fighter(state: BattleState, fighter_id: int) -> Fighter:
    """Get a fighter by id from either side, or raise NotFoundError."""
    for _, fighter in state.iter_fighters():
        if fighter.fighter_id == fighter_id:
            return fighter
    raise NotFoundError(f"Fighter {fighter_id} was not found")


def find_side_of_fighter(state: BattleState, fighter_id: int) -> SideId:
    """Get the id of the side owning a fighter, or raise NotFoundError."""
    for side, fighter in state.iter_fighters():
        if fighter.fighter_id == fighter_id:
            return side.side_id
    raise NotFoundError(f"No side owns fighter {fighter_id}")


def find_fighter_at(
    state: BattleState,
    coordinate: HexCoordinate,
    side_id: SideId | None = None,
) -> Fighter | None:
    """
    Find the fighter standing on ``coordinate``.

    With ``side_id`` only that side's fighters are considered. Returns None
    for an empty cell; an unknown ``side_id`` raises NotFoundError.
    """
    if side_id is not None:
        candidates = find_side(state, side_id).fighters
    else:
        candidates = all_fighters(state)
    for fighter in candidates:
        if fighter.coordinate == coordinate:
            return fighter
    return None

"""
Battle State - Roster snapshot for the two competing sides.

Design principles:
- Immutable-friendly: all mutations return new state
- Identity by id: fighters and sides are matched by stable ids, never by value
- Serializable: plain dataclasses, easy to dump for replays
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Sequence


SideId = str

SIDE_A: SideId = "A"
SIDE_B: SideId = "B"
SIDE_IDS: tuple[SideId, SideId] = (SIDE_A, SIDE_B)


@dataclass(frozen=True)
class HexCoordinate:
    """
    A cell on the hex board, in axial coordinates.

    How a coordinate maps to pixels or offset rows is a rendering concern;
    the engine only needs value equality.
    """
    q: int
    r: int

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> HexCoordinate:
        """Build from a two-item sequence such as ``[q, r]``."""
        q, r = values
        return cls(q=int(q), r=int(r))

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


@dataclass(frozen=True)
class Loadout:
    """A fighter's attack: power against defense, and base damage on a hit."""
    atk: int
    dmg: int


@dataclass(frozen=True)
class Fighter:
    """
    A combat unit belonging to one side.

    Fighters are never created or destroyed mid-game. A defeated fighter
    keeps its record with ``current_hp == 0`` and no coordinate.
    """
    fighter_id: int
    name: str
    defense: int
    loadout: Loadout
    max_hp: int
    current_hp: int
    coordinate: HexCoordinate | None = None

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def is_on_board(self) -> bool:
        return self.coordinate is not None

    def moved_to(self, coordinate: HexCoordinate) -> Fighter:
        """Return new fighter placed at ``coordinate``."""
        return self._copy_with(coordinate=coordinate)

    def damaged(self, damage: int) -> Fighter:
        """
        Return new fighter after taking ``damage``.

        HP is clamped at zero; reaching zero removes the fighter from the board.
        """
        remaining = self.current_hp - damage
        if remaining <= 0:
            return self._copy_with(current_hp=0, coordinate=None)
        return self._copy_with(current_hp=remaining)

    def _copy_with(self, **kwargs) -> Fighter:
        return replace(self, **kwargs)


@dataclass
class SideState:
    """State for one side: its ordered fighters and its score."""
    side_id: SideId
    fighters: list[Fighter] = field(default_factory=list)
    victory_point: int = 0

    def get_fighter(self, fighter_id: int) -> Fighter | None:
        for fighter in self.fighters:
            if fighter.fighter_id == fighter_id:
                return fighter
        return None

    def owns(self, fighter_id: int) -> bool:
        return self.get_fighter(fighter_id) is not None

    def with_fighter(self, fighter: Fighter) -> SideState:
        """Return new side with the fighter of the same id replaced."""
        new_fighters = [
            fighter if f.fighter_id == fighter.fighter_id else f
            for f in self.fighters
        ]
        return SideState(
            side_id=self.side_id,
            fighters=new_fighters,
            victory_point=self.victory_point,
        )

    def with_victory_points(self, points: int) -> SideState:
        """Return new side with ``points`` added to its score."""
        return SideState(
            side_id=self.side_id,
            fighters=list(self.fighters),
            victory_point=self.victory_point + points,
        )


@dataclass
class BattleState:
    """
    Complete roster state at a point in time.

    Holds exactly two sides, first side first. This is the canonical
    state the reducer operates on; all changes go through the reducer.
    """
    sides: list[SideState] = field(default_factory=list)

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    @classmethod
    def create(cls, sides: Iterable[SideState]) -> BattleState:
        state = cls(sides=list(sides))
        state.validate()
        return state

    def validate(self) -> None:
        """
        Check the roster shape.

        Raises ValueError unless the sides are exactly A then B and every
        fighter id belongs to one fighter on one side.
        """
        side_ids = [s.side_id for s in self.sides]
        if side_ids != list(SIDE_IDS):
            raise ValueError(f"A battle needs exactly sides {SIDE_IDS}, got {side_ids}")

        seen: set[int] = set()
        for _, fighter in self.iter_fighters():
            if fighter.fighter_id in seen:
                raise ValueError(f"Fighter id {fighter.fighter_id} appears more than once")
            seen.add(fighter.fighter_id)

    @property
    def first_side(self) -> SideState:
        return self.sides[0]

    @property
    def second_side(self) -> SideState:
        return self.sides[1]

    def get_side(self, side_id: SideId) -> SideState | None:
        """Get side by ID."""
        for side in self.sides:
            if side.side_id == side_id:
                return side
        return None

    def iter_fighters(self) -> Iterator[tuple[SideState, Fighter]]:
        """Yield ``(side, fighter)`` for every fighter, in roster order."""
        for side in self.sides:
            for fighter in side.fighters:
                yield side, fighter

    def with_side(self, side: SideState) -> BattleState:
        """Return new state with updated side."""
        new_sides = [
            side if s.side_id == side.side_id else s
            for s in self.sides
        ]
        return self._copy_with(sides=new_sides)

    def with_fighter(self, fighter: Fighter) -> BattleState:
        """Return new state with the fighter replaced on whichever side owns it."""
        new_sides = [
            s.with_fighter(fighter) if s.owns(fighter.fighter_id) else s
            for s in self.sides
        ]
        return self._copy_with(sides=new_sides)

    def _copy_with(self, **kwargs) -> BattleState:
        """Create a copy with some fields replaced."""
        return BattleState(
            sides=kwargs.get("sides", self.sides),
            action_history=kwargs.get("action_history", list(self.action_history)),
        )

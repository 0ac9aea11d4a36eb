"""
Roster - Initial fighters for both sides.

Roster data arrives as plain JSON-like dicts (from a file or a scenario
module), is validated with Pydantic, and converted into the engine's
BattleState. Validation enforces the invariants the engine relies on:

- Exactly two sides, "A" then "B"
- Fighter ids unique across both sides
- 0 <= current_hp <= max_hp
- A fighter at 0 HP is not on the board
"""

from __future__ import annotations
from pathlib import Path
from typing import Literal, Optional
import logging

from pydantic import BaseModel, Field, model_validator

from .engine_core.state import (
    BattleState,
    Fighter,
    HexCoordinate,
    Loadout,
    SideState,
    SIDE_IDS,
)

logger = logging.getLogger(__name__)


class LoadoutSpec(BaseModel):
    """A fighter's attack loadout."""
    atk: int
    dmg: int = Field(ge=0)


class FighterSpec(BaseModel):
    """Starting data for one fighter."""
    id: int
    name: str
    defense: int = Field(alias="def")
    loadout: LoadoutSpec = Field(alias="move")
    max_hp: int = Field(gt=0)
    current_hp: Optional[int] = Field(None, description="Defaults to max_hp")
    coordinate: Optional[tuple[int, int]] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_hp(self) -> FighterSpec:
        hp = self.max_hp if self.current_hp is None else self.current_hp
        if not 0 <= hp <= self.max_hp:
            raise ValueError(f"fighter {self.id}: current_hp {hp} outside [0, {self.max_hp}]")
        if hp == 0 and self.coordinate is not None:
            raise ValueError(f"fighter {self.id}: a defeated fighter cannot be on the board")
        return self

    def to_fighter(self) -> Fighter:
        return Fighter(
            fighter_id=self.id,
            name=self.name,
            defense=self.defense,
            loadout=Loadout(atk=self.loadout.atk, dmg=self.loadout.dmg),
            max_hp=self.max_hp,
            current_hp=self.max_hp if self.current_hp is None else self.current_hp,
            coordinate=(
                HexCoordinate.from_sequence(self.coordinate)
                if self.coordinate is not None else None
            ),
        )


class SideSpec(BaseModel):
    """Starting data for one side."""
    id: Literal["A", "B"]
    fighters: list[FighterSpec] = Field(default_factory=list)
    victory_point: int = Field(0, ge=0)

    def to_side(self) -> SideState:
        return SideState(
            side_id=self.id,
            fighters=[f.to_fighter() for f in self.fighters],
            victory_point=self.victory_point,
        )


class RosterSpec(BaseModel):
    """Both sides' starting rosters."""
    sides: list[SideSpec]

    @model_validator(mode="after")
    def _check_roster(self) -> RosterSpec:
        side_ids = tuple(s.id for s in self.sides)
        if side_ids != SIDE_IDS:
            raise ValueError(f"roster needs sides {SIDE_IDS} in order, got {side_ids}")

        seen: set[int] = set()
        for side in self.sides:
            for fighter in side.fighters:
                if fighter.id in seen:
                    raise ValueError(f"fighter id {fighter.id} appears more than once")
                seen.add(fighter.id)
        return self

    def to_state(self) -> BattleState:
        """Build the initial BattleState."""
        return BattleState.create(side.to_side() for side in self.sides)


def load_roster(path: str | Path) -> RosterSpec:
    """Load and validate a roster from a JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    roster = RosterSpec.model_validate_json(text)
    logger.debug(
        "Loaded roster from %s: %s",
        path,
        {s.id: len(s.fighters) for s in roster.sides},
    )
    return roster


DEFAULT_ROSTER_DATA = {
    "sides": [
        {
            "id": "A",
            "fighters": [
                {"id": 1, "name": "Vanguard", "def": 3, "move": {"atk": 2, "dmg": 3}, "max_hp": 6, "coordinate": [0, 1]},
                {"id": 2, "name": "Archer", "def": 1, "move": {"atk": 3, "dmg": 2}, "max_hp": 4, "coordinate": [0, 3]},
                {"id": 3, "name": "Lancer", "def": 2, "move": {"atk": 1, "dmg": 4}, "max_hp": 5, "coordinate": [0, 5]},
            ],
        },
        {
            "id": "B",
            "fighters": [
                {"id": 4, "name": "Sentinel", "def": 3, "move": {"atk": 2, "dmg": 3}, "max_hp": 6, "coordinate": [6, 1]},
                {"id": 5, "name": "Slinger", "def": 1, "move": {"atk": 3, "dmg": 2}, "max_hp": 4, "coordinate": [6, 3]},
                {"id": 6, "name": "Raider", "def": 2, "move": {"atk": 1, "dmg": 4}, "max_hp": 5, "coordinate": [6, 5]},
            ],
        },
    ],
}


def default_roster() -> RosterSpec:
    """The stock three-versus-three roster."""
    return RosterSpec.model_validate(DEFAULT_ROSTER_DATA)

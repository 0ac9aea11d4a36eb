"""
Pydantic Schemas - Read models for the UI layer.

The UI reads these snapshots to decide what to offer next: whose turn,
which phase, each side's fighters and score, and the winner once decided.
They are plain data; mutating them never touches the engine.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Phase(str, Enum):
    """Sub-steps of one fighter's turn segment."""
    SELECT_FIGHTER = "SELECT_FIGHTER"
    SELECT_MOVE = "SELECT_MOVE"
    CONFIRM_MOVE = "CONFIRM_MOVE"
    SELECT_ATTACK = "SELECT_ATTACK"
    CONFIRM_ATTACK = "CONFIRM_ATTACK"


class CoordinateInfo(BaseModel):
    """A hex cell in axial coordinates."""
    q: int
    r: int

    model_config = {"from_attributes": True}


class FighterInfo(BaseModel):
    """Fighter information for display."""
    fighter_id: int
    name: str
    defense: int
    atk: int
    dmg: int
    max_hp: int
    current_hp: int
    coordinate: Optional[CoordinateInfo] = None
    is_alive: bool = True


class SideInfo(BaseModel):
    """Side information for display."""
    side_id: str
    victory_point: int = 0
    is_current_turn: bool = False
    fighters: list[FighterInfo] = Field(default_factory=list)


class SelectionInfo(BaseModel):
    """Current UI selections."""
    selected_fighter: Optional[int] = None
    target_fighter: Optional[int] = None
    selected_hex: Optional[CoordinateInfo] = None


class GameInfo(BaseModel):
    """Everything the UI needs to render the current game."""
    which_turn: str
    current_turn_num: int
    max_turn_num: int
    phase: Phase
    which_won: Optional[str] = None
    is_over: bool = False
    sides: list[SideInfo] = Field(default_factory=list)
    selection: SelectionInfo = Field(default_factory=SelectionInfo)

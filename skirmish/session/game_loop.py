"""
Game Loop - Composes the action engine with the turn controller.

The loop:
1. UI sets phase and selections on the controller
2. UI issues an intent
3. Engine validates and applies it to the roster
4. If the intent was a move, the controller advances the turn
5. UI reads the snapshot and offers the next choice
6. Repeat until the controller names a winner

The engine never calls into the controller; this class is the only place
the two are sequenced.
"""

from __future__ import annotations
from typing import Callable
import logging
import random

from ..config import DEFAULT_RULES, RulesConfig
from ..engine_core.action import ActionResult
from ..engine_core.combat import CombatResolver
from ..engine_core.engine import ActionEngine, HitEffectSink
from ..engine_core.errors import InvalidStateError
from ..engine_core.state import BattleState, Fighter, HexCoordinate, SideId, SideState
from ..roster import RosterSpec, default_roster
from ..schemas import (
    CoordinateInfo,
    FighterInfo,
    GameInfo,
    Phase,
    SelectionInfo,
    SideInfo,
)
from .turn_controller import TurnController
from .winner import get_winner_policy

logger = logging.getLogger(__name__)


class GameLoop:
    """
    The main game driver for one local match.

    Usage:
        loop = GameLoop.create(config=RulesConfig(seed=42))
        loop.subscribe(renderer.show_hit)

        loop.set_selected_fighter(1)
        loop.set_phase(Phase.CONFIRM_MOVE)
        loop.move(1, HexCoordinate(1, 1))      # ends side A's segment

        loop.attack(4, 1, HexCoordinate(1, 1))
        info = loop.snapshot()
    """

    def __init__(self, engine: ActionEngine, controller: TurnController):
        self.engine = engine
        self.controller = controller

    @classmethod
    def create(
        cls,
        roster: RosterSpec | BattleState | None = None,
        config: RulesConfig | None = None,
        rng: random.Random | None = None,
        roll: Callable[[], float] | None = None,
    ) -> GameLoop:
        """Build engine and controller from a roster and rules config."""
        config = config or DEFAULT_RULES
        if roster is None:
            roster = default_roster()
        state = roster.to_state() if isinstance(roster, RosterSpec) else roster

        engine = ActionEngine(
            state,
            resolver=CombatResolver.from_config(config, rng=rng, roll=roll),
        )
        controller = TurnController(
            max_turn_num=config.max_turn_num,
            winner_policy=get_winner_policy(config.winner_policy),
            state_provider=lambda: engine.state,
        )
        logger.info(
            "New game: %d turns, winner by %s",
            config.max_turn_num, config.winner_policy.value,
        )
        return cls(engine, controller)

    # -----------------------
    # State
    # -----------------------
    @property
    def state(self) -> BattleState:
        return self.engine.state

    @property
    def which_turn(self) -> SideId:
        return self.controller.which_turn

    @property
    def which_won(self) -> SideId | None:
        return self.controller.which_won

    @property
    def phase(self) -> Phase:
        return self.controller.phase

    def current_side(self) -> SideState:
        return self.engine.current_side(self.controller.which_turn)

    def current_fighters(self) -> list[Fighter]:
        return self.engine.fighters_of(self.controller.which_turn)

    # -----------------------
    # Selection and phase
    # -----------------------
    def set_phase(self, phase: Phase) -> None:
        self.controller.set_phase(phase)

    def set_selected_fighter(self, fighter_id: int | None) -> None:
        self.controller.set_selected_fighter(fighter_id)

    def set_target_fighter(self, fighter_id: int | None) -> None:
        self.controller.set_target_fighter(fighter_id)

    def set_selected_hex(self, coordinate: HexCoordinate | None) -> None:
        self.controller.set_selected_hex(coordinate)

    def subscribe(self, sink: HitEffectSink) -> None:
        self.engine.subscribe(sink)

    # -----------------------
    # Intents
    # -----------------------
    def move(self, fighter_id: int, coordinate: HexCoordinate) -> ActionResult:
        """
        Move a fighter, then hand the turn over.

        A rejected move raises before the turn advances.
        """
        if self.controller.is_over:
            raise InvalidStateError(f"Game is over - side {self.controller.which_won} won")
        result = self.engine.move(fighter_id, coordinate)
        self.controller.switch_turn()
        return result

    def attack(
        self,
        attacker_id: int,
        receiver_id: int,
        coordinate: HexCoordinate,
        roll: float | None = None,
    ) -> ActionResult:
        return self.engine.attack(attacker_id, receiver_id, coordinate, roll=roll)

    def heal(self, receiver_id: int, heal_hp: int) -> ActionResult:
        return self.engine.heal(receiver_id, heal_hp)

    def add_victory_point(self, side_id: SideId) -> ActionResult:
        return self.engine.add_victory_point(side_id)

    # -----------------------
    # Read model
    # -----------------------
    def snapshot(self) -> GameInfo:
        """Build the UI read model for the current state."""
        controller = self.controller
        return GameInfo(
            which_turn=controller.which_turn,
            current_turn_num=controller.current_turn_num,
            max_turn_num=controller.max_turn_num,
            phase=controller.phase,
            which_won=controller.which_won,
            is_over=controller.is_over,
            sides=[
                self._side_to_info(side, side.side_id == controller.which_turn)
                for side in self.engine.sides
            ],
            selection=SelectionInfo(
                selected_fighter=controller.selected_fighter,
                target_fighter=controller.target_fighter,
                selected_hex=(
                    CoordinateInfo.model_validate(controller.selected_hex)
                    if controller.selected_hex is not None else None
                ),
            ),
        )

    def _side_to_info(self, side: SideState, is_current: bool) -> SideInfo:
        return SideInfo(
            side_id=side.side_id,
            victory_point=side.victory_point,
            is_current_turn=is_current,
            fighters=[self._fighter_to_info(f) for f in side.fighters],
        )

    def _fighter_to_info(self, fighter: Fighter) -> FighterInfo:
        return FighterInfo(
            fighter_id=fighter.fighter_id,
            name=fighter.name,
            defense=fighter.defense,
            atk=fighter.loadout.atk,
            dmg=fighter.loadout.dmg,
            max_hp=fighter.max_hp,
            current_hp=fighter.current_hp,
            coordinate=(
                CoordinateInfo.model_validate(fighter.coordinate)
                if fighter.coordinate is not None else None
            ),
            is_alive=fighter.is_alive,
        )

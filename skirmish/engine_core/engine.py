"""
Action Engine - Owner of the authoritative roster.

The engine holds the current BattleState and is its only writer:
each intent goes through the reducer, and the new snapshot replaces the
old one only when the whole intent succeeded. Failures are raised to
the caller; the held state is left exactly as it was.

The engine knows nothing about turns. Sequencing a move with a turn
advance is the caller's job (see session.GameLoop).
"""

from __future__ import annotations
from typing import Callable
import logging

from .state import BattleState, Fighter, HexCoordinate, SideId, SideState
from .action import Action, ActionResult
from .combat import CombatResolver, HitEffect
from .reducer import Reducer
from . import lookup

logger = logging.getLogger(__name__)

HitEffectSink = Callable[[HitEffect], None]


class ActionEngine:
    """
    Applies intents to a single owned BattleState.

    Usage:
        engine = ActionEngine(state, resolver=CombatResolver(rng=random.Random(7)))
        engine.subscribe(renderer.show_hit)

        engine.move(3, HexCoordinate(1, 2))
        result = engine.attack(3, 9, HexCoordinate(2, 2))
    """

    def __init__(
        self,
        state: BattleState,
        resolver: CombatResolver | None = None,
    ):
        state.validate()
        self._state = state
        self.reducer = Reducer(resolver=resolver or CombatResolver())
        self._hit_effect_sinks: list[HitEffectSink] = []

    @property
    def state(self) -> BattleState:
        """The current snapshot. Treat it as read-only."""
        return self._state

    @property
    def sides(self) -> list[SideState]:
        return list(self._state.sides)

    def subscribe(self, sink: HitEffectSink) -> None:
        """Register a callback that receives a HitEffect for every attack."""
        self._hit_effect_sinks.append(sink)

    def unsubscribe(self, sink: HitEffectSink) -> None:
        if sink in self._hit_effect_sinks:
            self._hit_effect_sinks.remove(sink)

    # -----------------------
    # Intents
    # -----------------------
    def dispatch(self, action: Action) -> ActionResult:
        """
        Apply an intent atomically.

        Raises NotFoundError / InvalidStateError when the intent is rejected.
        """
        result = self.reducer.apply(self._state, action)
        result.raise_for_error()

        self._state = result.new_state
        if result.hit_effect is not None:
            self._publish(result.hit_effect)
        return result

    def move(self, fighter_id: int, coordinate: HexCoordinate) -> ActionResult:
        return self.dispatch(Action.move(fighter_id, coordinate))

    def attack(
        self,
        attacker_id: int,
        receiver_id: int,
        coordinate: HexCoordinate,
        roll: float | None = None,
    ) -> ActionResult:
        return self.dispatch(Action.attack(attacker_id, receiver_id, coordinate, roll=roll))

    def heal(self, receiver_id: int, heal_hp: int) -> ActionResult:
        return self.dispatch(Action.heal(receiver_id, heal_hp))

    def add_victory_point(self, side_id: SideId) -> ActionResult:
        return self.dispatch(Action.add_victory_point(side_id))

    def _publish(self, effect: HitEffect) -> None:
        for sink in list(self._hit_effect_sinks):
            sink(effect)

    # -----------------------
    # Lookups
    # -----------------------
    def get_side(self, side_id: SideId) -> SideState:
        return lookup.find_side(self._state, side_id)

    def current_side(self, which_turn: SideId) -> SideState:
        return lookup.current_side(self._state, which_turn)

    def get_fighter(self, fighter_id: int) -> Fighter:
        return lookup.find_fighter(self._state, fighter_id)

    def fighters_of(self, side_id: SideId) -> list[Fighter]:
        return lookup.fighters_of(self._state, side_id)

    def all_fighters(self) -> list[Fighter]:
        return lookup.all_fighters(self._state)

    def fighter_at(
        self,
        coordinate: HexCoordinate,
        side_id: SideId | None = None,
    ) -> Fighter | None:
        return lookup.find_fighter_at(self._state, coordinate, side_id)

    def side_of(self, fighter_id: int) -> SideId:
        return lookup.find_side_of_fighter(self._state, fighter_id)

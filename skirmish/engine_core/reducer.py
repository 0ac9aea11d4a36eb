"""
Reducer - Applies intents to battle state.

The reducer is the single point of roster mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates references before building the new snapshot
- Returns ActionResult with success/failure; the input state is never touched
- Delegates combat math to CombatResolver
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import BattleState, Fighter, SideState
from .action import Action, ActionType, ActionResult
from .combat import CombatResolver, HitEffect
from .errors import EngineError, InvalidStateError
from .lookup import find_fighter, find_side, find_side_of_fighter

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies intents to battle state.

    Stateless - all state is in BattleState.
    The resolver provides the combat rules and the random source.
    """
    resolver: CombatResolver = field(default_factory=CombatResolver)

    def apply(self, state: BattleState, action: Action) -> ActionResult:
        """
        Apply an action to the battle state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=InvalidStateError.code,
            )

        try:
            result = handler(state, action)
        except EngineError as e:
            logger.warning("Rejected %s: %s", action.action_type.value, e)
            return ActionResult.failure(str(e), error_code=e.code)

        # Log action to history if successful
        if result.success and result.new_state is not None:
            result.new_state.action_history.append(action)
            logger.debug("Applied %s: %s", action.action_type.value, "; ".join(result.state_changes))
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.ATTACK: self._handle_attack,
            ActionType.HEAL: self._handle_heal,
            ActionType.ADD_VICTORY_POINT: self._handle_add_victory_point,
        }
        return handlers.get(action_type)

    def _handle_move(self, state: BattleState, action: Action) -> ActionResult:
        """
        Handle move action.

        No range, collision, or terrain checks: whoever issues the intent
        has already decided the destination is legal.
        """
        coordinate = action.payload.coordinate
        if coordinate is None:
            raise InvalidStateError("Move requires a destination coordinate")

        fighter = find_fighter(state, action.payload.fighter_id)
        if not fighter.is_alive:
            raise InvalidStateError(f"Fighter {fighter.name} is defeated and cannot move")

        new_state = state.with_fighter(fighter.moved_to(coordinate))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{fighter.name} moved to {coordinate}"],
        )

    def _handle_attack(self, state: BattleState, action: Action) -> ActionResult:
        """Handle attack action: roll, classify, then apply damage."""
        payload = action.payload
        if payload.coordinate is None:
            raise InvalidStateError("Attack requires a target coordinate")

        attacker = find_fighter(state, payload.fighter_id)
        attacker_side = find_side(state, find_side_of_fighter(state, attacker.fighter_id))
        receiver = find_fighter(state, payload.target_id)

        if not attacker.is_alive:
            raise InvalidStateError(f"Fighter {attacker.name} is defeated and cannot attack")
        if not receiver.is_alive:
            raise InvalidStateError(f"Fighter {receiver.name} is already defeated")

        outcome = self.resolver.resolve(attacker, receiver, roll=payload.params.get("roll"))
        hit_effect = HitEffect(coordinate=payload.coordinate, hit_type=outcome.hit_type)
        changes = [
            f"{attacker.name} attacked {receiver.name}: {outcome.hit_type.value} "
            f"(roll {outcome.roll:.2f})"
        ]

        new_state = state._copy_with()
        if outcome.damage > 0:
            new_state, damage_changes = self._apply_damage(
                new_state, receiver, outcome.damage, attacker_side
            )
            changes.extend(damage_changes)

        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            hit_effect=hit_effect,
        )

    def _handle_heal(self, state: BattleState, action: Action) -> ActionResult:
        """Handle heal action. Healing is a recognised no-op for now."""
        return ActionResult.success_with_state(
            state._copy_with(),
            changes=[f"Heal on fighter {action.payload.target_id} had no effect"],
        )

    def _handle_add_victory_point(self, state: BattleState, action: Action) -> ActionResult:
        """Handle victory point award."""
        side = find_side(state, action.payload.side_id)
        new_state = state.with_side(side.with_victory_points(1))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Side {side.side_id} scored a victory point ({side.victory_point + 1})"],
        )

    def _apply_damage(
        self,
        state: BattleState,
        receiver: Fighter,
        damage: int,
        attacker_side: SideState,
    ) -> tuple[BattleState, list[str]]:
        """
        Subtract damage from the receiver.

        Reaching zero clamps HP, removes the fighter from the board, and
        credits the attacking side with a victory point.
        """
        damaged = receiver.damaged(damage)
        new_state = state.with_fighter(damaged)
        changes = [f"{receiver.name} took {damage} damage ({damaged.current_hp}/{receiver.max_hp} HP)"]

        if not damaged.is_alive:
            scoring_side = find_side(new_state, attacker_side.side_id)
            new_state = new_state.with_side(scoring_side.with_victory_points(1))
            changes.append(f"{receiver.name} was defeated; side {attacker_side.side_id} scores")
            logger.info(
                "%s defeated by side %s", receiver.name, attacker_side.side_id
            )

        return new_state, changes


def apply_action(
    state: BattleState,
    action: Action,
    resolver: CombatResolver | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(resolver=resolver or CombatResolver())
    return reducer.apply(state, action)

"""
Turn Controller - Whose turn it is, what phase, and who won.

Turn order is first side, then second side; the counter goes up when play
wraps back to the first side. When the second side finishes the last turn,
the game ends and the winner policy names the winner. After that the
controller is terminal: further switch_turn calls change nothing.

Phase is advisory. It tells the UI which affordance to offer next and is
never checked against the intents being applied.
"""

from __future__ import annotations
from typing import Callable
import logging

from ..engine_core.state import BattleState, HexCoordinate, SideId, SIDE_IDS
from ..schemas import Phase
from .winner import WinnerPolicy, first_side_wins

logger = logging.getLogger(__name__)


class TurnController:
    """
    Turn and phase state machine plus the transient UI selections.

    Usage:
        controller = TurnController(max_turn_num=10)
        controller.set_phase(Phase.SELECT_MOVE)
        controller.switch_turn()

        if controller.is_over:
            show_winner(controller.which_won)
    """

    def __init__(
        self,
        max_turn_num: int = 10,
        side_order: tuple[SideId, SideId] = SIDE_IDS,
        winner_policy: WinnerPolicy = first_side_wins,
        state_provider: Callable[[], BattleState] | None = None,
    ):
        if max_turn_num < 1:
            raise ValueError("max_turn_num must be >= 1")
        if state_provider is None and winner_policy is not first_side_wins:
            raise ValueError("winner_policy needs a state_provider to read the roster")
        self.max_turn_num = max_turn_num
        self.side_order = side_order
        self.winner_policy = winner_policy
        self._state_provider = state_provider

        self.which_turn: SideId = side_order[0]
        self.current_turn_num = 1
        self.which_won: SideId | None = None
        self.phase = Phase.SELECT_FIGHTER

        # Transient UI selection, reset by the surrounding flow
        self.selected_fighter: int | None = None
        self.target_fighter: int | None = None
        self.selected_hex: HexCoordinate | None = None

    @property
    def first_side(self) -> SideId:
        return self.side_order[0]

    @property
    def second_side(self) -> SideId:
        return self.side_order[1]

    @property
    def is_last_turn(self) -> bool:
        """True while the second side is playing the final turn."""
        return (
            self.current_turn_num == self.max_turn_num
            and self.which_turn == self.second_side
        )

    @property
    def is_over(self) -> bool:
        return self.which_won is not None

    def switch_turn(self) -> None:
        """
        Hand the turn to the other side, or end the game.

        The terminal check uses the state before the call: if the second
        side was on the last turn, the winner is decided instead of toggling.
        """
        if self.is_over:
            logger.debug("switch_turn ignored: side %s already won", self.which_won)
            return

        if self.is_last_turn:
            self.which_won = self.winner_policy(
                self._winner_state(), self.first_side, self.second_side
            )
            logger.info(
                "Game over after turn %d: side %s wins",
                self.current_turn_num, self.which_won,
            )
            return

        if self.which_turn == self.first_side:
            self.which_turn = self.second_side
        else:
            self.which_turn = self.first_side
            self.current_turn_num += 1
        logger.info("Turn %d: side %s to act", self.current_turn_num, self.which_turn)

    def _winner_state(self) -> BattleState | None:
        if self._state_provider is None:
            return None
        return self._state_provider()

    def set_phase(self, phase: Phase) -> None:
        self.phase = phase

    def set_selected_fighter(self, fighter_id: int | None) -> None:
        self.selected_fighter = fighter_id

    def set_target_fighter(self, fighter_id: int | None) -> None:
        self.target_fighter = fighter_id

    def set_selected_hex(self, coordinate: HexCoordinate | None) -> None:
        self.selected_hex = coordinate

    def clear_selection(self) -> None:
        """Reset all three selections."""
        self.selected_fighter = None
        self.target_fighter = None
        self.selected_hex = None

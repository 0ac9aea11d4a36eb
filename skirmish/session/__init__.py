"""
Session Module - Drives one local match.

A session ties together:
- The action engine (roster and intents)
- The turn controller (turn order, phase, selections, winner)

State is in-memory only and lives as long as the GameLoop object.
"""

from .turn_controller import Phase, TurnController
from .winner import WinnerPolicy, first_side_wins, most_victory_points, get_winner_policy
from .game_loop import GameLoop

__all__ = [
    "Phase",
    "TurnController",
    "WinnerPolicy",
    "first_side_wins",
    "most_victory_points",
    "get_winner_policy",
    "GameLoop",
]

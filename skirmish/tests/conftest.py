"""
Pytest fixtures for Skirmish tests.
"""

import random

import pytest

from ..config import RulesConfig
from ..engine_core.combat import CombatResolver
from ..engine_core.engine import ActionEngine
from ..engine_core.state import BattleState
from ..roster import RosterSpec
from ..session import GameLoop


# Knight (atk 1, dmg 4) against Guard (def 3, hp 3):
#   correction 2, hit >= 7, critical >= 9.4
# Knight against Brute (def 2, hp 6):
#   correction 1, hit >= 6, critical >= 9.2
ROSTER_DATA = {
    "sides": [
        {
            "id": "A",
            "fighters": [
                {"id": 1, "name": "Knight", "def": 1, "move": {"atk": 1, "dmg": 4}, "max_hp": 5, "coordinate": [0, 0]},
                {"id": 2, "name": "Scout", "def": 0, "move": {"atk": 2, "dmg": 2}, "max_hp": 3, "coordinate": [0, 1]},
            ],
        },
        {
            "id": "B",
            "fighters": [
                {"id": 3, "name": "Guard", "def": 3, "move": {"atk": 1, "dmg": 2}, "max_hp": 3, "coordinate": [1, 0]},
                {"id": 4, "name": "Brute", "def": 2, "move": {"atk": 3, "dmg": 3}, "max_hp": 6, "coordinate": [1, 1]},
            ],
        },
    ],
}


@pytest.fixture
def roster() -> RosterSpec:
    """Two fighters per side."""
    return RosterSpec.model_validate(ROSTER_DATA)


@pytest.fixture
def battle_state(roster: RosterSpec) -> BattleState:
    """Initial battle state built from the test roster."""
    return roster.to_state()


@pytest.fixture
def resolver() -> CombatResolver:
    """Resolver with a fixed seed."""
    return CombatResolver(rng=random.Random(1234))


@pytest.fixture
def engine(battle_state: BattleState, resolver: CombatResolver) -> ActionEngine:
    """Engine owning the test battle state."""
    return ActionEngine(battle_state, resolver=resolver)


@pytest.fixture
def short_game(roster: RosterSpec) -> GameLoop:
    """A seeded three-turn game, winner decided by victory points."""
    return GameLoop.create(roster=roster, config=RulesConfig(max_turn_num=3, seed=99))

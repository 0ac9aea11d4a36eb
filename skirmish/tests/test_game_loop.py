"""
Integration tests - Engine and controller driven together.

Tests the complete flow:
1. Create a game from roster and config
2. Move / attack / score through the loop
3. Reach the last turn and read the winner
"""

import random

import pytest

from ..config import RulesConfig, WinnerPolicyName
from ..engine_core.combat import HitType
from ..engine_core.errors import InvalidStateError, NotFoundError
from ..engine_core.state import BattleState, HexCoordinate, SideState, SIDE_A, SIDE_B
from ..session import GameLoop, Phase


def play_to_end(loop: GameLoop) -> None:
    """Alternate moves with whoever's first fighter is alive until the game ends."""
    while not loop.controller.is_over:
        fighter = next(f for f in loop.current_fighters() if f.is_alive)
        loop.move(fighter.fighter_id, fighter.coordinate)


class TestMoveAdvancesTurn:
    """Tests for sequencing a move with a turn switch."""

    def test_move_switches_turn(self, short_game):
        short_game.move(1, HexCoordinate(0, 2))

        assert short_game.which_turn == SIDE_B
        assert short_game.state.get_side(SIDE_A).get_fighter(1).coordinate == HexCoordinate(0, 2)

    def test_failed_move_does_not_switch_turn(self, short_game):
        """Move on a nonexistent fighter fails and leaves the turn alone."""
        with pytest.raises(NotFoundError):
            short_game.move(404, HexCoordinate(0, 2))

        assert short_game.which_turn == SIDE_A
        assert short_game.controller.current_turn_num == 1

    def test_attack_does_not_switch_turn(self, short_game):
        short_game.attack(1, 4, HexCoordinate(1, 1), roll=0.0)
        assert short_game.which_turn == SIDE_A

    def test_heal_and_score_do_not_switch_turn(self, short_game):
        short_game.heal(1, 2)
        short_game.add_victory_point(SIDE_A)

        assert short_game.which_turn == SIDE_A
        assert short_game.state.get_side(SIDE_A).victory_point == 1

    def test_current_side_follows_turn(self, short_game):
        assert short_game.current_side().side_id == SIDE_A
        short_game.move(1, HexCoordinate(0, 2))
        assert short_game.current_side().side_id == SIDE_B
        assert [f.fighter_id for f in short_game.current_fighters()] == [3, 4]


class TestGameEnd:
    """Tests for reaching the end of the game."""

    def test_game_ends_after_last_turn(self, short_game):
        play_to_end(short_game)

        assert short_game.which_won is not None
        assert short_game.controller.current_turn_num == 3
        assert short_game.which_turn == SIDE_B

    def test_tie_goes_to_first_side(self, short_game):
        play_to_end(short_game)
        assert short_game.which_won == SIDE_A

    def test_victory_points_decide_winner(self, short_game):
        short_game.add_victory_point(SIDE_B)
        play_to_end(short_game)
        assert short_game.which_won == SIDE_B

    def test_first_side_policy(self, roster):
        loop = GameLoop.create(
            roster=roster,
            config=RulesConfig(max_turn_num=2, winner_policy=WinnerPolicyName.FIRST_SIDE),
        )
        loop.add_victory_point(SIDE_B)
        play_to_end(loop)
        assert loop.which_won == SIDE_A

    def test_move_after_game_over_rejected(self, short_game):
        """No turn-advancing action is accepted once a winner is set."""
        play_to_end(short_game)
        before = short_game.state

        with pytest.raises(InvalidStateError):
            short_game.move(1, HexCoordinate(5, 5))

        assert short_game.state is before
        assert short_game.state.get_side(SIDE_A).get_fighter(1).coordinate != HexCoordinate(5, 5)


class TestHitEffects:
    """Tests for hit-effect delivery to subscribers."""

    def test_subscriber_receives_each_attack(self, short_game):
        received = []
        short_game.subscribe(received.append)

        short_game.attack(1, 4, HexCoordinate(1, 1), roll=0.0)
        short_game.attack(1, 4, HexCoordinate(1, 1), roll=7.0)

        assert [e.hit_type for e in received] == [HitType.DEFENDED, HitType.ATTACKED]
        assert all(e.coordinate == HexCoordinate(1, 1) for e in received)

    def test_rejected_attack_publishes_nothing(self, short_game):
        received = []
        short_game.subscribe(received.append)

        with pytest.raises(NotFoundError):
            short_game.attack(1, 404, HexCoordinate(1, 1), roll=9.9)

        assert received == []

    def test_non_attack_publishes_nothing(self, short_game):
        received = []
        short_game.subscribe(received.append)

        short_game.move(1, HexCoordinate(0, 2))
        short_game.heal(1, 1)

        assert received == []


class TestDeterminism:
    """Tests for reproducible combat with a seed."""

    def test_same_seed_same_battle(self, roster):
        def run(seed):
            loop = GameLoop.create(roster=roster, config=RulesConfig(seed=seed))
            outcomes = []
            for _ in range(3):
                if not loop.state.get_side(SIDE_B).get_fighter(4).is_alive:
                    break
                result = loop.attack(2, 4, HexCoordinate(1, 1))
                outcomes.append(result.hit_effect.hit_type)
            return outcomes, loop.state.get_side(SIDE_B).get_fighter(4).current_hp

        assert run(2024) == run(2024)

    def test_injected_rng(self, roster):
        loop = GameLoop.create(roster=roster, rng=random.Random(3))
        other = GameLoop.create(roster=roster, rng=random.Random(3))

        first = loop.attack(1, 4, HexCoordinate(1, 1)).hit_effect
        second = other.attack(1, 4, HexCoordinate(1, 1)).hit_effect

        assert first == second


class TestHealthInvariants:
    """Random battles never break the HP and board invariants."""

    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 1000])
    def test_random_battle(self, roster, seed):
        loop = GameLoop.create(roster=roster, config=RulesConfig(seed=seed))
        chooser = random.Random(seed)

        for _ in range(200):
            side_a = [f for f in loop.engine.fighters_of(SIDE_A) if f.is_alive]
            side_b = [f for f in loop.engine.fighters_of(SIDE_B) if f.is_alive]
            if not side_a or not side_b:
                break
            attackers, receivers = (side_a, side_b) if chooser.random() < 0.5 else (side_b, side_a)
            attacker = chooser.choice(attackers)
            receiver = chooser.choice(receivers)
            loop.attack(attacker.fighter_id, receiver.fighter_id, receiver.coordinate)

            for fighter in loop.engine.all_fighters():
                assert 0 <= fighter.current_hp <= fighter.max_hp
                if fighter.current_hp == 0:
                    assert fighter.coordinate is None

        defeated = sum(1 for f in loop.engine.all_fighters() if not f.is_alive)
        total_points = sum(s.victory_point for s in loop.state.sides)
        assert total_points == defeated


class TestSnapshot:
    """Tests for the UI read model."""

    def test_snapshot_reflects_state(self, short_game):
        short_game.set_phase(Phase.SELECT_ATTACK)
        short_game.set_selected_fighter(1)
        short_game.set_target_fighter(3)
        short_game.set_selected_hex(HexCoordinate(1, 0))
        short_game.attack(1, 3, HexCoordinate(1, 0), roll=9.5)

        info = short_game.snapshot()

        assert info.which_turn == SIDE_A
        assert info.current_turn_num == 1
        assert info.max_turn_num == 3
        assert info.phase is Phase.SELECT_ATTACK
        assert info.sides[0].is_current_turn
        assert info.sides[0].victory_point == 1
        guard = info.sides[1].fighters[0]
        assert guard.current_hp == 0
        assert guard.coordinate is None
        assert not guard.is_alive
        assert info.selection.selected_hex.q == 1

    def test_snapshot_serialises(self, short_game):
        data = short_game.snapshot().model_dump()

        assert data["which_won"] is None
        assert data["phase"] == "SELECT_FIGHTER"
        assert data["sides"][0]["fighters"][0]["coordinate"] == {"q": 0, "r": 0}
        assert data["selection"]["selected_fighter"] is None

    def test_snapshot_after_game_over(self, short_game):
        play_to_end(short_game)
        info = short_game.snapshot()
        assert info.is_over
        assert info.which_won == SIDE_A


class TestCreate:
    """Tests for building a game from a prepared state."""

    def test_accepts_battle_state(self, battle_state):
        loop = GameLoop.create(roster=battle_state, config=RulesConfig(max_turn_num=2))

        assert loop.state is battle_state
        assert loop.which_turn == SIDE_A

    def test_rejects_state_with_shared_fighter_id(self, battle_state):
        """One id on both sides would let one attack defeat two fighters."""
        guard = battle_state.get_side(SIDE_B).get_fighter(3)
        clash = BattleState(sides=[
            battle_state.get_side(SIDE_A),
            SideState(SIDE_B, [guard._copy_with(fighter_id=1)]),
        ])

        with pytest.raises(ValueError, match="more than once"):
            GameLoop.create(roster=clash)

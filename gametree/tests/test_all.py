"""
Test Suite for gametree
=======================

Run with: python -m pytest gametree/tests -v
"""

import pytest
import numpy as np
from dataclasses import dataclass

# Core imports
from gametree.core.player import TwoPlayer, NPlayer, OnePlayer
from gametree.core.outcome import Win, Draw, DRAW, is_win_for, outcome_value
from gametree.core.errors import (
    GameError, IllegalAction, GameOver, NoLegalActions,
    StrategyFailure, EvaluatorFailure,
)
from gametree.core.game import GameState, Ongoing, Finished

# Game imports
from gametree.games.tic_tac_toe import ALL_ACTIONS, Piece, TicTacToe, parse_square

# Algorithm imports
from gametree.algorithms.evaluator import (
    Evaluator, RandomEvaluator, EndStateEvaluator, MinimaxEvaluator, evaluate_all
)
from gametree.algorithms.strategy import GreedyStrategy, MinMax, ScalarMinMax, compare
from gametree.algorithms.player import GamePlayer

# Analysis imports
from gametree.analysis.tree import solve, action_values, reachable_states


def play(state, *squares):
    """Apply moves by square number through the checked transition."""
    for square in squares:
        state = state.apply(ALL_ACTIONS[square]).state
    return state


@dataclass(frozen=True)
class StuckGame(GameState):
    """Never reports an outcome and runs out of moves after one ply."""
    ply: int = 0

    def actions(self):
        return ("step",)

    def is_legal(self, action):
        return self.ply == 0

    def apply_unchecked(self, action):
        return StuckGame(self.ply + 1)

    def outcome(self):
        return None

    def current_player(self):
        return TwoPlayer.FIRST if self.ply % 2 == 0 else TwoPlayer.SECOND


class TableEvaluator(Evaluator):
    """Returns fixed values per action."""

    def __init__(self, values):
        super().__init__()
        self.values = values

    def evaluate(self, state, action):
        return self.values[action]


class TestPlayers:
    """Test player value types."""

    def test_two_player_cycle(self):
        assert TwoPlayer.FIRST.next() == TwoPlayer.SECOND
        assert TwoPlayer.SECOND.next() == TwoPlayer.FIRST
        assert TwoPlayer.FIRST.last() == TwoPlayer.SECOND
        assert TwoPlayer.FIRST.opponent() == TwoPlayer.SECOND

    def test_two_player_indexing(self):
        assert TwoPlayer.FIRST.index == 0
        assert TwoPlayer.SECOND.number == 2
        assert str(TwoPlayer.SECOND) == "Player 2"
        assert str(TwoPlayer.FIRST) == "Player 1"

    def test_n_player_wraps_around(self):
        player = NPlayer(3, 2)
        assert player.next() == NPlayer(3, 0)
        assert NPlayer(3, 0).last() == NPlayer(3, 2)
        assert player.next().next().next() == player

    def test_n_player_validation(self):
        with pytest.raises(ValueError):
            NPlayer(2)
        with pytest.raises(ValueError):
            NPlayer(3, 3)

    def test_one_player(self):
        player = OnePlayer()
        assert player.next() == player
        assert player.last() == player
        assert str(player) == "Player 1"


class TestOutcome:
    """Test outcome value types."""

    def test_equality_and_hashing(self):
        assert Win(TwoPlayer.FIRST) == Win(TwoPlayer.FIRST)
        assert Win(TwoPlayer.FIRST) != Win(TwoPlayer.SECOND)
        assert Draw() == DRAW
        assert len({Win(TwoPlayer.FIRST), Win(TwoPlayer.FIRST), DRAW}) == 2

    def test_outcome_value(self):
        win = Win(TwoPlayer.FIRST)
        assert outcome_value(win, TwoPlayer.FIRST) == 1
        assert outcome_value(win, TwoPlayer.SECOND) == -1
        assert outcome_value(DRAW, TwoPlayer.SECOND) == 0
        assert is_win_for(win, TwoPlayer.FIRST)
        assert not is_win_for(DRAW, TwoPlayer.FIRST)


class TestGame:
    """Test the game contract through tic-tac-toe."""

    def test_initial_state(self):
        state = TicTacToe()

        assert state.current_player() == TwoPlayer.FIRST
        assert not state.is_finished()
        assert list(state.legal_actions()) == list(ALL_ACTIONS)

    def test_legal_actions_fresh_each_call(self):
        state = play(TicTacToe(), 4)

        first = list(state.legal_actions())
        second = list(state.legal_actions())

        assert first == second
        assert len(first) == 8
        assert ALL_ACTIONS[4] not in first

    def test_apply_is_pure(self):
        state = TicTacToe()
        transition = state.apply(ALL_ACTIONS[4])

        assert isinstance(transition, Ongoing)
        assert state == TicTacToe()
        assert transition.state.current_player() == TwoPlayer.SECOND
        assert transition.state.piece_at(4) == Piece.X

    def test_states_are_hashable(self):
        a = play(TicTacToe(), 4, 0)
        b = play(TicTacToe(), 4, 0)
        assert a == b
        assert len({a, b}) == 1

    def test_win_at_exact_ply(self):
        # X: center, O: edge, X: corner, O: corner, X: opposite corner
        state = TicTacToe()
        for square in (4, 1, 0, 2):
            transition = state.apply(ALL_ACTIONS[square])
            assert isinstance(transition, Ongoing)
            state = transition.state

        transition = state.apply(ALL_ACTIONS[8])

        assert isinstance(transition, Finished)
        assert transition.outcome == Win(TwoPlayer.FIRST)
        assert transition.state.outcome() == Win(TwoPlayer.FIRST)

    def test_draw(self):
        state = play(TicTacToe(), 4, 0, 8, 2, 1, 7, 6, 5)
        transition = state.apply(ALL_ACTIONS[3])

        assert isinstance(transition, Finished)
        assert transition.outcome == DRAW

    def test_illegal_action(self):
        state = play(TicTacToe(), 4)

        with pytest.raises(IllegalAction) as info:
            state.apply(ALL_ACTIONS[4])
        assert info.value.state == state
        assert info.value.action == ALL_ACTIONS[4]

    def test_game_over(self):
        state = play(TicTacToe(), 4, 1, 0, 2, 8)

        assert state.is_finished()
        assert list(state.legal_actions()) == []
        with pytest.raises(GameOver):
            state.apply(ALL_ACTIONS[3])

    def test_action_index(self):
        state = TicTacToe()
        for square, action in enumerate(ALL_ACTIONS):
            assert state.action_index(action) == square
            assert action.square == square

    def test_parse_square(self):
        assert parse_square(" 7\n") == ALL_ACTIONS[7]
        assert parse_square("9") is None
        assert parse_square("x") is None

    def test_user_input_skips_bad_lines(self):
        assert TicTacToe().get_user_input(["x", "12", "4"]) == ALL_ACTIONS[4]
        assert TicTacToe().get_user_input([]) is None

    def test_rendering(self):
        rendered = str(play(TicTacToe(), 8, 0))
        assert rendered.splitlines()[0] == "X|_|_"
        assert rendered.splitlines()[2] == "_|_|O"


class TestRandomEvaluator:
    """Test the LCG baseline."""

    def test_lcg_sequence(self):
        evaluator = RandomEvaluator(seed=0)
        state = TicTacToe()

        first = evaluator.evaluate(state, ALL_ACTIONS[0])
        second = evaluator.evaluate(state, ALL_ACTIONS[1])

        assert first == 1013904223
        assert second == (first * 1664525 + 1013904223) % 2 ** 64

    def test_wraparound(self):
        seed = 2 ** 64 - 1
        evaluator = RandomEvaluator(seed=seed)

        value = evaluator.evaluate(TicTacToe(), ALL_ACTIONS[0])

        assert value == (seed * 1664525 + 1013904223) % 2 ** 64
        assert 0 <= value < 2 ** 64

    def test_repeated_pair_is_cached(self):
        evaluator = RandomEvaluator(seed=42)
        state = TicTacToe()

        first = evaluator.evaluate(state, ALL_ACTIONS[3])
        again = evaluator.evaluate(state, ALL_ACTIONS[3])

        assert first == again
        assert evaluator.get_stats()["cache_hits"] == 1
        assert evaluator.get_stats()["nodes_expanded"] == 1

    def test_negative_seed_rejected(self):
        with pytest.raises(ValueError):
            RandomEvaluator(seed=-1)


class TestEndStateEvaluator:
    """Test backward induction."""

    def test_empty_board_is_a_draw(self):
        evaluator = EndStateEvaluator()
        values = evaluate_all(evaluator, TicTacToe())

        assert set(values.values()) == {DRAW}

    def test_matches_exhaustive_solution(self):
        evaluator = EndStateEvaluator()
        table = {}

        for state in reachable_states(TicTacToe()):
            mover = state.current_player()
            expected = action_values(state, table)
            for action in state.legal_actions():
                outcome = evaluator.evaluate(state, action)
                assert outcome_value(outcome, mover) == expected[action]

    def test_immediate_win(self):
        state = play(TicTacToe(), 4, 1, 0, 2)
        evaluator = EndStateEvaluator()

        assert evaluator.evaluate(state, ALL_ACTIONS[8]) == Win(TwoPlayer.FIRST)

    def test_forced_loss(self):
        # X threatens 2-4-6 and 2-5-8; O cannot block both
        state = play(TicTacToe(), 4, 1, 8, 0, 2)
        evaluator = EndStateEvaluator()

        assert evaluator.evaluate(state, ALL_ACTIONS[6]) == Win(TwoPlayer.FIRST)
        assert evaluator.evaluate(state, ALL_ACTIONS[3]) == Win(TwoPlayer.FIRST)

    def test_memoization_transparency(self):
        evaluator = EndStateEvaluator()
        state = TicTacToe()

        first = evaluator.evaluate(state, ALL_ACTIONS[4])
        before = evaluator.get_stats()
        second = evaluator.evaluate(state, ALL_ACTIONS[4])
        after = evaluator.get_stats()

        assert first == second
        assert after["nodes_expanded"] == before["nodes_expanded"]
        assert after["cache_hits"] == before["cache_hits"] + 1
        assert after["cache_size"] == before["cache_size"]

    def test_no_legal_actions(self):
        evaluator = EndStateEvaluator()

        with pytest.raises(NoLegalActions) as info:
            evaluator.evaluate(StuckGame(), "step")
        assert info.value.state == StuckGame(1)

    def test_illegal_action_propagates(self):
        with pytest.raises(IllegalAction):
            EndStateEvaluator().evaluate(play(TicTacToe(), 4), ALL_ACTIONS[4])

    def test_clear(self):
        evaluator = EndStateEvaluator()
        evaluator.evaluate(play(TicTacToe(), 4, 0), ALL_ACTIONS[8])
        evaluator.clear()

        assert evaluator.get_stats() == {"nodes_expanded": 0, "cache_hits": 0, "cache_size": 0}


class TestMinimaxEvaluator:
    """Test the scalar variant."""

    def test_agrees_with_end_state(self):
        scalar = MinimaxEvaluator()
        end_state = EndStateEvaluator()

        for opening in [(), (4,), (4, 1), (0, 4, 8)]:
            state = play(TicTacToe(), *opening)
            mover = state.current_player()
            for action in state.legal_actions():
                value = scalar.evaluate(state, action)
                assert value in (-1, 0, 1)
                assert value == outcome_value(end_state.evaluate(state, action), mover)

    def test_no_legal_actions(self):
        with pytest.raises(NoLegalActions):
            MinimaxEvaluator().evaluate(StuckGame(), "step")


class TestStrategies:
    """Test action selection."""

    def test_greedy_picks_greatest(self):
        state = TicTacToe()
        values = {action: 0 for action in ALL_ACTIONS}
        values[ALL_ACTIONS[5]] = 3

        assert GreedyStrategy().best_action(state, TableEvaluator(values)) == ALL_ACTIONS[5]

    def test_greedy_keeps_first_on_ties(self):
        state = TicTacToe()
        values = {action: 1 for action in ALL_ACTIONS}

        assert GreedyStrategy().best_action(state, TableEvaluator(values)) == ALL_ACTIONS[0]

    def test_greedy_incomparable(self):
        state = TicTacToe()
        values = {action: 1.0 for action in ALL_ACTIONS}
        values[ALL_ACTIONS[2]] = float("nan")

        with pytest.raises(EvaluatorFailure) as info:
            GreedyStrategy().best_action(state, TableEvaluator(values))
        assert info.value.actions == [ALL_ACTIONS[0], ALL_ACTIONS[2]]

    def test_compare_mixed_types(self):
        assert compare(1, "a") is None
        assert compare((1, -1), (0, 0)) == 1
        assert compare(0, 0) == 0

    def test_greedy_no_legal_actions(self):
        with pytest.raises(NoLegalActions):
            GreedyStrategy().best_action(StuckGame(1), RandomEvaluator())

    def test_strategy_on_finished_state(self):
        state = play(TicTacToe(), 4, 1, 0, 2, 8)
        with pytest.raises(GameOver):
            MinMax().best_action(state, EndStateEvaluator())

    def test_minmax_takes_win(self):
        state = play(TicTacToe(), 4, 1, 0, 2)
        evaluator = EndStateEvaluator()

        action = MinMax().best_action(state, evaluator)

        assert evaluator.evaluate(state, action) == Win(TwoPlayer.FIRST)

    def test_minmax_blocks(self):
        # O must block X's 0-1-2 row; the block also threatens 2-4-6
        state = play(TicTacToe(), 0, 4, 1)
        assert MinMax().best_action(state, EndStateEvaluator()) == ALL_ACTIONS[2]

    def test_minmax_strategy_failure(self):
        values = {action: None for action in ALL_ACTIONS}

        with pytest.raises(StrategyFailure):
            MinMax().best_action(TicTacToe(), TableEvaluator(values))

    def test_minmax_no_legal_actions(self):
        with pytest.raises(NoLegalActions):
            MinMax().best_action(StuckGame(1), EndStateEvaluator())

    def test_scalar_minmax_takes_win(self):
        state = play(TicTacToe(), 4, 1, 0, 2)
        evaluator = MinimaxEvaluator()

        action = ScalarMinMax().best_action(state, evaluator)

        assert evaluator.evaluate(state, action) == 1


class TestGamePlayer:
    """Integration tests for full game play."""

    def test_minmax_self_play_draws(self):
        player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax())
        final_state, outcome = player.play()

        assert outcome == DRAW
        assert final_state.outcome() == DRAW
        assert len(player.history) == 9

    def test_scalar_minmax_self_play_draws(self):
        _, outcome = GamePlayer(TicTacToe(), MinimaxEvaluator(), ScalarMinMax()).play()
        assert outcome == DRAW

    def test_minmax_never_loses_to_random(self):
        evaluator = EndStateEvaluator()

        for seed in range(8):
            for seat in (TwoPlayer.FIRST, TwoPlayer.SECOND):
                player = GamePlayer(TicTacToe(), evaluator, MinMax())
                _, outcome = player.play_against(
                    RandomEvaluator(seed=seed), GreedyStrategy(), seat=seat
                )
                assert outcome in (DRAW, Win(seat))

    def test_minmax_from_random_positions(self):
        rng = np.random.default_rng(7)
        evaluator = EndStateEvaluator()

        for _ in range(20):
            state = TicTacToe()
            for _ in range(int(rng.integers(0, 4))):
                actions = list(state.legal_actions())
                state = state.apply(actions[rng.integers(len(actions))]).state

            expected = solve(state)
            mover = state.current_player()
            _, outcome = GamePlayer(state, evaluator, MinMax()).play()
            assert outcome_value(outcome, mover) == expected

    def test_on_move_callback(self):
        moves = []
        player = GamePlayer(
            TicTacToe(), EndStateEvaluator(), MinMax(),
            on_move=lambda who, action, state: moves.append((who, action)),
        )
        player.play()

        assert moves == player.history
        assert moves[0][0] == TwoPlayer.FIRST

    def test_interactive_human_never_beats_minmax(self):
        player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax())
        _, outcome = player.play_interactive(
            TwoPlayer.FIRST, get_input=lambda state: next(state.legal_actions())
        )
        assert outcome in (DRAW, Win(TwoPlayer.SECOND))

    def test_interactive_illegal_human_action(self):
        player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax())
        with pytest.raises(IllegalAction):
            player.play_interactive(TwoPlayer.FIRST, get_input=lambda state: ALL_ACTIONS[4])

    def test_interactive_input_exhausted(self):
        player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax())
        with pytest.raises(GameError):
            player.play_interactive(
                TwoPlayer.FIRST, get_input=lambda state: state.get_user_input([])
            )

    def test_interactive_requires_capability(self):
        player = GamePlayer(StuckGame(), EndStateEvaluator(), MinMax())
        with pytest.raises(GameError):
            player.play_interactive(TwoPlayer.FIRST)

    def test_already_finished(self):
        state = play(TicTacToe(), 4, 1, 0, 2, 8)
        final_state, outcome = GamePlayer(state, EndStateEvaluator(), MinMax()).play()

        assert final_state == state
        assert outcome == Win(TwoPlayer.FIRST)


class TestAnalysis:
    """Test the ground-truth tools."""

    def test_solve_empty_board(self):
        assert solve(TicTacToe(), {}) == 0

    def test_solve_without_table_matches(self):
        state = play(TicTacToe(), 4, 1, 8, 0)
        assert solve(state) == solve(state, {})

    def test_action_values(self):
        state = play(TicTacToe(), 4, 1, 0, 2)
        values = action_values(state)

        assert values[ALL_ACTIONS[8]] == 1
        assert set(values) == set(state.legal_actions())

    def test_reachable_states(self):
        states = reachable_states(TicTacToe())

        assert TicTacToe() in states
        assert all(not state.is_finished() for state in states)
        assert play(TicTacToe(), 4, 0) in states

    def test_solve_no_legal_actions(self):
        with pytest.raises(NoLegalActions):
            solve(StuckGame(1))


def run_all_tests():
    """Run all tests manually."""
    print("Running gametree Tests...")

    test_classes = [
        TestPlayers,
        TestOutcome,
        TestGame,
        TestRandomEvaluator,
        TestEndStateEvaluator,
        TestMinimaxEvaluator,
        TestStrategies,
        TestGamePlayer,
        TestAnalysis,
    ]

    total_passed = 0
    total_failed = 0

    for test_class in test_classes:
        print(f"\n{test_class.__name__}:")
        instance = test_class()

        for method_name in dir(instance):
            if method_name.startswith("test_"):
                try:
                    getattr(instance, method_name)()
                    print(f"  ✓ {method_name}")
                    total_passed += 1
                except Exception as e:
                    print(f"  ✗ {method_name}: {e}")
                    total_failed += 1

    print(f"\n{'='*50}")
    print(f"Results: {total_passed} passed, {total_failed} failed")

    return total_failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    exit(0 if success else 1)

#!/usr/bin/env python3
"""
Example: Solving and Playing Tic-Tac-Toe
========================================

This script demonstrates how to:
1. Play perfect tic-tac-toe with the end-state evaluator
2. Pit MinMax against the random baseline
3. Inspect belief states in masked tic-tac-toe
4. Play against the computer from the keyboard

Usage:
    python gametree/examples/play_tic_tac_toe.py
    python gametree/examples/play_tic_tac_toe.py --interactive
    python gametree/examples/play_tic_tac_toe.py --game masked --interactive
"""

import argparse
import logging
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from gametree.core.player import TwoPlayer
from gametree.core.belief import BeliefState
from gametree.games.tic_tac_toe import ALL_ACTIONS, BOARD_GUIDE, TicTacToe
from gametree.games.masked_tic_tac_toe import MaskedTicTacToe
from gametree.algorithms import (
    EndStateEvaluator, GamePlayer, GreedyStrategy, MaskedEvaluator, MinMax, RandomEvaluator
)
from gametree.analysis import belief_statistics


def print_move(player, action, state):
    print(f"\n{player} plays {action}")
    print(state)


def self_play():
    """MinMax against itself: perfect play always draws."""
    print("=" * 60)
    print("MinMax vs MinMax")
    print("=" * 60)

    evaluator = EndStateEvaluator()
    player = GamePlayer(TicTacToe(), evaluator, MinMax(), on_move=print_move)
    _, outcome = player.play()

    print(f"\nResult: {outcome}")
    print(f"Evaluator stats: {evaluator.get_stats()}")


def against_random(seed: int):
    """MinMax (FIRST) against the greedy random baseline."""
    print("\n" + "=" * 60)
    print("MinMax vs Random")
    print("=" * 60)

    player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax(), on_move=print_move)
    _, outcome = player.play_against(
        RandomEvaluator(seed=seed), GreedyStrategy(), seat=TwoPlayer.FIRST
    )
    print(f"\nResult: {outcome}")


def demonstrate_masking():
    """Show what each player knows after a few hidden moves."""
    print("\n" + "=" * 60)
    print("Masked Tic-Tac-Toe")
    print("=" * 60)

    state = MaskedTicTacToe(masked=(ALL_ACTIONS[0], ALL_ACTIONS[1]))
    visited = [state]
    for square in (0, 1, 4, 0):
        state = state.apply(ALL_ACTIONS[square]).state
        visited.append(state)

    print("\nTrue board (God's eye view):")
    print(state)
    print("Public view:")
    print(state.public_view())

    belief = BeliefState.from_history(state)
    print(f"{state.current_player()} knows: {[str(info) for info in belief.info]}")
    print(f"Consistent states: {belief.size}")
    print(f"Belief statistics along the game: {belief_statistics(visited)}")


def interactive(game: str):
    """Play against the computer; the human moves first."""
    if game == "masked":
        state = MaskedTicTacToe(masked=(ALL_ACTIONS[0], ALL_ACTIONS[1]))
        evaluator, strategy = MaskedEvaluator(), GreedyStrategy()
        show = lambda s: s.public_view()
    else:
        state = TicTacToe()
        evaluator, strategy = EndStateEvaluator(), MinMax()
        show = str

    def get_input(current):
        print(show(current))
        print(f"Board positions are as follows:\n{BOARD_GUIDE}")
        print("Type a number between 0 and 8 inclusive and hit enter.")
        return current.get_user_input()

    player = GamePlayer(state, evaluator, strategy)
    final_state, outcome = player.play_interactive(TwoPlayer.FIRST, get_input=get_input)
    print(final_state)
    print(f"Result: {outcome}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Solve and play tic-tac-toe")
    parser.add_argument("--game", choices=["classic", "masked"], default="classic")
    parser.add_argument("--seed", type=int, default=0, help="seed of the random baseline")
    parser.add_argument("--interactive", action="store_true", help="play against the computer")
    parser.add_argument("--verbose", action="store_true", help="log every move")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.interactive:
        interactive(args.game)
        return

    self_play()
    against_random(args.seed)
    demonstrate_masking()


if __name__ == "__main__":
    main()

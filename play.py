#!/usr/bin/env python3
"""
Play TicTacToe against the search engine, or let it play itself.

Usage:
    python play.py                        # Interactive 3x3 game, you are X
    python play.py --human O --grid-size 4
    python play.py --self-play 20 --no-alpha-beta
    python play.py --vs-random 200 --seed 0
"""

import sys
import json
import logging
import argparse
from dataclasses import asdict
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ttt_engine import (
    AIPlayer,
    EngineConfig,
    EngineError,
    apply_move,
    create_game_state,
    empty_cells,
    eval_self_play,
    eval_vs_random,
    format_thinking_data,
    accumulate_totals,
    set_players,
)
from ttt_engine.minimax import TIE_BREAK_POLICIES


def print_board(board, grid_size):
    """Pretty print board with 1-based cell numbers on empty cells."""
    width = len(str(grid_size * grid_size))
    sep = "-+-".join("-" * width for _ in range(grid_size))
    for r in range(grid_size):
        row = board[r * grid_size:(r + 1) * grid_size]
        print(" | ".join(str(v + 1 if isinstance(v, int) else v).rjust(width) for v in row))
        if r < grid_size - 1:
            print(sep)


def play_interactive(config: EngineConfig, human: str):
    """Play a game against the engine."""
    ai = AIPlayer(config)
    state = set_players(create_game_state(config.grid_size), human)
    history = []

    print("\n=== Interactive Game ===")
    print(f"You are {state.human_player}, engine is {state.ai_player} (X plays first)")
    print(f"Enter moves as cell numbers 1-{config.grid_size ** 2}\n")

    while not state.is_over:
        print_board(state.board, config.grid_size)
        print()

        if state.ai_to_move:
            move, thinking = ai.choose_move(state.board_list(), state.ai_player, state.human_player)
            history.append(thinking)
            if thinking is None:
                print(f"Engine opens at cell {move + 1}")
            else:
                totals = accumulate_totals(history)
                print(format_thinking_data(
                    thinking,
                    total_nodes=totals.nodes_evaluated,
                    total_pruned=totals.branches_pruned,
                    total_time_ms=totals.search_time_ms,
                ))
            print()
        else:
            free = [c + 1 for c in empty_cells(state.board)]
            try:
                move = int(input(f"Your move ({free}): ")) - 1
            except ValueError:
                print("Invalid move, try again")
                continue
            except (KeyboardInterrupt, EOFError):
                print("\nGame aborted")
                return

        try:
            state = apply_move(state, move, config.win_length)
        except EngineError as e:
            print(f"{e}, try again")

    print_board(state.board, config.grid_size)
    if state.winner is None:
        print("\nDraw!")
    elif state.winner == state.human_player:
        print("\nYou win!")
    else:
        print("\nEngine wins!")


def main():
    parser = argparse.ArgumentParser(description="Play TicTacToe against a minimax engine")
    parser.add_argument("--grid-size", type=int, default=3, help="Board edge length (3 or 4)")
    parser.add_argument("--win-length", type=int, default=None, help="Marks in a row to win")
    parser.add_argument("--max-depth", type=int, default=3, help="Search depth for 4x4")
    parser.add_argument("--no-alpha-beta", action="store_true", help="Disable alpha-beta pruning")
    parser.add_argument("--tie-break", choices=TIE_BREAK_POLICIES, default="first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--human", choices=["X", "O"], default="X", help="Your mark")
    parser.add_argument("--self-play", type=int, default=0, help="Number of engine vs engine games")
    parser.add_argument("--vs-random", type=int, default=0, help="Number of engine vs random games")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s",
    )

    config = EngineConfig(
        grid_size=args.grid_size,
        win_length=args.win_length,
        use_alpha_beta=not args.no_alpha_beta,
        max_depth=args.max_depth,
        tie_break=args.tie_break,
        seed=args.seed,
    )
    print(f"Config: {json.dumps(asdict(config))}")

    try:
        if args.self_play:
            print(f"\n=== Self-play ({args.self_play} games) ===")
            res = eval_self_play(config, games=args.self_play, progress=True)
            print(f"  X wins: {res['x_win']:.2%}")
            print(f"  Draws:  {res['draw']:.2%}")
            print(f"  O wins: {res['o_win']:.2%}")
            totals = res["totals"]
            print(f"  Searches: {totals.searches} | nodes {totals.nodes_evaluated:,} | "
                  f"cuts {totals.branches_pruned:,} | {totals.search_time_ms:.1f}ms")

        if args.vs_random:
            print(f"\n=== vs Random ({args.vs_random} games) ===")
            res = eval_vs_random(config, games=args.vs_random, seed=args.seed, progress=True)
            print(f"  Wins:   {res['win']:.2%}")
            print(f"  Draws:  {res['draw']:.2%}")
            print(f"  Losses: {res['loss']:.2%}")

        if not args.self_play and not args.vs_random:
            play_interactive(config, args.human)
    except EngineError as e:
        print(f"Error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()

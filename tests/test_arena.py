import unittest
import os
import sys

# Allow running without installing the package
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(os.path.dirname(current_dir), "src"))

from ttt_engine.arena import eval_self_play, eval_vs_random, play_game
from ttt_engine.board import X, empty_cells
from ttt_engine.player import EngineConfig
from ttt_engine.thinking import SearchTotals


def scripted_agent(order):
    """Plays the first cell of order that is still free."""
    def agent(board, mark):
        free = set(empty_cells(board))
        return next(c for c in order if c in free)
    return agent


class TestArena(unittest.TestCase):

    def test_play_game_with_scripted_agents(self):
        result, moves = play_game(scripted_agent([0, 1, 2]), scripted_agent([3, 4, 5]))
        self.assertEqual(result.winner, X)
        self.assertEqual(result.winning_cells, (0, 1, 2))
        self.assertEqual(moves, [0, 3, 1, 4, 2])

    def test_self_play_draws_with_alpha_beta(self):
        res = eval_self_play(EngineConfig(seed=0, use_alpha_beta=True), games=2)
        self.assertEqual(res["draw"], 1.0)
        self.assertIsInstance(res["totals"], SearchTotals)
        self.assertGreater(res["totals"].nodes_evaluated, 0)

    def test_self_play_draws_without_alpha_beta(self):
        res = eval_self_play(EngineConfig(seed=1, use_alpha_beta=False), games=1)
        self.assertEqual(res["draw"], 1.0)
        self.assertEqual(res["totals"].branches_pruned, 0)

    def test_self_play_with_deterministic_opening(self):
        res = eval_self_play(EngineConfig(random_opening=False), games=1)
        self.assertEqual(res["draw"], 1.0)

    def test_engine_never_loses_to_random(self):
        res = eval_vs_random(EngineConfig(seed=3), games=10, seed=3)
        self.assertEqual(res["games"], 10)
        self.assertEqual(res["loss"], 0.0)
        self.assertAlmostEqual(res["win"] + res["draw"], 1.0)

    def test_zero_games_rejected(self):
        with self.assertRaises(ValueError):
            eval_self_play(EngineConfig(), games=0)
        with self.assertRaises(ValueError):
            eval_vs_random(EngineConfig(), games=-1)


if __name__ == '__main__':
    unittest.main(verbosity=2)

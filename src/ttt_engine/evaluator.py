"""
Heuristic evaluation for depth-limited search.

Each line scores on its own:
  - both players present: 0 (dead line)
  - only AI marks:    +10 ** (count - 1)
  - only human marks: -10 ** (count - 1)
  - empty: 0
The position score is the sum over all lines.
"""

from typing import Optional, Sequence

import numpy as np

from .board import Cell
from .lines import line_array


def _occupancy(board: Sequence[Cell], player: str) -> np.ndarray:
    return np.fromiter((cell == player for cell in board), dtype=bool, count=len(board))


def evaluate(
    board: Sequence[Cell],
    ai_player: str,
    human_player: str,
    grid_size: int = 3,
    win_length: Optional[int] = None,
) -> int:
    """
    Score a position from the AI's point of view.

    Positive favours the AI, negative favours the human.
    """
    lines = line_array(grid_size, win_length)
    ai_counts = _occupancy(board, ai_player)[lines].sum(axis=1)
    human_counts = _occupancy(board, human_player)[lines].sum(axis=1)

    ai_only = (ai_counts > 0) & (human_counts == 0)
    human_only = (human_counts > 0) & (ai_counts == 0)

    score = np.power(10, ai_counts[ai_only] - 1).sum()
    score -= np.power(10, human_counts[human_only] - 1).sum()
    return int(score)


def heuristic_bound(grid_size: int = 3, win_length: Optional[int] = None) -> int:
    """
    Largest absolute score evaluate can return for a non-terminal position.

    A non-terminal line holds at most win_length - 1 marks of one player,
    so every line is worth at most 10 ** (win_length - 2).
    """
    lines = line_array(grid_size, win_length)
    k = lines.shape[1]
    if k < 2:
        return 0
    return int(lines.shape[0] * 10 ** (k - 2))

"""
Winning line generation.

A line is a tuple of cell indices (row-major, 0-based) that wins the game
when one player holds all of them. Lines are computed once per
(grid_size, win_length) pair and cached.
"""

from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidLineSpecError

Line = Tuple[int, ...]


def _resolve(grid_size: int, win_length: Optional[int]) -> Tuple[int, int]:
    """Fill in the default win length and reject impossible pairs."""
    k = grid_size if win_length is None else win_length
    if grid_size <= 0 or k <= 0:
        raise InvalidLineSpecError(
            f"grid_size and win_length must be positive (got {grid_size}, {k})"
        )
    if k > grid_size:
        raise InvalidLineSpecError(
            f"win_length {k} exceeds grid_size {grid_size}"
        )
    return grid_size, k


@lru_cache(maxsize=None)
def _lines(n: int, k: int) -> Tuple[Line, ...]:
    starts = range(n - k + 1)
    result = []

    # Rows and columns, interleaved per index
    for i in range(n):
        for s in starts:
            result.append(tuple(i * n + s + t for t in range(k)))
        for s in starts:
            result.append(tuple((s + t) * n + i for t in range(k)))

    # Diagonals (down-right)
    for r in starts:
        for c in starts:
            result.append(tuple((r + t) * n + c + t for t in range(k)))

    # Anti-diagonals (down-left)
    for r in starts:
        for c in starts:
            result.append(tuple((r + t) * n + c + k - 1 - t for t in range(k)))

    # One-cell runs come out of every pass; keep the first of each
    return tuple(dict.fromkeys(result))


def generate_lines(grid_size: int, win_length: Optional[int] = None) -> Tuple[Line, ...]:
    """
    Return every winning line for a square board.

    Args:
        grid_size: Edge length of the board
        win_length: Marks in a row needed to win (defaults to grid_size)

    Returns:
        Tuple of lines. With win_length == grid_size this is
        row 0, col 0, row 1, col 1, ..., main diagonal, anti-diagonal.

    Raises:
        InvalidLineSpecError: win_length > grid_size or either is <= 0
    """
    n, k = _resolve(grid_size, win_length)
    return _lines(n, k)


@lru_cache(maxsize=None)
def _line_array(n: int, k: int) -> np.ndarray:
    arr = np.array(_lines(n, k), dtype=np.intp).reshape(-1, k)
    arr.setflags(write=False)
    return arr


def line_array(grid_size: int, win_length: Optional[int] = None) -> np.ndarray:
    """Lines as a read-only [num_lines, win_length] index matrix."""
    n, k = _resolve(grid_size, win_length)
    return _line_array(n, k)


def line_count(grid_size: int, win_length: Optional[int] = None) -> int:
    """Number of winning lines for the given board."""
    return len(generate_lines(grid_size, win_length))

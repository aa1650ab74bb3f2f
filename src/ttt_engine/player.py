"""
AI player facade: picks the search strategy by grid size and handles
the opening move.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .board import Cell, corner_cells, empty_cells
from .errors import InvalidBoardError, UnsupportedGridSizeError
from .minimax import (
    DEPTH_LIMITED_GRID_SIZES,
    EXACT_GRID_SIZES,
    FIRST,
    find_best_move,
    find_best_move_depth_limited,
)
from .thinking import ThinkingData

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Engine configuration."""

    # Board
    grid_size: int = 3
    win_length: Optional[int] = None  # defaults to grid_size

    # Search
    use_alpha_beta: bool = True
    max_depth: int = 3  # only used for grids without exact search

    # Randomness (opening corner, random tie-break)
    tie_break: str = FIRST
    seed: Optional[int] = None
    random_opening: bool = True


class AIPlayer:
    """
    Chooses moves for one side of a game.

    3x3 boards get exact search, 4x4 boards depth-limited search.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config if config is not None else EngineConfig()
        supported = set(EXACT_GRID_SIZES) | set(DEPTH_LIMITED_GRID_SIZES)
        if self.config.grid_size not in supported:
            raise UnsupportedGridSizeError(
                f"Grid size {self.config.grid_size} not supported, expected one of {sorted(supported)}"
            )
        self.rng = np.random.default_rng(self.config.seed)

    @property
    def grid_size(self) -> int:
        return self.config.grid_size

    def find_best_move(
        self, board: Sequence[Cell], ai_player: str, human_player: str
    ) -> Tuple[int, ThinkingData]:
        """Search the position with the strategy for this grid size."""
        cfg = self.config
        if cfg.grid_size in EXACT_GRID_SIZES and cfg.win_length in (None, cfg.grid_size):
            return find_best_move(
                board, ai_player, human_player, cfg.grid_size, cfg.use_alpha_beta,
                tie_break=cfg.tie_break,
                rng=self.rng,
            )
        return find_best_move_depth_limited(
            board, ai_player, human_player, cfg.grid_size, cfg.max_depth, cfg.use_alpha_beta,
            win_length=cfg.win_length,
            tie_break=cfg.tie_break,
            rng=self.rng,
        )

    def random_corner_move(self, board: Sequence[Cell]) -> int:
        """
        Random free corner, or any free cell when all corners are taken.

        Raises:
            InvalidBoardError: no empty cell left
        """
        free = empty_cells(board)
        if not free:
            raise InvalidBoardError("No empty cell for an opening move")
        free_set = set(free)
        corners = [c for c in corner_cells(self.grid_size) if c in free_set]
        return int(self.rng.choice(corners if corners else free))

    def choose_move(
        self, board: Sequence[Cell], ai_player: str, human_player: str
    ) -> Tuple[int, Optional[ThinkingData]]:
        """
        Pick a move for ai_player.

        On an empty board (with random_opening set) plays a random corner
        without searching; thinking is None in that case.
        """
        n_cells = self.grid_size * self.grid_size
        if self.config.random_opening and len(board) == n_cells and len(empty_cells(board)) == n_cells:
            move = self.random_corner_move(board)
            logger.info("%s opens at corner %d", ai_player, move)
            return move, None
        return self.find_best_move(board, ai_player, human_player)

"""
ttt_engine - Tic-Tac-Toe search engine that explains its moves.

Exact minimax with alpha-beta pruning on 3x3, depth-limited search with a
line-based heuristic on 4x4, and a structured trace (thinking data) of
every decision for display and replay.
"""

from .errors import (
    EngineError,
    InvalidBoardError,
    InvalidMoveError,
    OccupiedCellError,
    InvalidLineSpecError,
    UnsupportedGridSizeError,
    TerminalBoardError,
    GameOverError,
)
from .lines import generate_lines, line_array
from .board import X, O, create_board, is_empty, empty_cells, is_full, place, other_player
from .game import (
    GameResult,
    GameState,
    check_win,
    check_draw,
    game_result,
    create_game_state,
    set_players,
    reset_game_state,
    apply_move,
)
from .evaluator import evaluate, heuristic_bound
from .minimax import (
    WIN_SCORE,
    LOSS_SCORE,
    DRAW_SCORE,
    SearchContext,
    search,
    find_best_move,
    find_best_move_depth_limited,
    principal_variation,
)
from .thinking import (
    MoveEvaluation,
    ThinkingData,
    ReplayStep,
    classify_score,
    format_thinking_data,
    generate_replay_steps,
    accumulate_totals,
    score_grid,
    policy_target,
)
from .player import AIPlayer, EngineConfig
from .arena import play_game, engine_agent, random_agent, eval_self_play, eval_vs_random

__version__ = "0.1.0"
__all__ = [
    "EngineError",
    "InvalidBoardError",
    "InvalidMoveError",
    "OccupiedCellError",
    "InvalidLineSpecError",
    "UnsupportedGridSizeError",
    "TerminalBoardError",
    "GameOverError",
    "generate_lines",
    "line_array",
    "X",
    "O",
    "create_board",
    "is_empty",
    "empty_cells",
    "is_full",
    "place",
    "other_player",
    "GameResult",
    "GameState",
    "check_win",
    "check_draw",
    "game_result",
    "create_game_state",
    "set_players",
    "reset_game_state",
    "apply_move",
    "evaluate",
    "heuristic_bound",
    "WIN_SCORE",
    "LOSS_SCORE",
    "DRAW_SCORE",
    "SearchContext",
    "search",
    "find_best_move",
    "find_best_move_depth_limited",
    "principal_variation",
    "MoveEvaluation",
    "ThinkingData",
    "ReplayStep",
    "classify_score",
    "format_thinking_data",
    "generate_replay_steps",
    "accumulate_totals",
    "score_grid",
    "policy_target",
    "AIPlayer",
    "EngineConfig",
    "play_game",
    "engine_agent",
    "random_agent",
    "eval_self_play",
    "eval_vs_random",
]

"""
Minimax search with alpha-beta pruning and search instrumentation.

Two entry points share one recursive search:
  - find_best_move: exact search to terminal depth (3x3)
  - find_best_move_depth_limited: stops at max_depth and scores the leaf
    with the heuristic evaluator (4x4)

Scores are from the AI's point of view:
  - AI win:    WIN_SCORE - depth   (prefer faster wins)
  - human win: LOSS_SCORE + depth  (prefer slower losses)
  - draw:      DRAW_SCORE
Heuristic leaves stay within +/- HEURISTIC_LIMIT, inside the decisive band.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .board import PLAYERS, Board, Cell, empty_cells, is_full, place, validate_board
from .errors import TerminalBoardError, UnsupportedGridSizeError
from .evaluator import evaluate, heuristic_bound
from .game import check_win, is_terminal
from .thinking import (
    DECISIVE_THRESHOLD,
    DEPTH_LIMITED,
    EXACT,
    MoveEvaluation,
    TerminalCounts,
    ThinkingData,
    classify_score,
)

logger = logging.getLogger(__name__)

WIN_SCORE = 100
LOSS_SCORE = -100
DRAW_SCORE = 0
HEURISTIC_LIMIT = DECISIVE_THRESHOLD - 1

EXACT_GRID_SIZES = (3,)
DEPTH_LIMITED_GRID_SIZES = (3, 4)

# Tie-break policies among root moves with equal best score
FIRST = "first"
RANDOM = "random"
TIE_BREAK_POLICIES = (FIRST, RANDOM)

# evaluate_fn(board, ai_player, human_player, grid_size[, win_length]) -> score
# win_length is only passed when the caller set one
EvaluateFn = Callable[..., float]


@dataclass
class CandidateTrace:
    """Running statistics for the root move currently being searched."""
    position: int
    nodes_visited: int = 0
    max_depth_reached: int = 0
    branches_pruned: int = 0
    pruning_depth: Optional[int] = None

    def finish(self, score: float) -> MoveEvaluation:
        return MoveEvaluation(
            position=self.position,
            score=score,
            outcome=classify_score(score),
            nodes_visited=self.nodes_visited,
            max_depth_reached=self.max_depth_reached,
            branches_pruned=self.branches_pruned,
            pruned=self.pruning_depth is not None,
            pruning_depth=self.pruning_depth,
        )


@dataclass
class SearchContext:
    """
    Mutable counters for one top-level search call.

    Built when the call starts and dropped when it returns; never shared.
    """
    nodes_evaluated: int = 0
    branches_pruned: int = 0
    max_depth: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    candidate: Optional[CandidateTrace] = None

    def visit(self, depth: int):
        self.nodes_evaluated += 1
        self.max_depth = max(self.max_depth, depth)
        if self.candidate is not None:
            self.candidate.nodes_visited += 1
            self.candidate.max_depth_reached = max(self.candidate.max_depth_reached, depth)

    def record_cut(self, depth: int):
        self.branches_pruned += 1
        if self.candidate is not None:
            self.candidate.branches_pruned += 1
            if self.candidate.pruning_depth is None or depth < self.candidate.pruning_depth:
                self.candidate.pruning_depth = depth

    def terminal_counts(self) -> TerminalCounts:
        return TerminalCounts(wins=self.wins, losses=self.losses, draws=self.draws)


def _clamp_heuristic(score: float) -> float:
    return max(-HEURISTIC_LIMIT, min(HEURISTIC_LIMIT, score))


def _leaf_score(
    board: Board,
    ai_player: str,
    human_player: str,
    grid_size: int,
    win_length: Optional[int],
    evaluate_fn: Optional[EvaluateFn],
) -> float:
    """
    Heuristic score of a cutoff leaf, strictly inside the decisive band.

    The built-in evaluator is scaled by its bound so ordering survives;
    a caller-supplied evaluator is clamped.
    """
    if evaluate_fn is None:
        bound = heuristic_bound(grid_size, win_length)
        raw = evaluate(board, ai_player, human_player, grid_size, win_length)
        if bound == 0:
            return raw
        return raw * HEURISTIC_LIMIT / bound
    if win_length is None:
        return _clamp_heuristic(evaluate_fn(board, ai_player, human_player, grid_size))
    return _clamp_heuristic(evaluate_fn(board, ai_player, human_player, grid_size, win_length))


def search(
    board: Board,
    player: str,
    ai_player: str,
    human_player: str,
    depth: int,
    alpha: float,
    beta: float,
    context: SearchContext,
    *,
    grid_size: int,
    win_length: Optional[int] = None,
    use_alpha_beta: bool = True,
    max_depth: Optional[int] = None,
    evaluate_fn: Optional[EvaluateFn] = None,
) -> float:
    """
    Score a position by minimax.

    The board is mutated in place while searching and restored before
    returning, so it must not be shared with another search.

    Args:
        board: Position to score (player is to move)
        player: Side to move
        depth: Plies below the root move
        alpha, beta: Search window
        context: Counters for the current top-level call
        max_depth: Heuristic cutoff; None searches to terminal depth
        evaluate_fn: Leaf evaluator for the cutoff (defaults to evaluate)

    Returns:
        Score from the AI's point of view
    """
    context.visit(depth)

    if check_win(board, ai_player, grid_size, win_length) is not None:
        context.wins += 1
        return WIN_SCORE - depth
    if check_win(board, human_player, grid_size, win_length) is not None:
        context.losses += 1
        return LOSS_SCORE + depth
    if is_full(board):
        context.draws += 1
        return DRAW_SCORE

    if max_depth is not None and depth >= max_depth:
        return _leaf_score(board, ai_player, human_player, grid_size, win_length, evaluate_fn)

    maximizing = player == ai_player
    opponent = human_player if maximizing else ai_player
    best = -math.inf if maximizing else math.inf

    for move in empty_cells(board):
        board[move] = player
        try:
            value = search(
                board, opponent, ai_player, human_player, depth + 1, alpha, beta, context,
                grid_size=grid_size,
                win_length=win_length,
                use_alpha_beta=use_alpha_beta,
                max_depth=max_depth,
                evaluate_fn=evaluate_fn,
            )
        finally:
            board[move] = move

        if maximizing:
            best = max(best, value)
            alpha = max(alpha, best)
        else:
            best = min(best, value)
            beta = min(beta, best)

        if use_alpha_beta and beta <= alpha:
            context.record_cut(depth)
            break

    return best


def _check_search_request(
    board: Sequence[Cell],
    ai_player: str,
    human_player: str,
    grid_size: int,
    win_length: Optional[int],
    tie_break: str,
):
    if ai_player == human_player:
        raise ValueError(f"AI and human must use different marks (both {ai_player!r})")
    for mark in (ai_player, human_player):
        if mark not in PLAYERS:
            raise ValueError(f"Unknown player mark {mark!r}, expected one of {PLAYERS}")
    if tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(f"Unknown tie-break policy {tie_break!r}, expected one of {TIE_BREAK_POLICIES}")
    validate_board(board, grid_size, (ai_player, human_player))
    for mark in (ai_player, human_player):
        if check_win(board, mark, grid_size, win_length) is not None:
            raise TerminalBoardError(f"Board is already won by {mark}")
    if is_full(board):
        raise TerminalBoardError("Board is full")


def _break_tie(tied: List[int], tie_break: str, rng: Optional[np.random.Generator]) -> int:
    if tie_break == FIRST or len(tied) == 1:
        return tied[0]
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.choice(tied))


def principal_variation(
    board: Sequence[Cell],
    first_move: int,
    ai_player: str,
    human_player: str,
    grid_size: int = 3,
    win_length: Optional[int] = None,
    use_alpha_beta: bool = True,
) -> Tuple[int, ...]:
    """
    Expected line of play after the AI plays first_move.

    Each ply follows the best reply for the side to move (the first in
    ascending cell order among equals) until the game ends.
    """
    work = place(board, first_move, ai_player)
    line = [first_move]
    player = human_player
    depth = 0
    scratch = SearchContext()

    while not is_terminal(work, grid_size, win_length):
        maximizing = player == ai_player
        opponent = human_player if maximizing else ai_player
        best_move, best_value = None, None

        for move in empty_cells(work):
            work[move] = player
            try:
                value = search(
                    work, opponent, ai_player, human_player, depth + 1, -math.inf, math.inf, scratch,
                    grid_size=grid_size,
                    win_length=win_length,
                    use_alpha_beta=use_alpha_beta,
                )
            finally:
                work[move] = move
            better = best_value is None or (value > best_value if maximizing else value < best_value)
            if better:
                best_move, best_value = move, value

        work[best_move] = player
        line.append(best_move)
        player = opponent
        depth += 1

    return tuple(line)


def _search_root(
    board: Sequence[Cell],
    ai_player: str,
    human_player: str,
    *,
    grid_size: int,
    win_length: Optional[int],
    use_alpha_beta: bool,
    max_depth: Optional[int],
    evaluate_fn: Optional[EvaluateFn],
    tie_break: str,
    rng: Optional[np.random.Generator],
) -> Tuple[int, ThinkingData]:
    """Search every root move and assemble the thinking data."""
    _check_search_request(board, ai_player, human_player, grid_size, win_length, tie_break)
    strategy = EXACT if max_depth is None else DEPTH_LIMITED

    t0 = time.perf_counter()
    work = list(board)
    context = SearchContext()
    evaluations: List[MoveEvaluation] = []

    for position in empty_cells(work):
        context.candidate = CandidateTrace(position)
        work[position] = ai_player
        try:
            score = search(
                work, human_player, ai_player, human_player, 0, -math.inf, math.inf, context,
                grid_size=grid_size,
                win_length=win_length,
                use_alpha_beta=use_alpha_beta,
                max_depth=max_depth,
                evaluate_fn=evaluate_fn,
            )
        finally:
            work[position] = position

        evaluation = context.candidate.finish(score)
        context.candidate = None
        evaluations.append(evaluation)
        logger.debug(
            "candidate %d: score %s (%s), %d nodes, depth %d, pruned=%s",
            position, score, evaluation.outcome, evaluation.nodes_visited,
            evaluation.max_depth_reached, evaluation.pruned,
        )

    best_score = max(e.score for e in evaluations)
    tied = [e.position for e in evaluations if e.score == best_score]
    move = _break_tie(tied, tie_break, rng)
    search_time_ms = (time.perf_counter() - t0) * 1000.0

    pv = None
    if strategy == EXACT:
        pv = principal_variation(board, move, ai_player, human_player, grid_size, win_length, use_alpha_beta)

    thinking = ThinkingData(
        chosen_move=move,
        chosen_score=best_score,
        evaluations=tuple(evaluations),
        nodes_evaluated=context.nodes_evaluated,
        branches_pruned=context.branches_pruned,
        max_depth=context.max_depth,
        terminal_states=context.terminal_counts(),
        search_time_ms=search_time_ms,
        principal_variation=pv,
        grid_size=grid_size,
        strategy=strategy,
        used_alpha_beta=use_alpha_beta,
    )
    logger.info(
        "%s plays %d (score %s, %s search): %d nodes, %d cuts, %.2f ms",
        ai_player, move, best_score, strategy, context.nodes_evaluated,
        context.branches_pruned, search_time_ms,
    )
    return move, thinking


def find_best_move(
    board: Sequence[Cell],
    ai_player: str,
    human_player: str,
    grid_size: int = 3,
    use_alpha_beta: bool = True,
    *,
    tie_break: str = FIRST,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[int, ThinkingData]:
    """
    Exact minimax search (3x3 only).

    Args:
        board: Current position; not modified
        ai_player / human_player: Marks of the searching side and its opponent
        use_alpha_beta: Enable alpha-beta cutoffs
        tie_break: "first" picks the lowest cell among equal best scores,
            "random" picks uniformly with rng
        rng: numpy Generator for the random tie-break

    Returns:
        (move, thinking)

    Raises:
        UnsupportedGridSizeError, TerminalBoardError, InvalidBoardError
    """
    if grid_size not in EXACT_GRID_SIZES:
        raise UnsupportedGridSizeError(
            f"Exact search supports grid sizes {EXACT_GRID_SIZES}, got {grid_size}"
        )
    return _search_root(
        board, ai_player, human_player,
        grid_size=grid_size,
        win_length=None,
        use_alpha_beta=use_alpha_beta,
        max_depth=None,
        evaluate_fn=None,
        tie_break=tie_break,
        rng=rng,
    )


def find_best_move_depth_limited(
    board: Sequence[Cell],
    ai_player: str,
    human_player: str,
    grid_size: int = 4,
    max_depth: int = 3,
    use_alpha_beta: bool = True,
    evaluate_fn: Optional[EvaluateFn] = None,
    *,
    win_length: Optional[int] = None,
    tie_break: str = FIRST,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[int, ThinkingData]:
    """
    Depth-limited minimax with heuristic leaves.

    Args:
        max_depth: Depth (below the root move) at which leaves are scored
            by evaluate_fn instead of searched further
        evaluate_fn: Called as evaluate_fn(board, ai, human, grid_size), with
            win_length appended only when one is given;
            defaults to the line-based evaluator

    Returns:
        (move, thinking) with no principal variation
    """
    if grid_size not in DEPTH_LIMITED_GRID_SIZES:
        raise UnsupportedGridSizeError(
            f"Depth-limited search supports grid sizes {DEPTH_LIMITED_GRID_SIZES}, got {grid_size}"
        )
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    return _search_root(
        board, ai_player, human_player,
        grid_size=grid_size,
        win_length=win_length,
        use_alpha_beta=use_alpha_beta,
        max_depth=max_depth,
        evaluate_fn=evaluate_fn,
        tie_break=tie_break,
        rng=rng,
    )

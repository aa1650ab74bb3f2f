"""
Match runner.

Plays the engine against itself or a random opponent and reports
win / draw / loss rates.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
from tqdm.auto import trange

from .board import Cell, O, X, create_board, empty_cells, other_player, place
from .game import GameResult, game_result
from .player import AIPlayer, EngineConfig
from .thinking import SearchTotals, ThinkingData, accumulate_totals

# agent(board, mark) -> cell index
Agent = Callable[[Sequence[Cell], str], int]


def engine_agent(config: EngineConfig, log: Optional[List[Optional[ThinkingData]]] = None) -> Agent:
    """Agent backed by AIPlayer; appends each move's thinking data to log."""
    player = AIPlayer(config)

    def agent(board: Sequence[Cell], mark: str) -> int:
        move, thinking = player.choose_move(board, mark, other_player(mark))
        if log is not None:
            log.append(thinking)
        return move

    return agent


def random_agent(rng: np.random.Generator) -> Agent:
    """Agent playing uniformly random legal moves."""

    def agent(board: Sequence[Cell], mark: str) -> int:
        return int(rng.choice(empty_cells(board)))

    return agent


def play_game(
    x_agent: Agent,
    o_agent: Agent,
    grid_size: int = 3,
    win_length: Optional[int] = None,
) -> Tuple[GameResult, List[int]]:
    """
    Play one game, X first.

    Returns:
        (result, moves) with moves in play order
    """
    board = create_board(grid_size)
    agents = {X: x_agent, O: o_agent}
    mark = X
    moves: List[int] = []

    while True:
        result = game_result(board, grid_size, win_length)
        if result is not None:
            return result, moves
        move = agents[mark](board, mark)
        board = place(board, move, mark)
        moves.append(move)
        mark = other_player(mark)


def _check_games(games: int):
    if games < 1:
        raise ValueError(f"games must be at least 1, got {games}")


def _rates(wins: int, draws: int, losses: int) -> Dict[str, float]:
    total = wins + draws + losses
    return {
        "games": total,
        "win": wins / total,
        "draw": draws / total,
        "loss": losses / total,
    }


def eval_self_play(
    config: EngineConfig,
    games: int = 10,
    progress: bool = False,
) -> Dict[str, object]:
    """
    Engine against itself.

    Returns:
        Dict with 'games', 'x_win', 'draw', 'o_win' and cumulative 'totals'
    """
    _check_games(games)
    log: List[Optional[ThinkingData]] = []
    x_wins = draws = o_wins = 0

    for _ in trange(games, desc="Self-play", disable=not progress):
        agent = engine_agent(config, log)
        result, _ = play_game(agent, agent, config.grid_size, config.win_length)
        if result.is_draw:
            draws += 1
        elif result.winner == X:
            x_wins += 1
        else:
            o_wins += 1

    totals: SearchTotals = accumulate_totals(log)
    return {
        "games": games,
        "x_win": x_wins / games,
        "draw": draws / games,
        "o_win": o_wins / games,
        "totals": totals,
    }


def eval_vs_random(
    config: EngineConfig,
    games: int = 100,
    seed: Optional[int] = None,
    progress: bool = False,
) -> Dict[str, float]:
    """
    Engine against a random opponent, alternating sides each game.

    Returns:
        Dict with 'games', 'win', 'draw', 'loss' from the engine's side
    """
    _check_games(games)
    rng = np.random.default_rng(seed)
    opponent = random_agent(rng)
    engine = engine_agent(config)
    wins = draws = losses = 0

    for g in trange(games, desc="vs Random", disable=not progress):
        engine_side = X if g % 2 == 0 else O
        if engine_side == X:
            result, _ = play_game(engine, opponent, config.grid_size, config.win_length)
        else:
            result, _ = play_game(opponent, engine, config.grid_size, config.win_length)

        if result.is_draw:
            draws += 1
        elif result.winner == engine_side:
            wins += 1
        else:
            losses += 1

    return _rates(wins, draws, losses)

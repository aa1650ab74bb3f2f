"""
Win/terminal detection and game state management.

check_draw only looks at fullness: a full board can still hold a winning
line, so callers must rule out a win with check_win first. game_result
applies that order.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .board import Board, Cell, O, X, create_board, is_full, other_player, place
from .errors import GameOverError
from .lines import generate_lines


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished game."""
    winner: Optional[str]
    winning_cells: Optional[Tuple[int, ...]]
    is_draw: bool


def check_win(
    board: Sequence[Cell],
    player: str,
    grid_size: int = 3,
    win_length: Optional[int] = None,
) -> Optional[GameResult]:
    """
    Check whether player holds a complete line.

    Returns:
        GameResult for the first matching line in generation order,
        or None if the player has no winning line.
    """
    moves = {i for i, cell in enumerate(board) if cell == player}
    if not moves:
        return None

    for line in generate_lines(grid_size, win_length):
        if all(cell in moves for cell in line):
            return GameResult(winner=player, winning_cells=line, is_draw=False)
    return None


def check_draw(board: Sequence[Cell]) -> bool:
    """True iff every cell is occupied. Does not check for a winner."""
    return is_full(board)


def game_result(
    board: Sequence[Cell],
    grid_size: int = 3,
    win_length: Optional[int] = None,
) -> Optional[GameResult]:
    """
    Return the result of a finished board, or None if play continues.

    Wins are checked for X then O before fullness is treated as a draw.
    """
    for player in (X, O):
        result = check_win(board, player, grid_size, win_length)
        if result is not None:
            return result
    if check_draw(board):
        return GameResult(winner=None, winning_cells=None, is_draw=True)
    return None


def is_terminal(
    board: Sequence[Cell],
    grid_size: int = 3,
    win_length: Optional[int] = None,
) -> bool:
    return game_result(board, grid_size, win_length) is not None


# Game status values
SYMBOL_SELECTION = "symbol-selection"
PLAYING = "playing"
WON = "won"
DRAW = "draw"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one game between a human and the AI."""
    board: Tuple[Cell, ...]
    grid_size: int = 3
    current_player: Optional[str] = None
    human_player: Optional[str] = None
    ai_player: Optional[str] = None
    status: str = SYMBOL_SELECTION
    winner: Optional[str] = None
    winning_cells: Optional[Tuple[int, ...]] = None

    @property
    def is_over(self) -> bool:
        return self.status in (WON, DRAW)

    @property
    def ai_to_move(self) -> bool:
        return self.status == PLAYING and self.current_player == self.ai_player

    def board_list(self) -> Board:
        """Return a mutable copy of the board."""
        return list(self.board)


def create_game_state(grid_size: int = 3) -> GameState:
    """Fresh game waiting for the human to pick a symbol."""
    return GameState(board=tuple(create_board(grid_size)), grid_size=grid_size)


def set_players(state: GameState, human_player: str) -> GameState:
    """Assign marks (AI takes the other one) and start play with X to move."""
    return replace(
        state,
        human_player=human_player,
        ai_player=other_player(human_player),
        current_player=X,
        status=PLAYING,
    )


def reset_game_state(state: GameState, grid_size: Optional[int] = None) -> GameState:
    """
    Start over on an empty board, back at symbol selection.

    The previous marks are kept so set_players can restart with them.
    """
    fresh = create_game_state(grid_size if grid_size is not None else state.grid_size)
    return replace(fresh, human_player=state.human_player, ai_player=state.ai_player)


def apply_move(state: GameState, index: int, win_length: Optional[int] = None) -> GameState:
    """
    Play the current player's mark at index.

    Returns:
        New state with winner / draw status resolved and the turn passed.

    Raises:
        GameOverError: game not in progress
        OccupiedCellError / InvalidMoveError: bad index
    """
    if state.status != PLAYING or state.current_player is None:
        raise GameOverError(f"Cannot move while game status is {state.status!r}")

    player = state.current_player
    board = place(state.board, index, player)

    win = check_win(board, player, state.grid_size, win_length)
    if win is not None:
        return replace(
            state,
            board=tuple(board),
            status=WON,
            winner=player,
            winning_cells=win.winning_cells,
        )
    if check_draw(board):
        return replace(state, board=tuple(board), status=DRAW)

    return replace(state, board=tuple(board), current_player=other_player(player))

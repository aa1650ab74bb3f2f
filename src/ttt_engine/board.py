"""
Board model.

Board representation: list of length grid_size ** 2
  - int i: empty cell (holds its own index)
  - "X" / "O": occupied by that player

X always moves first.
"""

from typing import Iterable, List, Sequence, Union

from .errors import InvalidBoardError, InvalidMoveError, OccupiedCellError

X = "X"
O = "O"
PLAYERS = (X, O)

Cell = Union[int, str]
Board = List[Cell]


def create_board(grid_size: int = 3) -> Board:
    """Return an empty board of grid_size x grid_size cells."""
    return list(range(grid_size * grid_size))


def is_empty(cell: Cell) -> bool:
    """True if the cell still carries its index sentinel."""
    return isinstance(cell, int) and not isinstance(cell, bool)


def empty_cells(board: Sequence[Cell]) -> List[int]:
    """Return indices of empty cells in ascending order."""
    return [i for i, cell in enumerate(board) if is_empty(cell)]


def has_empty_cells(board: Sequence[Cell]) -> bool:
    return any(is_empty(cell) for cell in board)


def is_full(board: Sequence[Cell]) -> bool:
    """True if no empty cells remain."""
    return not has_empty_cells(board)


def place(board: Sequence[Cell], index: int, mark: str) -> Board:
    """
    Place a mark and return a new board.

    Raises:
        InvalidMoveError: index outside the board
        OccupiedCellError: cell already taken
    """
    if not 0 <= index < len(board):
        raise InvalidMoveError(f"Cell {index} is outside a board of {len(board)} cells")
    if not is_empty(board[index]):
        raise OccupiedCellError(index)
    new_board = list(board)
    new_board[index] = mark
    return new_board


def other_player(player: str) -> str:
    """Return the opponent's mark."""
    if player not in PLAYERS:
        raise ValueError(f"Unknown player mark: {player!r}")
    return O if player == X else X


def side_to_move(board: Sequence[Cell]) -> str:
    """Infer side to move from mark counts (X plays first)."""
    x_cnt = sum(1 for v in board if v == X)
    o_cnt = sum(1 for v in board if v == O)
    return X if x_cnt == o_cnt else O


def corner_cells(grid_size: int) -> List[int]:
    """Indices of the four corners, without duplicates for tiny grids."""
    n = grid_size
    corners = [0, n - 1, n * (n - 1), n * n - 1]
    return sorted(set(c for c in corners if 0 <= c < n * n))


def validate_board(
    board: Sequence[Cell],
    grid_size: int,
    players: Iterable[str] = PLAYERS,
) -> None:
    """
    Check that a board fits the grid and only holds sentinels or known marks.

    Raises:
        InvalidBoardError: on the first inconsistency found
    """
    expected = grid_size * grid_size
    if len(board) != expected:
        raise InvalidBoardError(
            f"Board has {len(board)} cells, expected {expected} for a {grid_size}x{grid_size} grid"
        )
    marks = set(players)
    for i, cell in enumerate(board):
        if is_empty(cell):
            if cell != i:
                raise InvalidBoardError(f"Empty cell {i} carries index {cell}")
        elif cell not in marks:
            raise InvalidBoardError(f"Cell {i} holds unknown value {cell!r}")

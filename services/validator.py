from models.board import Board, Coordinate
from .errors import InvalidBoardError, OutOfBoundsError, CellOccupiedError
from .utils import X_MARKER, O_MARKER, count_markers, is_board_malformed


def is_valid_board_state(board: Board) -> bool:
    """X always opens, so X has as many markers as O or exactly one more."""
    if is_board_malformed(board):
        return False

    count_x, count_o = count_markers(board)
    return count_x == count_o or count_x == count_o + 1


def get_next_player(board: Board) -> str:
    if is_board_malformed(board):
        return X_MARKER

    count_x, count_o = count_markers(board)
    return X_MARKER if count_x == count_o else O_MARKER


def validate_move(board: Board, coord: Coordinate) -> None:
    if is_board_malformed(board):
        raise InvalidBoardError("Invalid board: Board is empty or not properly initialized")

    size = len(board)
    if coord.x < 0 or coord.x >= size or coord.y < 0 or coord.y >= size:
        raise OutOfBoundsError(f"Invalid move coordinates ({coord.x}, {coord.y})")

    if board[coord.y][coord.x] is not None:
        raise CellOccupiedError(f"Cell at ({coord.x}, {coord.y}) is already occupied")

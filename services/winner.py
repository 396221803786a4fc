from typing import Optional

from models.board import Board
from .utils import is_board_malformed
from .validator import is_valid_board_state


def check_winner(board: Board, win_length: int = 3, skip_validation: bool = False) -> Optional[str]:
    """
    Return the marker owning the first run of ``win_length`` identical cells, or None.

    Windows are scanned horizontally, vertically, down-right and down-left, in that
    order and row-major within each direction. Boards with an impossible X/O count
    never have a winner unless ``skip_validation`` is set.
    """
    if is_board_malformed(board):
        return None

    if not skip_validation and not is_valid_board_state(board):
        return None

    rows = len(board)
    cols = len(board[0])

    # horizontal
    for i in range(rows):
        for j in range(cols - win_length + 1):
            if _is_winning_sequence(board[i][j:j + win_length]):
                return board[i][j]

    # vertical
    for j in range(cols):
        for i in range(rows - win_length + 1):
            column = [board[i + k][j] for k in range(win_length)]
            if _is_winning_sequence(column):
                return board[i][j]

    # diagonal, top-left to bottom-right
    for i in range(rows - win_length + 1):
        for j in range(cols - win_length + 1):
            diagonal = [board[i + k][j + k] for k in range(win_length)]
            if _is_winning_sequence(diagonal):
                return board[i][j]

    # diagonal, top-right to bottom-left
    for i in range(rows - win_length + 1):
        for j in range(win_length - 1, cols):
            diagonal = [board[i + k][j - k] for k in range(win_length)]
            if _is_winning_sequence(diagonal):
                return board[i][j]

    return None


def _is_winning_sequence(sequence) -> bool:
    if not sequence:
        return False
    first = sequence[0]
    if first is None:
        return False
    return all(cell == first for cell in sequence)

from dataclasses import dataclass

from models.board import Board, Coordinate
from models.enums import Difficulty
from .errors import MalformedInputError
from .utils import MARKERS

EVALUATE_FIELDS = {"board", "winLength"}
MOVE_FIELDS = {"board", "x", "y", "winLength", "difficulty", "withAI"}
DIFFICULTIES = [d.value for d in Difficulty]


@dataclass
class EvaluateRequest:
    board: Board
    win_length: int = 3


@dataclass
class MoveRequest:
    board: Board
    move: Coordinate
    win_length: int = 3
    difficulty: str = Difficulty.MEDIUM.value
    with_ai: bool = False


def _is_int(value) -> bool:
    # bool is an int subclass; JSON true/false must not pass as 1/0
    return isinstance(value, int) and not isinstance(value, bool)


def validate_board(board) -> Board:
    if (
        not isinstance(board, list) or len(board) < 3
        or not all(isinstance(row, list) and len(row) == len(board) for row in board)
    ):
        raise MalformedInputError("Invalid board structure: Must be a square 2D array (min 3x3).")

    for row in board:
        for cell in row:
            if cell is not None and cell not in MARKERS:
                raise MalformedInputError(
                    f"Invalid cell value found: {cell}. Only 'X', 'O', or null are allowed."
                )
    return board


def _check_body(data, allowed):
    if not isinstance(data, dict):
        raise MalformedInputError("Request body must be a JSON object.")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise MalformedInputError(f"property {unknown[0]} should not exist")


def _win_length(data, board):
    win_length = data.get("winLength")
    if win_length is None:
        return 3
    if not _is_int(win_length) or win_length < 3:
        raise MalformedInputError("winLength must be an integer not less than 3")
    if win_length > len(board):
        raise MalformedInputError(f"winLength must not be greater than the board size ({len(board)})")
    return win_length


def parse_evaluate_request(data) -> EvaluateRequest:
    _check_body(data, EVALUATE_FIELDS)
    board = validate_board(data.get("board"))
    return EvaluateRequest(board=board, win_length=_win_length(data, board))


def parse_move_request(data) -> MoveRequest:
    _check_body(data, MOVE_FIELDS)
    board = validate_board(data.get("board"))

    for field in ("x", "y"):
        value = data.get(field)
        if not _is_int(value) or value < 0:
            raise MalformedInputError(f"{field} must be an integer not less than 0")

    difficulty = data.get("difficulty")
    if difficulty is None:
        difficulty = Difficulty.MEDIUM.value
    if difficulty not in DIFFICULTIES:
        raise MalformedInputError("difficulty must be one of: easy, medium, hard")

    with_ai = data.get("withAI", False)
    if with_ai is None:
        with_ai = False
    if not isinstance(with_ai, bool):
        raise MalformedInputError("withAI must be a boolean value")

    return MoveRequest(
        board=board,
        move=Coordinate(x=data["x"], y=data["y"]),
        win_length=_win_length(data, board),
        difficulty=difficulty,
        with_ai=with_ai,
    )

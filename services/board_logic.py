import logging
import random

from models.board import Board, Coordinate
from models.enums import GameState, GameResult, Difficulty
from .errors import MoveValidationError
from .utils import X_MARKER, O_MARKER, MARKERS, copy_board, other_marker
from .validator import get_next_player, validate_move
from .winner import check_winner

logger = logging.getLogger(__name__)


def default_win_length(size: int) -> int:
    """Win length used when none is requested: 3 on a 3x3 board, otherwise up to 5."""
    return 3 if size == 3 else min(size, 5)


def create_empty_board(size: int) -> Board:
    if size < 3:
        raise ValueError("Board size must be at least 3")
    return [[None for _ in range(size)] for _ in range(size)]


def apply_move(board: Board, coord: Coordinate, marker: str) -> Board:
    """Return a copy of the board with ``marker`` placed at ``coord``."""
    new_board = copy_board(board)
    new_board[coord.y][coord.x] = marker
    return new_board


def get_valid_moves(board: Board):
    return [
        Coordinate(x=x, y=y)
        for y, row in enumerate(board)
        for x, cell in enumerate(row)
        if cell is None
    ]


def is_board_full(board: Board) -> bool:
    return all(cell is not None for row in board for cell in row)


def get_game_state(board: Board, win_length: int = 3) -> GameState:
    winner = check_winner(board, win_length)
    if winner == X_MARKER:
        return GameState.X_WIN
    if winner == O_MARKER:
        return GameState.O_WIN
    if is_board_full(board):
        return GameState.DRAW
    return GameState.IN_PROGRESS


def format_board(board: Board) -> str:
    size = len(board)
    lines = []
    for y, row in enumerate(board):
        lines.append("|".join(cell if cell is not None else " " for cell in row))
        if y < size - 1:
            lines.append("-" * (size * 2 - 1))
    return "\n".join(lines)


class GameBoard:
    """
    One human-vs-AI game kept in memory.

    The AI client is injected; it answers right after each accepted player move
    and opens the game when it plays X. A failing or confused AI is replaced by a
    random legal move so the game always progresses.
    """

    def __init__(self, ai_client, board_size=3, player_marker=X_MARKER,
                 difficulty=Difficulty.MEDIUM.value, win_length=None, rng=None):
        if board_size < 3:
            raise ValueError("Board size must be at least 3")
        if player_marker not in MARKERS:
            raise ValueError("Invalid player marker. Must be 'X' or 'O'.")

        self.ai_client = ai_client
        self.board_size = board_size
        self.player_marker = player_marker
        self.ai_marker = other_marker(player_marker)
        self.difficulty = Difficulty(difficulty).value
        self.win_length = self._resolve_win_length(board_size, win_length)
        self.rng = rng or random.Random()

        self.board = create_empty_board(self.board_size)
        self.game_over = False

    @staticmethod
    def _resolve_win_length(size, win_length):
        if win_length is None:
            return default_win_length(size)
        if win_length < 3 or win_length > size:
            raise ValueError(f"Win length must be between 3 and {size}")
        return win_length

    def start_game(self):
        if self.ai_marker == X_MARKER and not self.game_over:
            self._make_ai_move()

    def get_board(self) -> Board:
        return copy_board(self.board)

    def get_current_player(self) -> str:
        return get_next_player(self.board)

    def is_player_turn(self) -> bool:
        return not self.game_over and self.get_current_player() == self.player_marker

    def is_game_over(self) -> bool:
        return self.game_over

    def make_player_move(self, coord: Coordinate) -> bool:
        if self.game_over or not self.is_player_turn():
            logger.warning("Player move blocked: game over=%s, player turn=%s",
                           self.game_over, self.is_player_turn())
            return False

        try:
            validate_move(self.board, coord)
        except MoveValidationError as e:
            logger.warning("Rejected player move %s: %s", coord, e)
            return False

        self.board = apply_move(self.board, coord, self.player_marker)
        self._check_game_state()

        if not self.game_over and self.get_current_player() == self.ai_marker:
            self._make_ai_move()
        return True

    def _make_ai_move(self):
        if self.game_over or self.get_current_player() != self.ai_marker:
            return

        try:
            move = self.ai_client.get_next_move(self.board, self.difficulty)
            validate_move(self.board, move)
        except Exception:
            logger.exception("AI move failed, falling back to a random move")
            move = self._random_move()

        if move is None:
            self._check_game_state()
            if not self.game_over:
                logger.error("No valid moves left for the AI, forcing game over")
                self.game_over = True
            return

        self.board = apply_move(self.board, move, self.ai_marker)
        self._check_game_state()

    def _random_move(self):
        valid_moves = get_valid_moves(self.board)
        if not valid_moves:
            return None
        return self.rng.choice(valid_moves)

    def _check_game_state(self):
        if self.game_over:
            return
        if get_game_state(self.board, self.win_length) != GameState.IN_PROGRESS:
            self.game_over = True

    def get_game_result(self):
        if not self.game_over:
            return None

        state = get_game_state(self.board, self.win_length)
        if state == GameState.DRAW:
            return GameResult.DRAW
        if state == GameState.IN_PROGRESS:
            # forced game over without a decided board
            logger.warning("Game is over but the board is still in progress")
            return None

        winner = X_MARKER if state == GameState.X_WIN else O_MARKER
        return GameResult.PLAYER_WIN if winner == self.player_marker else GameResult.AI_WIN

    def restart_game(self):
        self.board = create_empty_board(self.board_size)
        self.game_over = False
        self.start_game()

    def change_board_size(self, new_size, win_length=None):
        if new_size < 3:
            raise ValueError("Board size must be at least 3")
        self.win_length = self._resolve_win_length(new_size, win_length)
        self.board_size = new_size
        self.restart_game()

    def change_difficulty(self, difficulty):
        self.difficulty = Difficulty(difficulty).value
        self.restart_game()

    def change_player_marker(self, marker):
        if marker not in MARKERS:
            raise ValueError("Invalid player marker. Must be 'X' or 'O'.")
        self.player_marker = marker
        self.ai_marker = other_marker(marker)
        self.restart_game()

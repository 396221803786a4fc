import logging

from models.board import Board, Coordinate
from models.enums import Difficulty
from .board_logic import apply_move, is_board_full
from .errors import InvalidMoveError, MoveValidationError
from .validator import get_next_player, validate_move
from .winner import check_winner

logger = logging.getLogger(__name__)


class GameManager:
    """Applies one player move and, on request, the AI's answer to a caller-supplied board."""

    def __init__(self, ai_client):
        self.ai_client = ai_client
        logger.info("GameManager initialized with AI client: %s", type(ai_client).__name__)

    def process_move(self, board: Board, move: Coordinate, win_length: int = 3,
                     get_ai_response: bool = False, difficulty: str = Difficulty.MEDIUM.value):
        # the mover is whoever's turn it is on the board, never a caller claim
        updated_board = self._play(board, move)

        winner = check_winner(updated_board, win_length)
        game_over = winner is not None or is_board_full(updated_board)
        ai_move = None

        if not game_over and get_ai_response:
            try:
                candidate = self.ai_client.get_next_move(updated_board, difficulty)
                updated_board = self._play(updated_board, candidate)
                ai_move = candidate

                winner = check_winner(updated_board, win_length)
                game_over = winner is not None or is_board_full(updated_board)
                logger.info("AI (%s) made move: (%d, %d)", type(self.ai_client).__name__,
                            candidate.x, candidate.y)
            except Exception as e:
                # the player's move stands; the AI just skips this turn
                logger.exception("Error getting AI move: %s", e)
                game_over = winner is not None or is_board_full(updated_board)

        return {
            "board": updated_board,
            "winner": winner,
            "gameOver": game_over,
            "nextPlayer": get_next_player(updated_board),
            "aiMove": ai_move.to_dict() if ai_move else None,
        }

    @staticmethod
    def _play(board: Board, move: Coordinate) -> Board:
        try:
            validate_move(board, move)
        except MoveValidationError as e:
            raise InvalidMoveError(str(e)) from e
        return apply_move(board, move, get_next_player(board))

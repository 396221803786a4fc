import logging

from sqlalchemy.orm import Session

from .board_hash import hash_board_sha1
from .errors import GameError, InternalServerError, MalformedInputError, PersistenceError
from .game_manager import GameManager
from .request_validation import parse_evaluate_request, parse_move_request
from .result_store import ResultStore
from .validator import is_valid_board_state
from .winner import check_winner

logger = logging.getLogger(__name__)

NO_WINNER = {"winner": None, "stored": False}


class GameService:
    def __init__(self, db: Session, game_manager: GameManager):
        self.db = db
        self.game_manager = game_manager
        self.store = ResultStore(db)

    def evaluate_game(self, data):
        """Check a board for a winner and record won boards once per distinct board."""
        request = parse_evaluate_request(data)
        board, win_length = request.board, request.win_length
        logger.info("Evaluating game state with winLength: %s", win_length)

        try:
            winner = check_winner(board, win_length)
        except Exception as e:
            logger.exception("Error calling check_winner")
            raise InternalServerError(f"Failed during winner check: {e}") from e

        if not winner:
            logger.info("No winner found.")
            return dict(NO_WINNER)

        logger.info("Winner found: %s. Storing game result...", winner)

        try:
            board_hash = hash_board_sha1(board)
        except Exception as e:
            logger.exception("Error hashing board")
            raise InternalServerError(f"Failed during board hashing: {e}") from e

        stored = self.store.store_game_result(board_hash, board, winner, win_length)
        if stored is None:
            # read after a failed write: a concurrent request may have stored it
            stored = self.store.store_game_result(board_hash, board, winner, win_length)
            if stored is None:
                logger.error("Failed to store game result hash %s.", board_hash)
                raise PersistenceError("Failed to store game result after win detection.")
            logger.warning("Game result hash %s already stored (race condition?). Returning existing.",
                           board_hash)
            return stored

        logger.info("Game result stored successfully with ID: %s", stored.id)
        return stored

    def find_all_completed_games(self):
        logger.info("Retrieving all completed games...")
        games = self.store.get_all_completed_games()
        logger.info("Retrieved %d completed games.", len(games))
        return games

    def make_move(self, data):
        request = parse_move_request(data)

        if not is_valid_board_state(request.board):
            raise MalformedInputError("Invalid game state")

        try:
            return self.game_manager.process_move(
                request.board,
                request.move,
                win_length=request.win_length,
                get_ai_response=request.with_ai,
                difficulty=request.difficulty,
            )
        except GameError:
            raise
        except Exception as e:
            logger.exception("Error processing move")
            raise InternalServerError(f"An unexpected error occurred while processing move: {e}") from e

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.board import Board
from models.win_state import WinState
from .errors import PersistenceError

logger = logging.getLogger(__name__)


class ResultStore:
    """Append-only store of won boards, keyed by board hash."""

    def __init__(self, db: Session):
        self.db = db

    def store_game_result(self, board_hash: str, board_state: Board, winner: str,
                          win_length: int) -> Optional[WinState]:
        """
        Insert the result unless its hash is already stored. Returns the stored row,
        or None on an unexpected database failure.
        """
        try:
            existing = self._find(board_hash)
            if existing:
                logger.info("Win state with hash %s already exists (winLength: %s). Skipping insertion.",
                            board_hash, existing.win_length)
                return existing

            win_state = WinState(
                board_hash=board_hash,
                board_state=board_state,
                winner=winner,
                win_length=win_length,
            )
            self.db.add(win_state)
            self.db.commit()
            self.db.refresh(win_state)
            logger.info("Stored new win state with hash %s (winLength: %s)", board_hash, win_length)
            return win_state

        except IntegrityError:
            # another request stored the same board between the lookup and the insert
            self.db.rollback()
            logger.warning("Duplicate hash %s despite pre-check (likely race condition). Fetching existing.",
                           board_hash)
            try:
                return self._find(board_hash)
            except SQLAlchemyError:
                logger.exception("Could not read back win state %s", board_hash)
                return None

        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error storing win state %s", board_hash)
            return None

    def get_all_completed_games(self) -> List[WinState]:
        try:
            games = (
                self.db.query(WinState)
                .order_by(WinState.created_at.desc(), WinState.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Error retrieving completed games")
            raise PersistenceError("Failed to retrieve completed games.") from e

        logger.info("Retrieved %d completed game win states.", len(games))
        return games

    def get_game_result_by_hash(self, board_hash: str) -> Optional[WinState]:
        try:
            win_state = self._find(board_hash)
        except SQLAlchemyError as e:
            logger.exception("Error retrieving win state %s", board_hash)
            raise PersistenceError(f"Failed to retrieve game result {board_hash}.") from e

        if win_state:
            logger.info("Retrieved win state by hash %s", board_hash)
        else:
            logger.info("No win state found for hash %s", board_hash)
        return win_state

    def _find(self, board_hash: str) -> Optional[WinState]:
        return self.db.query(WinState).filter(WinState.board_hash == board_hash).first()

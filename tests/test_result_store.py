import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from models.win_state import WinState
from services.errors import PersistenceError
from services.result_store import ResultStore
from tests.support import make_session_factory

X, O, _ = "X", "O", None
BOARD = [[X, X, X], [O, O, _], [_, _, _]]
OTHER_BOARD = [[O, O, O], [X, X, _], [X, _, _]]


class ResultStoreTests(unittest.TestCase):
    def setUp(self):
        self.session_factory = make_session_factory()
        self.db = self.session_factory()
        self.store = ResultStore(self.db)

    def tearDown(self):
        self.db.close()

    def test_store_new_result(self):
        record = self.store.store_game_result("hash-1", BOARD, X, 3)
        self.assertIsNotNone(record.id)
        self.assertEqual(record.board_state, BOARD)
        self.assertEqual(record.winner, X)
        self.assertEqual(record.win_length, 3)
        self.assertIsNotNone(record.created_at)

    def test_store_is_idempotent_by_hash(self):
        first = self.store.store_game_result("hash-1", BOARD, X, 3)
        second = self.store.store_game_result("hash-1", BOARD, X, 3)
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.db.query(WinState).count(), 1)

    def test_duplicate_insert_race_returns_existing_row(self):
        first = self.store.store_game_result("hash-1", BOARD, X, 3)

        other_db = self.session_factory()
        other_store = ResultStore(other_db)
        existing = other_store.get_game_result_by_hash("hash-1")
        # the pre-check misses the row, as if it was inserted concurrently
        with patch.object(other_store, "_find", side_effect=[None, existing]):
            record = other_store.store_game_result("hash-1", BOARD, X, 3)

        self.assertEqual(record.id, first.id)
        self.assertEqual(self.db.query(WinState).count(), 1)
        other_db.close()

    def test_unexpected_error_returns_none(self):
        with patch.object(self.db, "commit", side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
            self.assertIsNone(self.store.store_game_result("hash-1", BOARD, X, 3))

    def test_all_completed_games_newest_first(self):
        first = self.store.store_game_result("hash-1", BOARD, X, 3)
        second = self.store.store_game_result("hash-2", OTHER_BOARD, O, 3)
        games = self.store.get_all_completed_games()
        self.assertEqual([g.id for g in games], [second.id, first.id])

    def test_all_completed_games_empty(self):
        self.assertEqual(self.store.get_all_completed_games(), [])

    def test_read_error_raises(self):
        with patch.object(self.db, "query", side_effect=SQLAlchemyError("boom")):
            with self.assertRaises(PersistenceError):
                self.store.get_all_completed_games()
            with self.assertRaises(PersistenceError):
                self.store.get_game_result_by_hash("hash-1")

    def test_find_by_hash(self):
        self.assertIsNone(self.store.get_game_result_by_hash("missing"))
        stored = self.store.store_game_result("hash-1", BOARD, X, 3)
        self.assertEqual(self.store.get_game_result_by_hash("hash-1").id, stored.id)

    def test_to_dict(self):
        record = self.store.store_game_result("hash-1", BOARD, X, 4)
        data = record.to_dict()
        self.assertEqual(
            set(data), {"id", "boardHash", "boardState", "winner", "winLength", "createdAt"}
        )
        self.assertEqual(data["boardHash"], "hash-1")
        self.assertEqual(data["winLength"], 4)
        self.assertIsInstance(data["createdAt"], str)


if __name__ == "__main__":
    unittest.main()

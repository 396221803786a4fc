import random
import unittest

from models.board import Coordinate
from services.ai_service import SimpleAIClient
from services.errors import InvalidMoveError, NoValidMovesError
from services.game_manager import GameManager
from tests.support import ScriptedAIClient

X, O, _ = "X", "O", None


def empty(size=3):
    return [[None] * size for _ in range(size)]


class ProcessMoveTests(unittest.TestCase):
    def test_applies_move_for_player_to_move(self):
        board = empty()
        result = GameManager(ScriptedAIClient()).process_move(board, Coordinate(1, 2))
        self.assertEqual(result["board"][2][1], X)
        self.assertIsNone(result["winner"])
        self.assertFalse(result["gameOver"])
        self.assertEqual(result["nextPlayer"], O)
        self.assertIsNone(result["aiMove"])
        self.assertEqual(board, empty())

    def test_mover_is_derived_from_board(self):
        board = [[X, _, _], [_, _, _], [_, _, _]]
        result = GameManager(ScriptedAIClient()).process_move(board, Coordinate(2, 2))
        self.assertEqual(result["board"][2][2], O)
        self.assertEqual(result["nextPlayer"], X)

    def test_invalid_moves(self):
        manager = GameManager(ScriptedAIClient())
        board = [[X, _, _], [_, _, _], [_, _, _]]
        with self.assertRaises(InvalidMoveError) as ctx:
            manager.process_move(board, Coordinate(0, 0))
        self.assertIn("already occupied", str(ctx.exception))
        with self.assertRaises(InvalidMoveError) as ctx:
            manager.process_move(board, Coordinate(3, 0))
        self.assertIn("Invalid move coordinates", str(ctx.exception))
        with self.assertRaises(InvalidMoveError):
            manager.process_move([], Coordinate(0, 0))
        self.assertEqual(board, [[X, _, _], [_, _, _], [_, _, _]])

    def test_ai_answers(self):
        ai = ScriptedAIClient((1, 1))
        result = GameManager(ai).process_move(empty(), Coordinate(0, 0), get_ai_response=True, difficulty="hard")
        self.assertEqual(result["board"][1][1], O)
        self.assertEqual(result["aiMove"], {"x": 1, "y": 1})
        self.assertEqual(result["nextPlayer"], X)
        self.assertEqual(ai.calls[0][1], "hard")
        self.assertEqual(ai.calls[0][0][0][0], X)

    def test_ai_skipped_when_human_wins(self):
        ai = ScriptedAIClient((2, 2))
        board = [[X, X, _], [O, O, _], [_, _, _]]
        result = GameManager(ai).process_move(board, Coordinate(2, 0), get_ai_response=True)
        self.assertEqual(result["winner"], X)
        self.assertTrue(result["gameOver"])
        self.assertIsNone(result["aiMove"])
        self.assertEqual(ai.calls, [])

    def test_ai_failure_keeps_human_move(self):
        ai = ScriptedAIClient(RuntimeError("AI offline"))
        result = GameManager(ai).process_move(empty(), Coordinate(0, 0), get_ai_response=True)
        self.assertEqual(result["board"], [[X, _, _], [_, _, _], [_, _, _]])
        self.assertIsNone(result["aiMove"])
        self.assertFalse(result["gameOver"])
        self.assertEqual(result["nextPlayer"], O)

    def test_ai_invalid_move_is_ignored(self):
        ai = ScriptedAIClient((0, 0))
        result = GameManager(ai).process_move(empty(), Coordinate(0, 0), get_ai_response=True)
        self.assertEqual(result["board"], [[X, _, _], [_, _, _], [_, _, _]])
        self.assertIsNone(result["aiMove"])

    def test_ai_no_valid_moves_is_swallowed(self):
        ai = ScriptedAIClient(NoValidMovesError("none left"))
        result = GameManager(ai).process_move(empty(), Coordinate(1, 1), get_ai_response=True)
        self.assertEqual(result["board"][1][1], X)
        self.assertIsNone(result["aiMove"])

    def test_ai_can_win(self):
        board = [[X, X, _], [O, O, _], [X, _, _]]
        result = GameManager(SimpleAIClient(rng=random.Random(3))).process_move(
            board, Coordinate(2, 2), get_ai_response=True, difficulty="medium"
        )
        # O takes (2, 2), then the AI completes the top row as X
        self.assertEqual(result["aiMove"], {"x": 2, "y": 0})
        self.assertEqual(result["winner"], X)
        self.assertTrue(result["gameOver"])

    def test_draw_ends_game(self):
        board = [[X, O, X], [X, O, O], [O, X, _]]
        ai = ScriptedAIClient()
        result = GameManager(ai).process_move(board, Coordinate(2, 2), get_ai_response=True)
        self.assertEqual(result["board"], [[X, O, X], [X, O, O], [O, X, X]])
        self.assertIsNone(result["winner"])
        self.assertTrue(result["gameOver"])
        self.assertEqual(ai.calls, [])

    def test_custom_win_length(self):
        board = empty(5)
        board[0][:3] = [X, X, X]
        board[1][:3] = [O, O, O]
        result = GameManager(ScriptedAIClient()).process_move(board, Coordinate(3, 0), win_length=4)
        self.assertEqual(result["winner"], X)
        result = GameManager(ScriptedAIClient()).process_move(board, Coordinate(3, 0), win_length=5)
        self.assertIsNone(result["winner"])


if __name__ == "__main__":
    unittest.main()

import logging
import random
import re
from typing import Protocol

from openai import OpenAI

from models.board import Board, Coordinate
from models.enums import Difficulty
from .board_logic import apply_move, default_win_length, format_board, get_valid_moves
from .errors import AIClientError, InvalidBoardError, NoValidMovesError
from .prompts import BasePromptProvider
from .utils import other_marker
from .validator import get_next_player, is_valid_board_state
from .winner import check_winner

logger = logging.getLogger(__name__)

DEFAULT_DEEPSEEK_MODEL = "deepseek-coder"
DEFAULT_DEEPSEEK_BASE_URL = "https://api.deepseek.com"
SYSTEM_PROMPT = (
    "You are a strategic Tic Tac Toe player. Respond with only the coordinates "
    'of your move in "x,y" format (0-based index).'
)
MOVE_PATTERN = re.compile(r"(\d+)\s*[,;:\s]\s*(\d+)")


class AIClient(Protocol):
    def get_next_move(self, board: Board, difficulty: str) -> Coordinate:
        ...


def get_markers(board: Board):
    """(ai_marker, human_marker): the AI always plays whoever moves next."""
    ai_marker = get_next_player(board)
    return ai_marker, other_marker(ai_marker)


class SimpleAIClient:
    """
    Rule based AI, no tree search.

    easy   : random empty cell
    medium : win if possible, else block, else random
    hard   : win, block, center on odd boards, a random corner, else random
    """

    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def get_next_move(self, board: Board, difficulty: str = Difficulty.MEDIUM.value) -> Coordinate:
        valid_moves = get_valid_moves(board)
        if not valid_moves:
            logger.error("SimpleAI: no valid moves available")
            raise NoValidMovesError("SimpleAIClient: No valid moves available")

        if difficulty == Difficulty.EASY.value:
            logger.info("SimpleAI [easy]: taking random move")
            return self.rng.choice(valid_moves)

        if len(valid_moves) == 1:
            return valid_moves[0]

        size = len(board)
        win_length = default_win_length(size)
        ai_marker, human_marker = get_markers(board)
        logger.info("SimpleAI [%s]: marker=%s, opponent=%s, win length=%d",
                    difficulty, ai_marker, human_marker, win_length)

        # simulated boards break turn parity when the opponent's marker is placed
        for move in valid_moves:
            if check_winner(apply_move(board, move, ai_marker), win_length, skip_validation=True) == ai_marker:
                logger.info("SimpleAI [%s]: winning move at (%d, %d)", ai_marker, move.x, move.y)
                return move

        for move in valid_moves:
            if check_winner(apply_move(board, move, human_marker), win_length, skip_validation=True) == human_marker:
                logger.info("SimpleAI [%s]: blocking %s at (%d, %d)", ai_marker, human_marker, move.x, move.y)
                return move

        if difficulty == Difficulty.HARD.value:
            strategic = self._strategic_move(size, valid_moves)
            if strategic is not None:
                return strategic

        logger.info("SimpleAI [%s]: no win/block/strategic move found, taking random move", ai_marker)
        return self.rng.choice(valid_moves)

    def _strategic_move(self, size, valid_moves):
        if size % 2 == 1:
            center = Coordinate(x=size // 2, y=size // 2)
            if center in valid_moves:
                logger.info("SimpleAI [hard]: taking center at (%d, %d)", center.x, center.y)
                return center

        corners = {
            Coordinate(x=0, y=0), Coordinate(x=size - 1, y=0),
            Coordinate(x=0, y=size - 1), Coordinate(x=size - 1, y=size - 1),
        }
        free_corners = [move for move in valid_moves if move in corners]
        if free_corners:
            corner = self.rng.choice(free_corners)
            logger.info("SimpleAI [hard]: taking corner at (%d, %d)", corner.x, corner.y)
            return corner
        return None


class DeepSeekAIClient:
    """
    Asks a DeepSeek chat model (OpenAI compatible API) for the move.

    Any transport, response or parsing problem ends in the heuristic fallback
    with the same difficulty; those errors never reach the caller.
    """

    def __init__(self, api_key, model=None, base_url=DEFAULT_DEEPSEEK_BASE_URL, timeout=10.0,
                 prompt_provider=None, fallback=None, client=None):
        self.model = model or DEFAULT_DEEPSEEK_MODEL
        self.prompt_provider = prompt_provider or BasePromptProvider()
        self.fallback = fallback or SimpleAIClient()
        self.client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def get_next_move(self, board: Board, difficulty: str = Difficulty.MEDIUM.value) -> Coordinate:
        if not is_valid_board_state(board):
            raise InvalidBoardError("Invalid board state provided to AI")

        valid_moves = get_valid_moves(board)
        if not valid_moves:
            raise NoValidMovesError("No valid moves available for AI")
        if len(valid_moves) == 1:
            return valid_moves[0]

        try:
            reply = self._ask(board, difficulty)
            return self._parse_move(reply, valid_moves)
        except Exception as e:
            logger.warning("DeepSeek move failed (%s), falling back to heuristic AI", e)
            return self.fallback.get_next_move(board, difficulty)

    def _ask(self, board: Board, difficulty: str) -> str:
        ai_marker, human_marker = get_markers(board)
        prompt = self.prompt_provider.create_prompt(
            format_board(board), ai_marker, human_marker, difficulty, len(board)
        )
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=10,
        )
        if not response.choices or not response.choices[0].message or not response.choices[0].message.content:
            raise AIClientError("Invalid response structure from DeepSeek API")
        return response.choices[0].message.content.strip()

    @staticmethod
    def _parse_move(reply: str, valid_moves) -> Coordinate:
        match = MOVE_PATTERN.search(reply)
        if not match:
            raise AIClientError(f'Could not parse AI response "{reply}" into coordinates')

        move = Coordinate(x=int(match.group(1)), y=int(match.group(2)))
        if move not in valid_moves:
            raise AIClientError(f'AI response "{reply}" parsed to ({move.x},{move.y}), which is not a valid move')
        return move


def create_ai_client(api_key=None, model=None, base_url=DEFAULT_DEEPSEEK_BASE_URL, timeout=10.0,
                     prompt_provider=None):
    """DeepSeek-backed client when a real key is configured, heuristic client otherwise."""
    if api_key and api_key != "fallback":
        logger.info("Using DeepSeek AI client (model: %s)", model or DEFAULT_DEEPSEEK_MODEL)
        return DeepSeekAIClient(api_key, model=model, base_url=base_url, timeout=timeout,
                                prompt_provider=prompt_provider)

    logger.info("Using simple fallback AI client")
    return SimpleAIClient()

from typing import Protocol

from .board_logic import default_win_length


class PromptProvider(Protocol):
    def create_prompt(self, formatted_board: str, ai_marker: str, human_marker: str,
                      difficulty: str, size: int) -> str:
        ...


class BasePromptProvider:
    def create_prompt(self, formatted_board, ai_marker, human_marker, difficulty, size):
        return (
            f"You are playing Tic Tac Toe on a {size}x{size} board. "
            f"You are {ai_marker} and your opponent is {human_marker}.\n"
            "The current board looks like this:\n\n"
            f"{formatted_board}\n\n"
            f"You need to make the best move as {ai_marker} with {difficulty} difficulty.\n"
            "If the difficulty is 'easy', you may make mistakes sometimes.\n"
            "If the difficulty is 'medium', you should make decent moves but not perfect.\n"
            "If the difficulty is 'hard', you should make the optimal move.\n\n"
            'Analyze the board and respond with just a single valid move in the format: "x,y"\n'
            f"where x is the column (0-{size - 1}) and y is the row (0-{size - 1}) of your chosen move.\n"
            "Ensure the move is valid (the cell is empty)."
        )


class StrategicPromptProvider:
    """Longer prompt with the rules, a short analysis and tips per difficulty."""

    DIFFICULTY_TIPS = {
        "easy": [
            "• May make random or less optimal moves occasionally.",
            "• Focus on completing simple lines.",
        ],
        "medium": [
            "• Try to set up two-way threats (forks).",
            "• Consider taking center or corners if available and safe.",
            "• Look 1-2 moves ahead.",
        ],
        "hard": [
            "• Aim for perfect play; never make a move that allows the opponent to force a win.",
            "• Prioritize creating forks and blocking opponent's forks.",
            "• Control key positions (center, corners).",
            "• Think several moves ahead, considering all opponent responses.",
        ],
    }

    def create_prompt(self, formatted_board, ai_marker, human_marker, difficulty, size):
        win_length = default_win_length(size)
        return (
            f"Tic-Tac-Toe Strategy Assistant ({difficulty} mode)\n\n"
            "Game Rules:\n"
            f"- Board: {size}x{size} grid\n"
            "- X always moves first\n"
            f"- Win by getting {win_length} in a row (horizontally, vertically, or diagonally)\n"
            f"- You are playing as {ai_marker}\n"
            f"- Your opponent is playing as {human_marker}\n\n"
            "Current Board State:\n"
            f"```\n{formatted_board}\n```\n\n"
            "Analysis:\n"
            f"{self._board_analysis(ai_marker, human_marker, size, win_length)}\n\n"
            f"Strategic Guidance ({difficulty}):\n"
            f"{self._difficulty_tips(difficulty, ai_marker)}\n\n"
            "Required Response Format:\n"
            f"Provide ONLY the coordinates of your optimal move for marker '{ai_marker}' "
            'in the format "x,y" (0-based indices). Choose an empty cell.\n'
            'Example: "1,2" for column 1, row 2.'
        )

    def _board_analysis(self, ai_marker, human_marker, size, win_length):
        center = ("Critical (single center square)" if size % 2 == 1
                  else "Important (multiple central squares)")
        return "\n".join([
            f"- Your marker: {ai_marker}",
            f"- Opponent marker: {human_marker}",
            f"- Next turn: It's currently {ai_marker}'s turn to move.",
            f"- Center control: {center} is strategically valuable.",
            f"- Corner importance: {'High' if size <= 5 else 'Medium'} for board control.",
            f"- Win condition: {win_length} in a row needed.",
        ])

    def _difficulty_tips(self, difficulty, ai_marker):
        base_tips = [
            f"• Look for immediate winning moves for yourself ({ai_marker}).",
            "• Block any immediate winning moves for the opponent.",
        ]
        tips = self.DIFFICULTY_TIPS.get(difficulty, self.DIFFICULTY_TIPS["medium"])
        return "\n".join(base_tips + tips)

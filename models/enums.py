from enum import Enum

class PlayerMarker(str, Enum):
    X = "X"
    O = "O"

class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

class GameState(str, Enum):
    X_WIN = "X_WIN"
    O_WIN = "O_WIN"
    DRAW = "DRAW"
    IN_PROGRESS = "IN_PROGRESS"

class GameResult(str, Enum):
    PLAYER_WIN = "PLAYER_WIN"
    AI_WIN = "AI_WIN"
    DRAW = "DRAW"

from sqlalchemy.orm import sessionmaker

from database import create_db_engine, init_db
from models.board import Coordinate


def make_session_factory():
    """Fresh in-memory database with the schema created."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ScriptedAIClient:
    """Plays the given moves in order; an Exception instance in the script is raised instead."""

    def __init__(self, *moves):
        self.moves = list(moves)
        self.calls = []

    def get_next_move(self, board, difficulty):
        self.calls.append(([list(row) for row in board], difficulty))
        move = self.moves.pop(0)
        if isinstance(move, Exception):
            raise move
        if isinstance(move, tuple):
            return Coordinate(x=move[0], y=move[1])
        return move

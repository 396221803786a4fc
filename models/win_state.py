from sqlalchemy import Column, Integer, String, DateTime, JSON, Index, func
from database import Base


class WinState(Base):
    __tablename__ = "win_states"
    __table_args__ = (
        Index("board_hash_idx", "board_hash", unique=True),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    board_hash = Column(String, nullable=False)
    board_state = Column(JSON, nullable=False)  # [["X", "O", null], ...]
    winner = Column(String, nullable=False)
    win_length = Column(Integer, nullable=False, default=3)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "boardHash": self.board_hash,
            "boardState": self.board_state,
            "winner": self.winner,
            "winLength": self.win_length,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

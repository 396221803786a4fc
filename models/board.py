# models/board.py
from dataclasses import dataclass
from typing import List, Optional

# A cell holds "X", "O" or None; rows are indexed by y, columns by x
Cell = Optional[str]
Board = List[List[Cell]]


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def to_dict(self):
        return {"x": self.x, "y": self.y}

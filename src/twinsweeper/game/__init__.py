"""
Grid logic for one player's board.

Provides cells, board generation, flood-fill revealing and difficulty
profiles.
"""
from .cell import Cell, CellContent, CellState
from .board import Board, RevealOutcome
from .difficulty import Difficulty, DifficultyProfile

__all__ = [
    "Cell",
    "CellContent",
    "CellState",
    "Board",
    "RevealOutcome",
    "Difficulty",
    "DifficultyProfile",
]

"""
Cooperative two-board minesweeper.

Two players clear separate boards while sharing one pool of lives and
one score, taking alternating turns.
"""
from .game import Board, Cell, CellContent, CellState, Difficulty, DifficultyProfile
from .session import GameSession, GameState, ScoringPolicy

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Cell",
    "CellContent",
    "CellState",
    "Difficulty",
    "DifficultyProfile",
    "GameSession",
    "GameState",
    "ScoringPolicy",
]

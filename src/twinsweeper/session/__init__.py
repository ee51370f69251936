"""
Game session module.

Provides the two-board session, its scoring policy and the question bank.
"""
from .game import GameSession, GameState, CellView
from .questions import Question, QuestionBank, QuestionPresenter, DEFAULT_QUESTIONS
from .scoring import ScoringPolicy

__all__ = [
    "GameSession",
    "GameState",
    "CellView",
    "Question",
    "QuestionBank",
    "QuestionPresenter",
    "DEFAULT_QUESTIONS",
    "ScoringPolicy",
]

"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from twinsweeper.game import Board, Cell, CellContent, Difficulty
from twinsweeper.session import GameSession, Question


# 5x5 board with mines in two opposite corners.
CORNER_MINES_LAYOUT = (
    "....*",
    ".....",
    ".....",
    ".....",
    "*....",
)


# ============================================================================
# Helpers
# ============================================================================

def install_boards(
    session: GameSession, layout1: Sequence[str], layout2: Sequence[str]
) -> GameSession:
    """Swap a session's random boards for fixed layouts."""
    session._boards = {1: Board.from_layout(layout1), 2: Board.from_layout(layout2)}
    return session


class ScriptedPresenter:
    """Answers questions from a fixed list and remembers what was asked."""

    def __init__(self, answers: Sequence[bool]) -> None:
        self.answers: List[bool] = list(answers)
        self.asked: List[Question] = []

    def __call__(self, question: Question) -> bool:
        self.asked.append(question)
        return self.answers.pop(0)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_board() -> Board:
    """5x5 board with mines at (0, 4) and (4, 0)."""
    return Board.from_layout(CORNER_MINES_LAYOUT)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(5, 5, 0)


@pytest.fixture
def random_board() -> Board:
    """Seeded random 9x9 board with 10 mines."""
    return Board(9, 9, 10, questions=3, surprises=2, rng=random.Random(7))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(content=CellContent.MINE)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(content=CellContent.NUMBER, adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session() -> GameSession:
    """Seeded EASY session with random boards."""
    return GameSession(Difficulty.EASY, rng=random.Random(1234))


@pytest.fixture
def corner_session() -> GameSession:
    """EASY session whose both boards use the corner mine layout."""
    game = GameSession(Difficulty.EASY, rng=random.Random(99))
    return install_boards(game, CORNER_MINES_LAYOUT, CORNER_MINES_LAYOUT)


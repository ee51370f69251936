"""
Difficulty profiles.

A profile fixes the grid size, mine count, special tile counts and the
shared lives a new cooperative game starts with.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


def validate_dimensions(
    rows: int, cols: int, mines: int, questions: int = 0, surprises: int = 0
) -> None:
    """
    Check that a grid can hold the requested tiles.

    At least one plain safe cell must remain.

    Raises:
        ValueError: If the size or any tile count is out of range.
    """
    if rows < 1 or cols < 1:
        raise ValueError("Board dimensions must be positive")
    if mines < 0 or questions < 0 or surprises < 0:
        raise ValueError("Tile counts cannot be negative")
    max_tiles = rows * cols - 1
    if mines > max_tiles:
        raise ValueError(f"Too many mines (max {max_tiles})")
    if mines + questions + surprises > max_tiles:
        raise ValueError("Too many special cells for board size")


# ============================================================================
# Profile Configuration
# ============================================================================

@dataclass(frozen=True)
class DifficultyProfile:
    """
    Immutable configuration for one difficulty level.

    Attributes:
        name: Display name of the level.
        rows: Number of rows on each board.
        cols: Number of columns on each board.
        mines: Mines placed on each board.
        starting_lives: Shared lives at the start of a game.
        questions: Question tiles placed on each board.
        surprises: Surprise tiles placed on each board.
    """

    name: str
    rows: int
    cols: int
    mines: int
    starting_lives: int
    questions: int = 0
    surprises: int = 0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        validate_dimensions(
            self.rows, self.cols, self.mines, self.questions, self.surprises
        )
        if self.starting_lives < 1:
            raise ValueError("Starting lives must be at least 1")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


# ============================================================================
# Named Levels
# ============================================================================

class Difficulty(Enum):
    """Named difficulty levels selectable by the players."""

    EASY = DifficultyProfile("EASY", 9, 9, 10, 10, questions=3, surprises=2)
    MEDIUM = DifficultyProfile("MEDIUM", 13, 13, 26, 8, questions=5, surprises=3)
    HARD = DifficultyProfile("HARD", 16, 16, 44, 6, questions=7, surprises=4)

    @property
    def profile(self) -> DifficultyProfile:
        return self.value

    @property
    def rows(self) -> int:
        return self.value.rows

    @property
    def cols(self) -> int:
        return self.value.cols

    @property
    def mines(self) -> int:
        return self.value.mines

    @property
    def starting_lives(self) -> int:
        return self.value.starting_lives

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Difficulty":
        """
        Look up a level by name, ignoring case.

        Unknown names (and None) select EASY without complaint.
        """
        if name is None:
            return cls.EASY
        return cls.__members__.get(name.strip().upper(), cls.EASY)

    @classmethod
    def resolve(cls, value: Union["Difficulty", str, None]) -> "Difficulty":
        """Accept either a Difficulty member or a level name."""
        if isinstance(value, cls):
            return value
        return cls.from_name(value)

"""
Cell module for the cooperative two-board game.

A cell has a visibility (hidden/flagged/revealed) and a content
(empty/number/mine/question/surprise) fixed when its board is generated.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()


class CellContent(Enum):
    """What a cell holds underneath."""

    EMPTY = auto()
    NUMBER = auto()
    MINE = auto()
    QUESTION = auto()
    SURPRISE = auto()


# Observation codes for hidden/flagged cells and revealed special contents.
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9
OBS_QUESTION = 10
OBS_SURPRISE = 11


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single slot on one player's grid.

    Attributes:
        content: What the cell holds.
        adjacent_mines: Mines among the 8 neighbours, set at generation.
        state: Current visual state (hidden, flagged or revealed).
    """

    content: CellContent = CellContent.EMPTY
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was hidden and is now revealed, False if it
            was already revealed or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self.content == CellContent.MINE

    @property
    def is_special(self) -> bool:
        """Check if cell is a question or surprise tile."""
        return self.content in (CellContent.QUESTION, CellContent.SURPRISE)

    @property
    def symbol(self) -> str:
        """Text shown for this cell by a front end."""
        if self.state == CellState.HIDDEN:
            return ""
        if self.state == CellState.FLAGGED:
            return "F"
        if self.content == CellContent.MINE:
            return "M"
        if self.content == CellContent.NUMBER:
            return str(self.adjacent_mines)
        if self.content == CellContent.QUESTION:
            return "Q"
        if self.content == CellContent.SURPRISE:
            return "S"
        return ""

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed empty/number cell with adjacent mine count
            9: Revealed mine
            10: Revealed question tile
            11: Revealed surprise tile
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.content == CellContent.MINE:
            return OBS_MINE
        if self.content == CellContent.QUESTION:
            return OBS_QUESTION
        if self.content == CellContent.SURPRISE:
            return OBS_SURPRISE
        return self.adjacent_mines

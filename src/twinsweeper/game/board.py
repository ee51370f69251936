"""
Board module for the cooperative two-board game.

Implements one player's grid: mine and special tile placement, adjacency
counts, flood-fill revealing, flag toggling and the cleared check.
"""
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple

import numpy as np

from .cell import Cell, CellContent, CellState
from .difficulty import DifficultyProfile, validate_dimensions


Position = Tuple[int, int]

# Characters understood by Board.from_layout.
LAYOUT_MINE = "*"
LAYOUT_QUESTION = "?"
LAYOUT_SURPRISE = "!"


# ============================================================================
# Reveal Outcome
# ============================================================================

@dataclass
class RevealOutcome:
    """
    Result of a reveal request.

    Attributes:
        success: Whether anything was revealed.
        content: Content of the targeted cell when successful.
        revealed: Every position that changed to revealed, target first.
    """

    success: bool = False
    content: Optional[CellContent] = None
    revealed: List[Position] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def hit_mine(self) -> bool:
        return self.content == CellContent.MINE

    @property
    def is_special(self) -> bool:
        return self.content in (CellContent.QUESTION, CellContent.SURPRISE)

    @property
    def safe_cells_revealed(self) -> int:
        """Number of non-mine cells opened by this reveal."""
        if self.hit_mine:
            return len(self.revealed) - 1
        return len(self.revealed)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    One player's grid.

    Mines and special tiles are placed once at construction and never
    moved. Adjacent mine counts are computed at the same time and never
    recomputed.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        total_mines: int,
        questions: int = 0,
        surprises: int = 0,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create a board with randomly placed mines and special tiles.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            total_mines: Mines to place.
            questions: Question tiles to place on safe cells.
            surprises: Surprise tiles to place on safe cells.
            rng: Random source, module-level random if omitted.
        """
        validate_dimensions(rows, cols, total_mines, questions, surprises)
        self.rows = rows
        self.cols = cols
        self.total_mines = total_mines
        self._rng = rng or random.Random()
        self._frozen = False
        self._init_grid()
        mine_positions = self._place_mines()
        self._place_specials(mine_positions, questions, surprises)
        self._calculate_adjacent_mines()

    @classmethod
    def from_profile(
        cls,
        profile: DifficultyProfile,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """Create a random board sized by a difficulty profile."""
        return cls(
            profile.rows,
            profile.cols,
            profile.mines,
            questions=profile.questions,
            surprises=profile.surprises,
            rng=rng,
        )

    @classmethod
    def from_layout(cls, layout: Sequence[str]) -> "Board":
        """
        Build a board with a fixed layout.

        Each string is one row: ``*`` mine, ``?`` question tile,
        ``!`` surprise tile, anything else a plain safe cell. Adjacent
        counts are computed as for a random board.

        Args:
            layout: Equal-length row strings.

        Returns:
            Board with exactly the given contents.
        """
        rows = len(layout)
        cols = len(layout[0]) if rows else 0
        if rows == 0 or cols == 0:
            raise ValueError("Board dimensions must be positive")
        if any(len(line) != cols for line in layout):
            raise ValueError("Layout rows must have equal length")

        board = cls(rows, cols, 0)
        for row, line in enumerate(layout):
            for col, char in enumerate(line):
                if char == LAYOUT_MINE:
                    board._grid[row][col].content = CellContent.MINE
                elif char == LAYOUT_QUESTION:
                    board._grid[row][col].content = CellContent.QUESTION
                elif char == LAYOUT_SURPRISE:
                    board._grid[row][col].content = CellContent.SURPRISE
        board.total_mines = sum(
            1 for row, col in board.positions() if board._grid[row][col].is_mine
        )
        board._calculate_adjacent_mines()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of hidden empty cells."""
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(self.cols)] for _ in range(self.rows)
        ]

    def _place_mines(self) -> List[Position]:
        """Place mines uniformly at random without replacement."""
        mine_positions = self._rng.sample(list(self.positions()), self.total_mines)
        for row, col in mine_positions:
            self._grid[row][col].content = CellContent.MINE
        return mine_positions

    def _place_specials(
        self, mine_positions: List[Position], questions: int, surprises: int
    ) -> None:
        """Place question and surprise tiles on distinct safe cells."""
        taken = set(mine_positions)
        candidates = [pos for pos in self.positions() if pos not in taken]
        chosen = self._rng.sample(candidates, questions + surprises)
        for index, (row, col) in enumerate(chosen):
            if index < questions:
                self._grid[row][col].content = CellContent.QUESTION
            else:
                self._grid[row][col].content = CellContent.SURPRISE

    def _calculate_adjacent_mines(self) -> None:
        """Set adjacent counts and mark plain safe cells EMPTY or NUMBER."""
        for row, col in self.positions():
            cell = self._grid[row][col]
            if cell.is_mine:
                continue
            cell.adjacent_mines = self._count_adjacent_mines(row, col)
            if cell.is_special:
                continue
            if cell.adjacent_mines == 0:
                cell.content = CellContent.EMPTY
            else:
                cell.content = CellContent.NUMBER

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 surrounding cells.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell at the given position.

        Empty cells flood outward through connected empty cells, opening
        the ring of numbered cells around them. Question and surprise
        tiles are never opened by the flood.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Outcome listing the revealed positions, falsy when refused.
        """
        if self._frozen or not self.is_valid_position(row, col):
            return RevealOutcome()
        cell = self._grid[row][col]
        if not cell.reveal():
            return RevealOutcome()

        outcome = RevealOutcome(True, cell.content, [(row, col)])
        if cell.content == CellContent.EMPTY:
            self._flood_from(row, col, outcome.revealed)
        return outcome

    def _flood_from(self, row: int, col: int, revealed: List[Position]) -> None:
        """Open the empty region around an already revealed empty cell."""
        visited: Set[Position] = {(row, col)}
        pending = deque([(row, col)])
        while pending:
            current_row, current_col = pending.popleft()
            for neighbor in self._get_neighbors(current_row, current_col):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                cell = self._grid[neighbor[0]][neighbor[1]]
                if not cell.is_hidden or cell.is_special:
                    continue
                cell.reveal()
                revealed.append(neighbor)
                if cell.content == CellContent.EMPTY:
                    pending.append(neighbor)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._frozen or not self.is_valid_position(row, col):
            return False
        return self._grid[row][col].toggle_flag()

    def finalize(self) -> int:
        """
        Reveal every safe cell that is still closed.

        Wrongly flagged safe cells are opened as well. Mines keep their
        current state.

        Returns:
            Number of cells revealed.
        """
        count = 0
        for row, col in self.positions():
            cell = self._grid[row][col]
            if not cell.is_mine and not cell.is_revealed:
                cell.state = CellState.REVEALED
                count += 1
        return count

    def freeze(self) -> None:
        """Refuse all further reveal and flag requests."""
        self._frozen = True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def mines_left(self) -> int:
        """Mines neither revealed nor flagged, never below zero."""
        found = sum(
            1
            for row, col in self.positions()
            if self._grid[row][col].is_mine and not self._grid[row][col].is_hidden
        )
        return max(self.total_mines - found, 0)

    @property
    def is_cleared(self) -> bool:
        """
        Check whether the board is complete.

        A board is complete when every non-mine cell is revealed, or when
        it has mines and every one of them is flagged.
        """
        all_safe_revealed = True
        all_mines_flagged = True
        for row, col in self.positions():
            cell = self._grid[row][col]
            if cell.is_mine:
                if not cell.is_flagged:
                    all_mines_flagged = False
            elif not cell.is_revealed:
                all_safe_revealed = False
        return all_safe_revealed or (self.total_mines > 0 and all_mines_flagged)

    def is_flagged(self, row: int, col: int) -> bool:
        """Check if the cell at position is flagged."""
        cell = self.get_cell(row, col)
        return cell is not None and cell.is_flagged

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of Cell.to_observation values.
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        return [
            (row, col)
            for row, col in self.positions()
            if self._grid[row][col].is_hidden
        ]

    def mine_positions(self) -> List[Position]:
        """Positions of every mine, row-major."""
        return [
            (row, col)
            for row, col in self.positions()
            if self._grid[row][col].is_mine
        ]

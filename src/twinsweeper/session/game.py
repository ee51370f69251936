"""
Game session for the cooperative two-board game.

A session owns both players' boards, the shared lives and score, whose
turn it is, and the overall RUNNING/WON/LOST state. Reveal and flag
requests are forwarded to the named board and their outcomes folded into
the shared resources.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Set, Union

import numpy as np

from ..game.board import Board, Position, RevealOutcome
from ..game.cell import CellContent, CellState
from ..game.difficulty import Difficulty
from .questions import QuestionBank, QuestionPresenter
from .scoring import ScoringPolicy

logger = logging.getLogger(__name__)

BOARD_NUMBERS = (1, 2)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a session."""

    RUNNING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class CellView:
    """What a front end needs to draw one cell."""

    visibility: CellState
    symbol: str
    enabled: bool


HIDDEN_VIEW = CellView(CellState.HIDDEN, "", True)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Two boards sharing one pool of lives and one score.

    Once the session leaves RUNNING both boards are frozen and every
    mutating call is refused.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str, None] = Difficulty.EASY,
        scoring: Optional[ScoringPolicy] = None,
        question_bank: Optional[QuestionBank] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            difficulty: Level or level name; unknown names play EASY.
            scoring: Point values, defaults if omitted.
            question_bank: Source of questions for question tiles.
            rng: Random source for layouts and surprise rolls.
        """
        self.difficulty = Difficulty.resolve(difficulty)
        self.scoring = scoring or ScoringPolicy()
        self._rng = rng or random.Random()
        self.question_bank = question_bank or QuestionBank(rng=self._rng)
        self._presenter: Optional[QuestionPresenter] = None
        self._reset()

    @classmethod
    def start_new_game(
        cls, difficulty: Union[Difficulty, str, None] = Difficulty.EASY, **kwargs
    ) -> "GameSession":
        """Create a session for a level or a level name."""
        return cls(difficulty, **kwargs)

    def _reset(self) -> None:
        """Deal fresh boards and put every shared value back to its start."""
        profile = self.difficulty.profile
        self._boards: Dict[int, Board] = {
            number: Board.from_profile(profile, rng=self._rng)
            for number in BOARD_NUMBERS
        }
        self._shared_lives = profile.starting_lives
        self._shared_score = 0
        self._current_player_turn = 1
        self._state = GameState.RUNNING
        self._last_action_message: Optional[str] = None
        self._scored_flags: Dict[int, Set[Position]] = {
            number: set() for number in BOARD_NUMBERS
        }
        self.total_questions_answered = 0
        self.total_correct_answers = 0
        logger.info(
            "New %s game: two %dx%d boards, %d mines each, %d lives",
            profile.name, profile.rows, profile.cols,
            profile.mines, profile.starting_lives,
        )

    def restart_game(self) -> None:
        """Replace both boards and reset lives, score, turn and state."""
        logger.info("Restarting game")
        self._reset()

    def register_question_presenter(
        self, presenter: Optional[QuestionPresenter]
    ) -> None:
        """Set the handler asked to answer question tiles."""
        self._presenter = presenter

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal_cell(self, board_number: int, row: int, col: int) -> bool:
        """
        Reveal a cell on one player's board.

        Args:
            board_number: 1 or 2.
            row: Row index.
            col: Column index.

        Returns:
            True if the reveal was applied, False if refused.
        """
        if not self.is_running:
            return False
        board = self.get_board(board_number)
        if board is None:
            return False
        outcome = board.reveal_cell(row, col)
        if not outcome:
            return False

        logger.debug(
            "Board %d reveal (%d, %d): %s, %d cells",
            board_number, row, col, outcome.content.name, len(outcome.revealed),
        )
        try:
            self._apply_reveal(board_number, outcome)
        finally:
            self._check_completion()
        return True

    def _apply_reveal(self, board_number: int, outcome: RevealOutcome) -> None:
        """Fold a reveal outcome into the shared score and lives."""
        self._add_score(outcome.safe_cells_revealed * self.scoring.safe_cell_points)
        if outcome.hit_mine:
            self._lose_lives(
                self.scoring.mine_life_cost,
                f"Boom! Player {board_number} hit a mine.",
            )
        elif outcome.content == CellContent.QUESTION:
            self._ask_question()
        elif outcome.content == CellContent.SURPRISE:
            self._open_surprise()

    def _ask_question(self) -> None:
        if self._presenter is None:
            self._post("Question tile opened, but nobody is there to ask.")
            return
        question = self.question_bank.draw()
        correct = bool(self._presenter(question))
        self.total_questions_answered += 1
        if correct:
            self.total_correct_answers += 1
            self._add_score(self.scoring.question_correct_points)
            self._post(
                f"Correct answer! +{self.scoring.question_correct_points} points."
            )
        else:
            self._add_score(-self.scoring.question_wrong_penalty)
            self._post(
                f"Wrong answer. The answer was '{question.answer}'. "
                f"-{self.scoring.question_wrong_penalty} points."
            )

    def _open_surprise(self) -> None:
        if self._rng.random() < self.scoring.surprise_good_chance:
            self._add_score(self.scoring.surprise_bonus_points)
            self._post(
                f"Good surprise! +{self.scoring.surprise_bonus_points} points."
            )
        else:
            self._lose_lives(
                self.scoring.surprise_life_cost, "Bad surprise! You lost a life."
            )

    def toggle_flag(self, board_number: int, row: int, col: int) -> bool:
        """
        Place or remove a flag on one player's board.

        The first time a cell is flagged it scores: a mine earns points,
        a safe cell costs points.

        Returns:
            True if the flag was toggled, False if refused.
        """
        if not self.is_running:
            return False
        board = self.get_board(board_number)
        if board is None or not board.toggle_flag(row, col):
            return False

        cell = board.get_cell(row, col)
        logger.debug(
            "Board %d %s (%d, %d)",
            board_number, "flag" if cell.is_flagged else "unflag", row, col,
        )
        scored = self._scored_flags[board_number]
        if cell.is_flagged and (row, col) not in scored:
            scored.add((row, col))
            if cell.is_mine:
                self._add_score(self.scoring.correct_flag_points)
            else:
                self._add_score(-self.scoring.wrong_flag_penalty)
        self._check_completion()
        return True

    def switch_turn(self) -> None:
        """Hand the turn to the other player while the game is running."""
        if not self.is_running:
            return
        self._current_player_turn = 2 if self._current_player_turn == 1 else 1

    # ========================================================================
    # Shared Resources
    # ========================================================================

    def _add_score(self, delta: int) -> None:
        self._shared_score = max(self._shared_score + delta, 0)

    def _lose_lives(self, count: int, reason: str) -> None:
        self._shared_lives = max(self._shared_lives - count, 0)
        if self._shared_lives == 0:
            self._finish(GameState.LOST)
            return
        self._post(f"{reason} Lives left: {self._shared_lives}.")

    def _post(self, message: str) -> None:
        self._last_action_message = message

    def get_and_clear_last_action_message(self) -> Optional[str]:
        """Return the pending notification, if any, and clear it."""
        message = self._last_action_message
        self._last_action_message = None
        return message

    # ========================================================================
    # Completion
    # ========================================================================

    def _check_completion(self) -> None:
        """Finalize cleared boards and end the game once both are cleared."""
        if not self.is_running:
            return
        cleared = [board for board in self._boards.values() if board.is_cleared]
        for board in cleared:
            board.finalize()
        if len(cleared) == len(self._boards):
            self._add_score(self.scoring.win_bonus(self._shared_lives))
            self._finish(GameState.WON)

    def _finish(self, state: GameState) -> None:
        self._state = state
        for board in self._boards.values():
            if state == GameState.WON:
                board.finalize()
            board.freeze()
        if state == GameState.WON:
            self._post(f"Victory! Both boards are cleared. Final score: {self._shared_score}.")
        else:
            self._post(f"Game over. All lives are gone. Final score: {self._shared_score}.")
        logger.info("Game %s with score %d", state.name, self._shared_score)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == GameState.RUNNING

    @property
    def is_over(self) -> bool:
        return self._state != GameState.RUNNING

    @property
    def shared_lives(self) -> int:
        return self._shared_lives

    @property
    def shared_score(self) -> int:
        return self._shared_score

    @property
    def current_player_turn(self) -> int:
        return self._current_player_turn

    @property
    def difficulty_name(self) -> str:
        return self.difficulty.name

    @property
    def starting_lives(self) -> int:
        return self.difficulty.starting_lives

    @property
    def board1(self) -> Board:
        return self._boards[1]

    @property
    def board2(self) -> Board:
        return self._boards[2]

    def get_board(self, board_number: int) -> Optional[Board]:
        """Board for player 1 or 2, None for any other number."""
        return self._boards.get(board_number)

    def board_rows(self, board_number: int) -> int:
        board = self.get_board(board_number)
        return board.rows if board is not None else 0

    def board_cols(self, board_number: int) -> int:
        board = self.get_board(board_number)
        return board.cols if board is not None else 0

    def total_mines(self, board_number: int) -> int:
        board = self.get_board(board_number)
        return board.total_mines if board is not None else 0

    def get_mines_left(self, board_number: int) -> int:
        board = self.get_board(board_number)
        return board.mines_left if board is not None else 0

    def is_flagged(self, board_number: int, row: int, col: int) -> bool:
        board = self.get_board(board_number)
        return board is not None and board.is_flagged(row, col)

    def get_cell_view(self, board_number: int, row: int, col: int) -> CellView:
        """
        Display data for one cell.

        Unknown boards and positions look like an untouched hidden cell.
        """
        board = self.get_board(board_number)
        cell = board.get_cell(row, col) if board is not None else None
        if cell is None:
            return HIDDEN_VIEW
        return CellView(cell.state, cell.symbol, not cell.is_revealed)

    def get_observation(self) -> np.ndarray:
        """Both boards stacked into an int8 array of shape (2, rows, cols)."""
        return np.stack([self._boards[number].get_observation() for number in BOARD_NUMBERS])

"""
Controller between a front end and the game session.

Front ends talk only to the controller: it owns the current session,
answers queries with neutral values before a game exists, and routes
clicks through the turn policy.
"""
import random
from typing import Any, Dict, Optional, Union

from ..game.difficulty import Difficulty
from ..session.game import HIDDEN_VIEW, CellView, GameSession
from ..session.questions import QuestionBank, QuestionPresenter
from ..session.scoring import ScoringPolicy
from .turns import REFUSED, ActionResult, GracePeriodTurnPolicy


class GameController:
    """Entry point used by front ends to start, play and inspect games."""

    def __init__(
        self,
        scoring: Optional[ScoringPolicy] = None,
        question_bank: Optional[QuestionBank] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._scoring = scoring
        self._question_bank = question_bank
        self._rng = rng
        self._presenter: Optional[QuestionPresenter] = None
        self._session: Optional[GameSession] = None
        self._turns: Optional[GracePeriodTurnPolicy] = None
        self._warning: Optional[str] = None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start_new_game(
        self, difficulty: Union[Difficulty, str, None] = Difficulty.EASY
    ) -> GameSession:
        """Start a game for a level or level name, replacing any current one."""
        self._session = GameSession.start_new_game(
            difficulty,
            scoring=self._scoring,
            question_bank=self._question_bank,
            rng=self._rng,
        )
        self._session.register_question_presenter(self._presenter)
        self._turns = GracePeriodTurnPolicy(self._session)
        self._warning = None
        return self._session

    def restart_game(self) -> None:
        """Restart with the same level. Does nothing before the first game."""
        if self._session is None:
            return
        self._session.restart_game()
        self._turns.start_turn()
        self._warning = None

    def register_question_presenter(self, presenter: Optional[QuestionPresenter]) -> None:
        self._presenter = presenter
        if self._session is not None:
            self._session.register_question_presenter(presenter)

    @property
    def session(self) -> Optional[GameSession]:
        return self._session

    # ========================================================================
    # Clicks
    # ========================================================================

    def handle_click(
        self, board_number: int, row: int, col: int, flagging: bool = False
    ) -> ActionResult:
        """
        Apply a click from the player owning ``board_number``.

        Clicks on the board of the player who is waiting are refused with
        a warning message.
        """
        if not self.is_game_running():
            return REFUSED
        if self._session.get_board(board_number) is None:
            return REFUSED
        if board_number != self._session.current_player_turn:
            self._warning = (
                f"It is Player {self._session.current_player_turn}'s turn. Please wait."
            )
            return REFUSED
        if flagging:
            result = self._turns.flag(board_number, row, col)
        else:
            result = self._turns.reveal(board_number, row, col)
        if result.turn_ended:
            self._turns.start_turn()
        return result

    def get_and_clear_last_action_message(self) -> Optional[str]:
        """Pending warning or session notification, cleared once read."""
        if self._warning is not None:
            warning, self._warning = self._warning, None
            return warning
        if self._session is None:
            return None
        return self._session.get_and_clear_last_action_message()

    # ========================================================================
    # Queries
    # ========================================================================

    def is_game_running(self) -> bool:
        return self._session is not None and self._session.is_running

    def is_game_over(self) -> bool:
        return self._session is not None and self._session.is_over

    @property
    def in_grace_period(self) -> bool:
        return self._turns is not None and self._turns.in_grace_period

    @property
    def current_player_turn(self) -> int:
        return self._session.current_player_turn if self._session else 0

    @property
    def difficulty_name(self) -> str:
        return self._session.difficulty_name if self._session else ""

    @property
    def shared_lives(self) -> int:
        return self._session.shared_lives if self._session else 0

    @property
    def shared_score(self) -> int:
        return self._session.shared_score if self._session else 0

    @property
    def starting_lives(self) -> int:
        return self._session.starting_lives if self._session else 0

    def board_rows(self, board_number: int) -> int:
        return self._session.board_rows(board_number) if self._session else 0

    def board_cols(self, board_number: int) -> int:
        return self._session.board_cols(board_number) if self._session else 0

    def total_mines(self, board_number: int) -> int:
        return self._session.total_mines(board_number) if self._session else 0

    def mines_left(self, board_number: int) -> int:
        return self._session.get_mines_left(board_number) if self._session else 0

    def is_cell_flagged(self, board_number: int, row: int, col: int) -> bool:
        return self._session is not None and self._session.is_flagged(board_number, row, col)

    def cell_view(self, board_number: int, row: int, col: int) -> CellView:
        if self._session is None:
            return HIDDEN_VIEW
        return self._session.get_cell_view(board_number, row, col)

    def summary(self) -> Dict[str, Any]:
        """End-of-game figures for a result screen."""
        if self._session is None:
            return {}
        return {
            "state": self._session.state.name,
            "score": self._session.shared_score,
            "lives": self._session.shared_lives,
            "questions_answered": self._session.total_questions_answered,
            "correct_answers": self._session.total_correct_answers,
        }

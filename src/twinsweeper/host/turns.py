"""
Turn policy layered on top of the session primitives.

The session only mutates boards and advances turns when told to. This
module decides when a player's move ends their turn.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..session.game import GameSession


@dataclass(frozen=True)
class ActionResult:
    """
    What happened to a player's click.

    Attributes:
        applied: The session accepted the reveal or flag.
        turn_ended: The turn passed to the other player.
    """

    applied: bool
    turn_ended: bool = False

    def __bool__(self) -> bool:
        return self.applied


REFUSED = ActionResult(False)


class GracePeriodTurnPolicy:
    """
    Ends turns the way the two players expect at the table.

    A reveal ends the turn. Placing a flag opens a grace window on that
    cell: removing that same flag straight away keeps the turn, while any
    other flag or unflag ends it. Refused actions never end the turn.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._grace_cell: Optional[Tuple[int, int, int]] = None

    @property
    def in_grace_period(self) -> bool:
        return self._grace_cell is not None

    def start_turn(self) -> None:
        """Forget any grace window when a player becomes active."""
        self._grace_cell = None

    def reveal(self, board_number: int, row: int, col: int) -> ActionResult:
        if not self.session.reveal_cell(board_number, row, col):
            return REFUSED
        return ActionResult(True, self._end_turn())

    def flag(self, board_number: int, row: int, col: int) -> ActionResult:
        was_flagged = self.session.is_flagged(board_number, row, col)
        if not self.session.toggle_flag(board_number, row, col):
            return REFUSED

        target = (board_number, row, col)
        if was_flagged:
            if self._grace_cell == target:
                self._grace_cell = None
                return ActionResult(True, False)
            return ActionResult(True, self._end_turn())

        if self._grace_cell is not None:
            return ActionResult(True, self._end_turn())
        self._grace_cell = target
        return ActionResult(True, False)

    def _end_turn(self) -> bool:
        self._grace_cell = None
        if not self.session.is_running:
            return False
        self.session.switch_turn()
        if not self._has_moves(self.session.current_player_turn):
            # Nothing left to click on that board, so the same player goes on.
            self.session.switch_turn()
            return False
        return True

    def _has_moves(self, board_number: int) -> bool:
        """Check if a board still has safe cells left to open."""
        return not self.session.get_board(board_number).is_cleared

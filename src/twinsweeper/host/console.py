"""
Text front end for two players sharing one terminal.
"""
from typing import Callable, List

from ..game.cell import CellState
from ..session.questions import Question
from .controller import GameController

HELP_TEXT = """Commands:
  r <board> <row> <col>   reveal a cell
  f <board> <row> <col>   flag or unflag a cell
  restart                 deal new boards
  help                    show this text
  quit                    leave the game"""


def format_board(controller: GameController, board_number: int) -> List[str]:
    """
    Render one board as text lines.

    Hidden cells are ``.``, flags ``F``, revealed empty cells blank.
    """
    rows = controller.board_rows(board_number)
    cols = controller.board_cols(board_number)
    lines = ["   " + "".join(f"{col:>3}" for col in range(cols))]
    for row in range(rows):
        row_str = f"{row:>3}"
        for col in range(cols):
            view = controller.cell_view(board_number, row, col)
            if view.visibility == CellState.HIDDEN:
                symbol = "."
            else:
                symbol = view.symbol or " "
            row_str += f"{symbol:>3}"
        lines.append(row_str)
    return lines


class ConsoleGame:
    """Plays a game through input() and print()."""

    def __init__(
        self,
        controller: GameController,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.controller = controller
        self._input = input_fn
        self._output = output_fn
        controller.register_question_presenter(self.present_question)

    def present_question(self, question: Question) -> bool:
        """Ask a question and report whether the players got it right."""
        self._output(f"\nQUESTION: {question.text}")
        for index, option in enumerate(question.options, start=1):
            self._output(f"  {index}. {option}")
        while True:
            reply = self._input("Your answer: ").strip()
            if reply.isdigit() and 1 <= int(reply) <= len(question.options):
                return question.is_correct(int(reply) - 1)
            self._output(f"Please enter a number from 1 to {len(question.options)}.")

    def render(self) -> None:
        controller = self.controller
        for board_number in (1, 2):
            marker = "  <- your turn" if controller.current_player_turn == board_number else ""
            self._output(
                f"\nPlayer {board_number}  MINES LEFT: "
                f"{controller.mines_left(board_number)}{marker}"
            )
            for line in format_board(controller, board_number):
                self._output(line)
        self._output(
            f"\n{controller.difficulty_name}  SCORE: {controller.shared_score}  "
            f"LIVES: {controller.shared_lives}/{controller.starting_lives}"
        )

    def handle_command(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False when the players asked to quit, True otherwise.
        """
        parts = line.split()
        if not parts:
            return True
        command = parts[0].lower()
        if command in ("q", "quit", "exit"):
            return False
        if command == "restart":
            self.controller.restart_game()
            return True
        if command in ("r", "f") and len(parts) == 4 and all(p.lstrip("-").isdigit() for p in parts[1:]):
            board_number, row, col = (int(p) for p in parts[1:])
            result = self.controller.handle_click(board_number, row, col, flagging=command == "f")
            if not result:
                message = self.controller.get_and_clear_last_action_message()
                self._output(message or "That move is not allowed.")
            return True
        self._output(HELP_TEXT)
        return True

    def run(self) -> None:
        """Read and apply commands until the players quit."""
        self._output(HELP_TEXT)
        while True:
            self.render()
            message = self.controller.get_and_clear_last_action_message()
            if message:
                self._output(f"\n>> {message}")
            if self.controller.is_game_over():
                summary = self.controller.summary()
                self._output(
                    f"\n{summary['state']}  score {summary['score']}, "
                    f"{summary['correct_answers']}/{summary['questions_answered']} questions correct"
                )
                try:
                    again = self._input("Play again? [y/N] ").strip().lower()
                except EOFError:
                    return
                if again != "y":
                    return
                self.controller.restart_game()
                continue
            prompt = f"Player {self.controller.current_player_turn}> "
            try:
                line = self._input(prompt)
                if not self.handle_command(line):
                    return
            except EOFError:
                return

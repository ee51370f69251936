"""
Gymnasium environment wrapper for the cooperative game.

Lets scripted players drive a full two-board session through the
standard reset/step interface.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ..game.cell import OBS_FLAGGED, OBS_HIDDEN, OBS_SURPRISE
from ..game.difficulty import Difficulty
from ..session.questions import QuestionPresenter
from ..session.scoring import ScoringPolicy
from .console import format_board
from .controller import GameController


# ============================================================================
# Cooperative Environment
# ============================================================================

class CoopMinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the two-board game.

    Observation:
        int8 array of shape (2, rows, cols), one layer per board, using
        Cell.to_observation codes (-2 flagged, -1 hidden, 0-8 counts,
        9 mine, 10 question, 11 surprise).

    Actions:
        Discrete space of size 2 * rows * cols, always applied to the
        board of the player on turn. Actions below rows * cols reveal
        cell (i // cols, i % cols); the rest toggle a flag on cell
        i - rows * cols.

    Rewards:
        - Change in shared score for an accepted action
        - -0.1 for a refused action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Union[Difficulty, str, None] = Difficulty.EASY,
        scoring: Optional[ScoringPolicy] = None,
        question_presenter: Optional[QuestionPresenter] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            difficulty: Level or level name for both boards.
            scoring: Point values for the session.
            question_presenter: Answers question tiles; unanswered if None.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = Difficulty.resolve(difficulty)
        self.render_mode = render_mode
        self._rng = random.Random()
        self.controller = GameController(scoring=scoring, rng=self._rng)
        self.controller.register_question_presenter(question_presenter)
        self.session = self.controller.start_new_game(self.difficulty)

        rows, cols = self.difficulty.rows, self.difficulty.cols
        self._cells = rows * cols

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_SURPRISE,
            shape=(2, rows, cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._cells)
        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Deal new boards for a fresh episode.

        Args:
            seed: Random seed for reproducible layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.controller.restart_game()
        self._steps = 0
        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Apply one action for the player on turn.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flagging, row, col = self._decode_action(int(action))
        score_before = self.session.shared_score
        self._steps += 1

        result = self.controller.handle_click(
            self.session.current_player_turn, row, col, flagging=flagging
        )
        if result.applied:
            reward = float(self.session.shared_score - score_before)
        else:
            reward = -0.1

        info = self._get_info()
        info["turn_ended"] = result.turn_ended
        info["message"] = self.controller.get_and_clear_last_action_message()

        terminated = self.session.is_over
        return self.session.get_observation(), reward, terminated, False, info

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Split a flat action into (flagging, row, col)."""
        flagging = action >= self._cells
        index = action % self._cells
        return flagging, index // self.difficulty.cols, index % self.difficulty.cols

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "current_player": self.session.current_player_turn,
            "lives": self.session.shared_lives,
            "score": self.session.shared_score,
            "game_state": self.session.state.name,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions the player on turn may take.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.session.is_running:
            return mask
        layer = self.session.get_observation()[self.session.current_player_turn - 1]
        flat = layer.flatten()
        mask[: self._cells] = flat == OBS_HIDDEN
        mask[self._cells:] = (flat == OBS_HIDDEN) | (flat == OBS_FLAGGED)
        return mask

    def render(self) -> Optional[str]:
        """Render both boards."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        lines = []
        for board_number in (1, 2):
            lines.append(
                f"Player {board_number} (mines left {self.session.get_mines_left(board_number)})"
            )
            lines.extend(format_board(self.controller, board_number))
        lines.append(
            f"Score {self.session.shared_score}  Lives {self.session.shared_lives}  "
            f"Turn: player {self.session.current_player_turn}"
        )
        return "\n".join(lines)

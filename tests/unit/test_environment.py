"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from twinsweeper.game import Board, CellContent, Difficulty
from twinsweeper.host import CoopMinesweeperEnv


def find_cell(board: Board, content: CellContent):
    """First position on a board holding the given content."""
    for row, col in board.positions():
        if board.get_cell(row, col).content == content:
            return row, col
    raise AssertionError(f"no {content.name} cell on board")


def reveal_action(env: CoopMinesweeperEnv, row: int, col: int) -> int:
    return row * env.difficulty.cols + col


def flag_action(env: CoopMinesweeperEnv, row: int, col: int) -> int:
    return env.difficulty.rows * env.difficulty.cols + reveal_action(env, row, col)


@pytest.fixture
def env() -> CoopMinesweeperEnv:
    environment = CoopMinesweeperEnv(Difficulty.EASY, render_mode="ansi")
    environment.reset(seed=42)
    return environment


class TestSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_difficulty(self, env: CoopMinesweeperEnv) -> None:
        assert env.observation_space.shape == (2, 9, 9)
        assert env.action_space.n == 2 * 81

    def test_reset_observation_all_hidden(self, env: CoopMinesweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert obs.shape == (2, 9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["current_player"] == 1
        assert info["game_state"] == "RUNNING"

    def test_same_seed_same_layout(self, env: CoopMinesweeperEnv) -> None:
        env.reset(seed=3)
        first = env.session.board1.mine_positions()
        env.reset(seed=3)
        assert env.session.board1.mine_positions() == first

    def test_difficulty_by_name(self) -> None:
        environment = CoopMinesweeperEnv("medium")
        assert environment.observation_space.shape == (2, 13, 13)


class TestStep:
    """Test applying actions."""

    def test_reveal_number_rewards_one_and_passes_turn(self, env: CoopMinesweeperEnv) -> None:
        row, col = find_cell(env.session.board1, CellContent.NUMBER)
        obs, reward, terminated, truncated, info = env.step(reveal_action(env, row, col))
        assert reward == 1.0
        assert obs[0, row, col] == env.session.board1.get_cell(row, col).adjacent_mines
        assert terminated is False and truncated is False
        assert info["turn_ended"] is True
        assert info["current_player"] == 2

    def test_refused_action_is_penalized(self, env: CoopMinesweeperEnv) -> None:
        row, col = find_cell(env.session.board1, CellContent.NUMBER)
        env.step(reveal_action(env, row, col))
        row2, col2 = find_cell(env.session.board2, CellContent.NUMBER)
        env.step(reveal_action(env, row2, col2))
        _, reward, _, _, info = env.step(reveal_action(env, row, col))
        assert reward == -0.1
        assert info["current_player"] == 1

    def test_flag_keeps_turn(self, env: CoopMinesweeperEnv) -> None:
        row, col = find_cell(env.session.board1, CellContent.MINE)
        obs, reward, _, _, info = env.step(flag_action(env, row, col))
        assert obs[0, row, col] == -2
        assert reward == env.session.scoring.correct_flag_points
        assert info["turn_ended"] is False
        assert info["current_player"] == 1

    def test_mine_costs_life(self, env: CoopMinesweeperEnv) -> None:
        lives = env.session.shared_lives
        row, col = find_cell(env.session.board1, CellContent.MINE)
        _, reward, _, _, info = env.step(reveal_action(env, row, col))
        assert info["lives"] == lives - 1
        assert reward == 0.0
        assert "hit a mine" in info["message"]


class TestActionMask:
    """Test valid action masks."""

    def test_all_actions_valid_at_start(self, env: CoopMinesweeperEnv) -> None:
        mask = env.get_action_mask()
        assert mask.shape == (162,)
        assert mask.all()

    def test_flagged_cell_can_only_be_unflagged(self, env: CoopMinesweeperEnv) -> None:
        row, col = find_cell(env.session.board1, CellContent.MINE)
        env.step(flag_action(env, row, col))
        mask = env.get_action_mask()
        assert not mask[reveal_action(env, row, col)]
        assert mask[flag_action(env, row, col)]

    def test_random_play_terminates(self) -> None:
        environment = CoopMinesweeperEnv(
            Difficulty.EASY, question_presenter=lambda question: True
        )
        environment.reset(seed=8)
        rng = np.random.default_rng(8)
        terminated = False
        for _ in range(2000):
            actions = np.flatnonzero(environment.get_action_mask())
            _, _, terminated, _, _ = environment.step(int(rng.choice(actions)))
            if terminated:
                break
        assert terminated is True
        assert not environment.get_action_mask().any()


class TestRender:
    """Test text rendering."""

    def test_ansi_render_shows_both_boards(self, env: CoopMinesweeperEnv) -> None:
        text = env.render()
        assert "Player 1" in text
        assert "Player 2" in text
        assert "Score 0" in text

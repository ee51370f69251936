"""
Scoring policy for the shared score and shared lives.
"""
from dataclasses import dataclass


@dataclass
class ScoringPolicy:
    """
    Point values applied by a game session.

    Penalties are stored as positive numbers and subtracted. The shared
    score never drops below zero.
    """

    # Reveals
    safe_cell_points: int = 1

    # Flags, applied once per cell per game
    correct_flag_points: int = 5
    wrong_flag_penalty: int = 3

    # Special tiles
    question_correct_points: int = 10
    question_wrong_penalty: int = 5
    surprise_bonus_points: int = 15
    surprise_good_chance: float = 0.5
    surprise_life_cost: int = 1

    # Mines
    mine_life_cost: int = 1

    # End of game
    life_bonus_on_win: int = 20

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 0.0 <= self.surprise_good_chance <= 1.0:
            raise ValueError("surprise_good_chance must be between 0 and 1")
        if self.mine_life_cost < 1:
            raise ValueError("A mine must cost at least one life")

    def win_bonus(self, remaining_lives: int) -> int:
        return remaining_lives * self.life_bonus_on_win

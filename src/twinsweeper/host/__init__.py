"""
Front-end side of the game.

Provides the controller used by front ends, the grace-period turn policy,
a console front end and a Gymnasium environment.
"""
from .turns import ActionResult, GracePeriodTurnPolicy
from .controller import GameController
from .console import ConsoleGame, format_board
from .environment import CoopMinesweeperEnv

__all__ = [
    "ActionResult",
    "GracePeriodTurnPolicy",
    "GameController",
    "ConsoleGame",
    "format_board",
    "CoopMinesweeperEnv",
]

"""Contains data types used throughout program"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

# Type aliases
CellIndex = int
Port = int


class Identity(IntEnum):
    """Participant identity assigned by the coordinator in connection order"""

    FIRST = 1
    SECOND = 2

    def other(self) -> "Identity":
        """Returns the identity of the opposing participant"""

        return Identity.SECOND if self is Identity.FIRST else Identity.FIRST


class Mark(Enum):
    """Value of a single board cell"""

    EMPTY = " "
    A = "X"
    B = "O"


class Command(Enum):
    """Commands peers send to the coordinator.

    CONTINUE acknowledges a non-terminal move, RESTART and QUIT are the votes
    of the restart negotiation.
    """

    CONTINUE = "c"
    RESTART = "r"
    QUIT = "q"


@dataclass(frozen=True)
class GameResult:
    """Stores the outcome of a finished game.

    Attributes:
        winner (Optional[Identity]): Identity that completed a line or None
            if the board filled up without one.
        moves (int): Number of moves that were applied during the game.
    """

    winner: Optional[Identity]
    moves: int = 0

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def describe(self) -> str:
        """Creates a human readable description of the result"""

        if self.winner is None:
            return "Draw"
        return f"Player {int(self.winner)} won the game"

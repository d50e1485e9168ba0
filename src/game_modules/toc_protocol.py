"""Contains the TocProtocol class and the line codec of the session protocol.

The toc protocol sets and changes the active player of a session and
defines the commands and field symbols. Every message on the wire is a
single line holding either an integer (identity, active identity, move
index or result) or one of the command letters.
"""

from typing import Optional

from data_types import CellIndex, Command, GameResult, Identity, Mark
from exceptions import ProtocolViolation
from game_modules.board import BOARD_SIZE

MAX_PLAYERS = 2

# Result line sent when a game ends without a winner
DRAW_RESULT = 0


def symbol_for(identity: Identity) -> Mark:
    """Gets the mark written by an identity"""

    return Mark.A if identity is Identity.FIRST else Mark.B


class TocProtocol:
    """Keeps track of which player is active and who starts each game"""

    def __init__(self, starter: Identity = Identity.FIRST) -> None:
        self.__starting_player = starter
        self.__active_player = starter

    @property
    def active_player(self) -> Identity:
        return self.__active_player

    @property
    def inactive_player(self) -> Identity:
        return Identity(self.__active_player % MAX_PLAYERS + 1)

    @property
    def starting_player(self) -> Identity:
        return self.__starting_player

    def next_active_player(self) -> Identity:
        """Hands the turn to the other player and returns them"""

        self.__active_player = self.inactive_player
        return self.__active_player

    def reset(self, starter: Optional[Identity] = None) -> None:
        """Makes the starting player active again.

        Args:
            starter (Identity, optional): New starting player. Keeps the
                current one if None.
        """

        if starter is not None:
            self.__starting_player = starter
        self.__active_player = self.__starting_player

    def rotate_starter(self) -> Identity:
        """Advances the starting player by one so players alternate who opens"""

        self.reset(Identity(self.__starting_player % MAX_PLAYERS + 1))
        return self.__starting_player


def _parse_int(line: Optional[str], expected: str) -> int:
    if line is None:
        raise ProtocolViolation(expected, line)

    text = line.strip()
    if not text.isdecimal():
        raise ProtocolViolation(expected, line)
    return int(text)


def encode_identity(identity: Identity) -> str:
    return str(int(identity))


def decode_identity(line: Optional[str]) -> Identity:
    """Parses an identity or active identity announcement.

    Raises:
        ProtocolViolation: Raised if the line is not 1 or 2.
    """

    value = _parse_int(line, "player identity")
    try:
        return Identity(value)
    except ValueError:
        raise ProtocolViolation("player identity", line)


def encode_move(cell_index: CellIndex) -> str:
    return str(cell_index)


def decode_move(line: Optional[str]) -> CellIndex:
    """Parses a move index.

    Only checks the range; whether the cell is free is up to the board.

    Raises:
        ProtocolViolation: Raised if the line is not an index from 0 to 8.
    """

    value = _parse_int(line, "move index")
    if value >= BOARD_SIZE:
        raise ProtocolViolation("move index", line)
    return value


def encode_command(command: Command) -> str:
    return command.value


def decode_command(line: Optional[str]) -> Command:
    """Parses one of the command letters.

    Raises:
        ProtocolViolation: Raised if the line is not c, r or q.
    """

    if line is None:
        raise ProtocolViolation("command", line)

    try:
        return Command(line.strip())
    except ValueError:
        raise ProtocolViolation("command", line)


def encode_result(result: GameResult) -> str:
    return str(DRAW_RESULT if result.winner is None else int(result.winner))


def decode_result(line: Optional[str]) -> Optional[Identity]:
    """Parses a result broadcast.

    Returns:
        Optional[Identity]: Winner of the game or None for a draw.

    Raises:
        ProtocolViolation: Raised if the line is not 0, 1 or 2.
    """

    value = _parse_int(line, "game result")
    if value == DRAW_RESULT:
        return None
    try:
        return Identity(value)
    except ValueError:
        raise ProtocolViolation("game result", line)

"""Contains fakes for driving sessions without sockets"""

from typing import Iterable, List, Optional

from data_types import CellIndex, Identity
from game_modules.board import BOARD_SIZE, Board
from game_modules.toc_protocol import symbol_for


class ScriptedChannel:
    """Channel that replays scripted lines and records what is written.

    Reading past the end of the script returns None, which is how a closed
    connection looks to the reader.
    """

    def __init__(self, lines: Iterable[str] = (), name: str = "scripted") -> None:
        self.name = name
        self.incoming: List[str] = list(lines)
        self.written: List[str] = []
        self.reads = 0
        self.closed = False

    async def read_line(self) -> Optional[str]:
        self.reads += 1
        if not self.incoming:
            return None
        return self.incoming.pop(0)

    async def write_line(self, line: str) -> None:
        self.written.append(line)

    async def close(self) -> None:
        self.closed = True


class ScriptedMoveSource:
    """Move source that plays listed moves and restart votes in order"""

    def __init__(
        self, moves: Iterable[CellIndex] = (), restarts: Iterable[bool] = ()
    ) -> None:
        self.moves = list(moves)
        self.restarts = list(restarts)
        self.messages: List[str] = []
        self.boards_shown = 0

    async def choose_move(self, board, identity: Identity, symbol: str) -> CellIndex:
        return self.moves.pop(0)

    async def choose_restart(self) -> bool:
        return self.restarts.pop(0) if self.restarts else False

    def show(self, message: str) -> None:
        self.messages.append(message)

    def show_board(self, board) -> None:
        self.boards_shown += 1


class FirstEmptyCellSource(ScriptedMoveSource):
    """Move source that always takes the lowest free cell"""

    async def choose_move(self, board, identity: Identity, symbol: str) -> CellIndex:
        return next(index for index in range(BOARD_SIZE) if board.is_empty(index))


def board_from_moves(moves: Iterable[CellIndex], starter: Identity = Identity.FIRST) -> Board:
    """Builds a board by playing the moves alternately, starter first"""

    board = Board()
    identity = starter
    for cell_index in moves:
        assert board.place_mark(cell_index, symbol_for(identity))
        identity = identity.other()
    return board


def interleave(first: Iterable[CellIndex], second: Iterable[CellIndex]) -> List[CellIndex]:
    """Merges two players' moves into playing order"""

    merged: List[CellIndex] = []
    first, second = list(first), list(second)
    for index in range(max(len(first), len(second))):
        if index < len(first):
            merged.append(first[index])
        if index < len(second):
            merged.append(second[index])
    return merged


# Moves of a game won by the starter on the top row
WIN_FIRST_MOVES = ([0, 1, 2], [3, 4, 8])

# Moves of a game that fills the board without a line
DRAW_MOVES = ([0, 2, 3, 7, 8], [1, 4, 5, 6])


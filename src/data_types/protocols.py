"""Contains protocols for type checking"""

from typing import Optional, Protocol

from data_types import CellIndex, Identity


class LineChannel(Protocol):
    """Protocol for a duplex line based channel to a single peer.

    Used so the coordinator and peer agent can be driven by sockets in
    production and by scripted channels in tests.
    """

    name: str

    async def read_line(self) -> Optional[str]:
        """Returns the next line without its delimiter or None on end of stream"""
        ...

    async def write_line(self, line: str) -> None:
        ...

    async def close(self) -> None:
        ...


class MoveSource(Protocol):
    """Protocol for whatever supplies a participant's moves and votes.

    The console implementation prompts a human, tests use scripted sources.
    The board is passed read only; moves are checked by the caller.
    """

    async def choose_move(self, board, identity: Identity, symbol: str) -> CellIndex:
        ...

    async def choose_restart(self) -> bool:
        ...

    def show(self, message: str) -> None:
        ...

    def show_board(self, board) -> None:
        ...

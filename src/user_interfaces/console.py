"""Console interface that lets a person play through a PeerAgent.

Typical usage example:
    agent = PeerAgent(channel, ConsoleMoveSource())
    await agent.run()
"""

import asyncio
from typing import Callable

from data_types import CellIndex, Identity

# Returned for input that is not a single digit so the move check rejects it
NO_CELL = -1


def parse_cell(text: str) -> CellIndex:
    """Converts a typed field number (1 to 9) into a board index (0 to 8).

    Returns:
        CellIndex: Board index, or NO_CELL if the text is not a single
            non-zero digit.
    """

    text = text.strip()
    if len(text) != 1 or not text.isdecimal() or text == "0":
        return NO_CELL
    return int(text) - 1


class ConsoleMoveSource:
    """Reads moves and restart votes from standard input.

    Input is read in a worker thread so the event loop keeps running.
    """

    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.__read = read
        self.__write = write

    async def choose_move(self, board, identity: Identity, symbol: str) -> CellIndex:
        text = await asyncio.to_thread(self.__read, f"P{int(identity)}({symbol}): ")
        return parse_cell(text)

    async def choose_restart(self) -> bool:
        text = await asyncio.to_thread(self.__read, "Restart [y/n]? ")
        return text.strip() == "y"

    def show(self, message: str) -> None:
        self.__write(message)

    def show_board(self, board) -> None:
        self.__write(f"\n{board}")

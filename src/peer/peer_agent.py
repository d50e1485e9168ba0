"""Contains the PeerAgent class which plays one side of a session"""

import logging
from typing import List, Optional

from data_types import CellIndex, Command, GameResult, Identity
from data_types.protocols import LineChannel, MoveSource
from exceptions import InvalidMove, PeerDisconnected, ProtocolViolation
from game_modules.board import Board
from game_modules.toc_protocol import (
    decode_identity,
    decode_move,
    decode_result,
    encode_command,
    encode_move,
    symbol_for,
)

logger = logging.getLogger(__name__)

# Line the coordinator sends when the session ends
SESSION_OVER = Command.QUIT.value


class PeerAgent:
    """Client side of a session.

    Keeps a replica of the board that only changes through messages relayed
    by the coordinator, and only asks its move source for a move when the
    coordinator names this peer as the active player.
    """

    def __init__(self, channel: LineChannel, source: MoveSource) -> None:
        self.__channel = channel
        self.__source = source
        self.identity: Optional[Identity] = None
        self.board = Board()

    async def run(self) -> List[GameResult]:
        """Plays games until the coordinator ends the session.

        The channel is closed when this returns or raises.

        Raises:
            PeerDisconnected: Raised if the coordinator goes away mid-session.
            ProtocolViolation: Raised if the coordinator sends something
                unexpected.

        Returns:
            List[GameResult]: Result of every game that was finished.
        """

        results: List[GameResult] = []
        try:
            line = await self.__read()
            while line != SESSION_OVER:
                # Each game starts with the identity assignment
                self.identity = decode_identity(line)
                self.board.reset()
                logger.debug("Assigned player: %d", self.identity)

                result = await self.__play_game()
                if result is None:
                    self.__source.show("The other player quit the game")
                    break

                results.append(result)
                self.__source.show(result.describe())

                restart = await self.__source.choose_restart()
                await self.__channel.write_line(
                    encode_command(Command.RESTART if restart else Command.QUIT)
                )
                line = await self.__read()
        finally:
            await self.__channel.close()

        return results

    async def __play_game(self) -> Optional[GameResult]:
        """Plays a single game on a fresh board replica.

        Returns:
            Optional[GameResult]: Result of the game or None if the session
                ended before the game did.
        """

        while True:
            self.__source.show_board(self.board)

            line = await self.__read()
            if line == SESSION_OVER:
                return None

            active_player = decode_identity(line)
            symbol = symbol_for(active_player)

            if active_player is self.identity:
                cell_index = await self.__choose_move(active_player)
                await self.__channel.write_line(encode_move(cell_index))
            else:
                cell_index = decode_move(await self.__read())

            if not self.board.place_mark(cell_index, symbol):
                raise ProtocolViolation("index of an empty cell", cell_index)

            winner = self.board.evaluate_winner()
            if winner is not None or self.board.is_full():
                self.__source.show_board(self.board)
                return await self.__receive_result(winner)

            # The mover tells the coordinator to carry on with the game
            if active_player is self.identity:
                await self.__channel.write_line(encode_command(Command.CONTINUE))

    async def __choose_move(self, active_player: Identity) -> CellIndex:
        """Asks the move source until it picks an empty cell.

        Rejected attempts are shown to the player and never reach the
        coordinator.
        """

        symbol = symbol_for(active_player).value
        while True:
            cell_index = await self.__source.choose_move(self.board, active_player, symbol)
            try:
                self.check_move(cell_index)
            except InvalidMove as e:
                self.__source.show(str(e))
            else:
                return cell_index

    def check_move(self, cell_index: CellIndex) -> None:
        """Checks a move against the local board replica.

        Raises:
            InvalidMove: Raised if the index is out of range or the cell is
                already taken.
        """

        if not Board.in_range(cell_index):
            raise InvalidMove(cell_index, "Wrong input!")
        if not self.board.is_empty(cell_index):
            raise InvalidMove(cell_index, "Field is already taken!")

    async def __receive_result(self, winner: Optional[Identity]) -> GameResult:
        """Reads the coordinator's result and checks it against the replica"""

        reported = decode_result(await self.__read())
        if reported is not winner:
            raise ProtocolViolation(
                f"result {int(winner) if winner else 'draw'}", reported
            )
        return GameResult(winner, self.board.move_count)

    async def __read(self) -> str:
        line = await self.__channel.read_line()
        if line is None:
            raise PeerDisconnected(self.__channel.name, self.identity)
        return line

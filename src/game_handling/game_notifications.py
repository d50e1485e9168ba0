"""Contains GameNotifications which is used to send messages to peers"""

import logging
from typing import Mapping

from data_types import CellIndex, Command, GameResult, Identity
from data_types.protocols import LineChannel
from exceptions import PeerDisconnected
from game_modules.toc_protocol import (
    encode_command,
    encode_identity,
    encode_move,
    encode_result,
)

logger = logging.getLogger(__name__)


class GameNotifications:
    """Contains functions for sending protocol messages to peers.

    Every function takes the channels keyed by the identity they belong to.
    """

    @staticmethod
    async def send_identities(channels: Mapping[Identity, LineChannel]) -> None:
        """Tells each peer which identity it plays as.

        Sent at the start of every game, so it also tells peers that a
        restart was agreed.
        """

        for identity, channel in channels.items():
            await channel.write_line(encode_identity(identity))

    @staticmethod
    async def announce_active_player(
        channels: Mapping[Identity, LineChannel], active_player: Identity
    ) -> None:
        """Tells both peers whose turn it is"""

        for channel in channels.values():
            await channel.write_line(encode_identity(active_player))

        logger.debug("Player %d is active", active_player)

    @staticmethod
    async def relay_move(
        channels: Mapping[Identity, LineChannel],
        mover: Identity,
        cell_index: CellIndex,
    ) -> None:
        """Forwards a move to the peer that did not make it.

        Args:
            channels (Mapping[Identity, LineChannel]): Channels of the session.
            mover (Identity): Identity that made the move.
            cell_index (CellIndex): Index of the marked cell.
        """

        await channels[mover.other()].write_line(encode_move(cell_index))

    @staticmethod
    async def report_result(
        channels: Mapping[Identity, LineChannel], result: GameResult
    ) -> None:
        """Broadcasts the result of a concluded game to both peers"""

        for channel in channels.values():
            await channel.write_line(encode_result(result))

        logger.info("Game over: %s", result.describe())

    @staticmethod
    async def session_over(channels: Mapping[Identity, LineChannel]) -> None:
        """Tells peers the session terminated and no further game follows.

        A peer that already left is skipped, the session is over either way.
        """

        for identity, channel in channels.items():
            try:
                await channel.write_line(encode_command(Command.QUIT))
            except PeerDisconnected as e:
                logger.info("Could not tell player %d the session is over: %s", identity, e)

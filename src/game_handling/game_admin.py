"""Contains the GameAdmin class which coordinates a session between two peers"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from data_types import GameResult, Identity
from data_types.protocols import LineChannel
from exceptions import PeerDisconnected, ProtocolViolation
from game_handling.game_notifications import GameNotifications
from game_handling.session import (
    Session,
    SessionState,
    abort,
    acknowledge,
    apply_move,
    begin_negotiation,
    next_game,
    next_voter,
    players_connected,
    record_vote,
)
from game_modules.toc_protocol import MAX_PLAYERS, decode_command, decode_move

logger = logging.getLogger(__name__)


@dataclass
class SessionSummary:
    """Outcome of a whole session.

    Attributes:
        results (List[GameResult]): Result of every concluded game in order.
        final_state (SessionState): Either TERMINATED or ABORTED.
    """

    results: List[GameResult] = field(default_factory=list)
    final_state: SessionState = SessionState.AWAITING_PLAYERS

    @property
    def games_played(self) -> int:
        return len(self.results)


class GameAdmin:
    """Authoritative coordinator of a session between two peers.

    Owns the peer channels and the current Session. Only the channel of the
    player whose move or vote is expected is ever read.
    """

    def __init__(self) -> None:
        self.__channels: Dict[Identity, LineChannel] = {}
        self.session = Session()
        self.summary = SessionSummary()

    @property
    def channels(self) -> Dict[Identity, LineChannel]:
        return dict(self.__channels)

    async def accept_participants(self, listener) -> Dict[Identity, LineChannel]:
        """Waits for both peers and assigns identities in arrival order.

        Args:
            listener: Anything with an async accept() returning a LineChannel,
                normally a network.channel.ChannelListener.

        Raises:
            ConnectionError: Raised if accepting a connection fails.

        Returns:
            Dict[Identity, LineChannel]: Channels keyed by assigned identity.
        """

        for identity in Identity:
            channel = await listener.accept()
            self.__channels[identity] = channel
            logger.info("%s plays as player %d", channel.name, identity)

        players_connected(self.session, len(self.__channels))
        logger.info("All clients connected. The game can be started!")

        return self.channels

    def add_participants(self, *channels: LineChannel) -> None:
        """Binds already connected channels in order, FIRST then SECOND.

        Raises:
            ProtocolViolation: Raised if the wrong number of channels is given.
        """

        if len(channels) != MAX_PLAYERS:
            raise ProtocolViolation(f"{MAX_PLAYERS} channels", len(channels))

        for identity, channel in zip(Identity, channels):
            self.__channels[identity] = channel

        players_connected(self.session, len(self.__channels))

    async def run_session(self) -> SessionSummary:
        """Plays games until the players stop agreeing to restart.

        Both channels are closed when this returns or raises.

        Raises:
            PeerDisconnected: Raised if a peer leaves mid-session.
            ProtocolViolation: Raised if a peer sends an unexpected message.

        Returns:
            SessionSummary: Results of the games played.
        """

        try:
            while not self.session.is_finished:
                self.session = await self.__play_game(self.session)

        except (ConnectionError, ProtocolViolation) as e:
            abort(self.session)
            logger.error("Session aborted: %s", e)
            raise

        finally:
            self.summary.final_state = self.session.state
            await self.close()

        return self.summary

    async def __play_game(self, session: Session) -> Session:
        """Plays one game and negotiates what happens after it.

        Returns:
            Session: Session of the next game, or the same session once it
                has terminated.
        """

        if session.state is not SessionState.IN_PROGRESS:
            raise ProtocolViolation("connected players", session.state)

        logger.info(
            "Starting game %d, player %d opens",
            session.game_number,
            session.active_player,
        )
        await GameNotifications.send_identities(self.__channels)

        while session.state is SessionState.IN_PROGRESS:
            await self.__play_turn(session)

        if session.state is SessionState.CONCLUDED:
            assert session.result is not None
            self.summary.results.append(session.result)

            await GameNotifications.report_result(self.__channels, session.result)
            begin_negotiation(session)
            await self.__negotiate_restart(session)

        if session.state is SessionState.TERMINATED:
            logger.info("Session terminated after %d games", self.summary.games_played)
            await GameNotifications.session_over(self.__channels)
            return session

        logger.debug("Both players agreed to restart!")
        return next_game(session)

    async def __play_turn(self, session: Session) -> None:
        """Announces the active player, relays their move and waits for continue"""

        active_player = session.active_player
        await GameNotifications.announce_active_player(self.__channels, active_player)

        logger.info("Waiting for player %d input", active_player)
        cell_index = decode_move(await self.__read(active_player))
        logger.info("Received %d index from player %d", cell_index, active_player)

        apply_move(session, active_player, cell_index)
        await GameNotifications.relay_move(self.__channels, active_player, cell_index)

        if session.state is SessionState.IN_PROGRESS:
            command = decode_command(await self.__read(active_player))
            acknowledge(session, active_player, command)

            if session.state is SessionState.TERMINATED:
                logger.info("Player %d quit the game", active_player)

    async def __negotiate_restart(self, session: Session) -> None:
        """Reads restart votes, first from the active player then the other.

        Stops reading as soon as a player votes to quit.
        """

        while session.state is SessionState.RESTART_NEGOTIATION and not session.restart_agreed:
            voter = next_voter(session)
            command = decode_command(await self.__read(voter))
            logger.info("Player %d voted %s", voter, command.name.lower())
            record_vote(session, voter, command)

    async def __read(self, identity: Identity) -> str:
        """Reads the next line from an identity's channel.

        Raises:
            PeerDisconnected: Raised if the channel closed.
        """

        channel = self.__channels[identity]
        try:
            line = await channel.read_line()
        except PeerDisconnected as e:
            raise PeerDisconnected(channel.name, identity) from e

        if line is None:
            raise PeerDisconnected(channel.name, identity)
        return line

    async def close(self) -> None:
        """Closes every peer channel"""

        for channel in self.__channels.values():
            await channel.close()


async def serve(listener, admin: Optional[GameAdmin] = None) -> SessionSummary:
    """Runs a single session on a started listener.

    The listener stops accepting once both peers are connected and is
    closed when the session ends.

    Args:
        listener: A started network.channel.ChannelListener.
        admin (GameAdmin, optional): Coordinator to use, a new one if None.

    Returns:
        SessionSummary: Results of the games played.
    """

    admin = admin or GameAdmin()
    try:
        await admin.accept_participants(listener)
    except BaseException:
        await admin.close()
        raise
    finally:
        await listener.close()

    return await admin.run_session()

"""Line based TCP channels built on asyncio streams"""

import asyncio
import logging
from typing import List, Optional

from data_types import Port
from exceptions import PeerDisconnected, ProtocolViolation
from settings import SETTINGS

logger = logging.getLogger(__name__)


class StreamChannel:
    """Duplex line channel over an asyncio stream pair.

    Every message is one line terminated by a newline. Reads return None
    once the other side has closed the connection.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        encoding: str = SETTINGS.encoding,
    ) -> None:
        self.__reader = reader
        self.__writer = writer
        self.__encoding = encoding

        peer = writer.get_extra_info("peername")
        self.name = f"{peer[0]}:{peer[1]}" if peer else "unknown peer"

    async def read_line(self) -> Optional[str]:
        """Reads the next line.

        Raises:
            PeerDisconnected: Raised if the connection was reset.
            ProtocolViolation: Raised if the line is longer than the stream
                buffer limit.

        Returns:
            Optional[str]: Line without its delimiter, None on end of stream.
        """

        try:
            data = await self.__reader.readline()
        except (ConnectionError, asyncio.IncompleteReadError) as e:
            raise PeerDisconnected(self.name) from e
        except ValueError as e:
            # readline turns a LimitOverrunError into a ValueError
            raise ProtocolViolation(
                "a newline terminated line", "an over-long line"
            ) from e

        if not data:
            return None

        logger.debug("%s -> %r", self.name, data)
        return data.decode(self.__encoding, errors="replace").rstrip("\r\n")

    async def write_line(self, line: str) -> None:
        """Sends one line.

        Raises:
            PeerDisconnected: Raised if the connection is closed or reset.
        """

        if self.__writer.is_closing():
            raise PeerDisconnected(self.name)

        logger.debug("%s <- %r", self.name, line)
        try:
            self.__writer.write(f"{line}\n".encode(self.__encoding))
            await self.__writer.drain()
        except ConnectionError as e:
            raise PeerDisconnected(self.name) from e

    async def close(self) -> None:
        if self.__writer.is_closing():
            return

        self.__writer.close()
        try:
            await self.__writer.wait_closed()
        except ConnectionError:
            logger.debug("Connection to %s was already reset", self.name)


class ChannelListener:
    """Accepts peer connections on a listening socket.

    Connections are queued in arrival order and handed out by accept.
    """

    def __init__(self, host: str, port: Port) -> None:
        self.host = host
        self.port = port
        self.__server: Optional[asyncio.AbstractServer] = None
        self.__pending: asyncio.Queue[StreamChannel] = asyncio.Queue()

    async def __on_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        channel = StreamChannel(reader, writer)
        logger.info("Client connected %s", channel.name)
        await self.__pending.put(channel)

    async def start(self) -> None:
        """Starts listening.

        Raises:
            ConnectionError: Raised if the address can not be bound.
        """

        try:
            self.__server = await asyncio.start_server(
                self.__on_connection, self.host, self.port
            )
        except OSError as e:
            raise ConnectionError(
                f"Could not listen on {self.host}:{self.port}: {e}"
            ) from e

        logger.info("Starting server on port %d", self.port)

    @property
    def bound_port(self) -> Port:
        """Port actually bound, useful when listening on port 0"""

        if self.__server is None or not self.__server.sockets:
            return self.port
        return self.__server.sockets[0].getsockname()[1]

    async def accept(self) -> StreamChannel:
        """Waits for the next connection in arrival order.

        Raises:
            ConnectionError: Raised if the listener was never started.
        """

        if self.__server is None:
            raise ConnectionError("Listener is not started")
        return await self.__pending.get()

    async def close(self) -> None:
        """Stops listening and drops connections that were never accepted"""

        if self.__server is not None:
            self.__server.close()
            await self.__server.wait_closed()
            self.__server = None

        leftovers: List[StreamChannel] = []
        while not self.__pending.empty():
            leftovers.append(self.__pending.get_nowait())
        for channel in leftovers:
            logger.info("Rejecting extra client %s", channel.name)
            await channel.close()


async def open_channel(host: str, port: Port) -> StreamChannel:
    """Connects to a coordinator.

    Raises:
        ConnectionError: Raised if the connection can not be established.
    """

    try:
        reader, writer = await asyncio.open_connection(host, port)
    except OSError as e:
        raise ConnectionError(f"Could not connect to {host}:{port}: {e}") from e

    logger.debug("Connected to server %s:%d", host, port)
    return StreamChannel(reader, writer)

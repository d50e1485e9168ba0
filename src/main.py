"""Used to run the game server and the game client"""

import argparse
import asyncio
import logging
from typing import List, Optional

from exceptions import InvalidPort, ProtocolViolation
from game_handling.game_admin import serve
from logging_setup import configure_logging
from network.channel import ChannelListener, open_channel
from peer.peer_agent import PeerAgent
from settings import MAX_PORT, SETTINGS, validate_port
from user_interfaces.console import ConsoleMoveSource

logger = logging.getLogger("main")

# Where the server writes its log when TOC_LOG_FILE is not set
SERVER_LOG_FILE = "game-server.log"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _port(value: str) -> int:
    try:
        return validate_port(int(value))
    except (ValueError, InvalidPort) as e:
        raise argparse.ArgumentTypeError(str(e))


def _remote_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

    if not 0 < port <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"Port {port} is not in the range 1-{MAX_PORT}")
    return port


def build_server_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toc-server", description="Coordinate a game of tic-tac-toe between two clients"
    )
    parser.add_argument("port", type=_port, help="Port to listen on (1024-65535)")
    parser.add_argument("--host", default=SETTINGS.host, help="Address to listen on")
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    return parser


def build_client_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toc-client", description="Play tic-tac-toe against another client"
    )
    parser.add_argument("hostname", help="Host running the game server")
    parser.add_argument("port", type=_remote_port, help="Port of the game server")
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    return parser


async def run_server(host: str, port: int) -> None:
    listener = ChannelListener(host, port)
    await listener.start()

    summary = await serve(listener)
    logger.info(
        "Session finished after %d games: %s",
        summary.games_played,
        ", ".join(result.describe() for result in summary.results) or "no results",
    )


async def run_client(hostname: str, port: int) -> None:
    channel = await open_channel(hostname, port)
    await PeerAgent(channel, ConsoleMoveSource()).run()


def server_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the server. Usage: toc-server PORT"""

    args = build_server_parser().parse_args(argv)
    configure_logging(args.log_level, SETTINGS.log_file or SERVER_LOG_FILE)

    try:
        asyncio.run(run_server(args.host, args.port))
    except (ConnectionError, ProtocolViolation) as e:
        logger.error("Server stopped: %s", e)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.info("Server interrupted")
        return EXIT_FAILURE

    return EXIT_OK


def client_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the client. Usage: toc-client HOSTNAME PORT"""

    args = build_client_parser().parse_args(argv)
    configure_logging(args.log_level, SETTINGS.log_file)

    try:
        asyncio.run(run_client(args.hostname, args.port))
    except (ConnectionError, ProtocolViolation) as e:
        logger.error("Game ended: %s", e)
        return EXIT_FAILURE
    except (EOFError, KeyboardInterrupt):
        logger.info("Client interrupted")
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(server_main())

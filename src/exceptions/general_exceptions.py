from typing import Optional

from data_types import Identity, Port


class PeerDisconnected(ConnectionError):
    """Raised when a peer channel closes or fails while the session needs it.

    Attributes:
        identity: identity bound to the channel, None before assignment.
        channel_name: name of the channel that closed.
    """

    def __init__(
        self, channel_name: str, identity: Optional[Identity] = None, *args: object
    ) -> None:
        """Initializes the exception with the channel details.

        Args:
            channel_name (str): Name of the channel that closed.
            identity (Identity, optional): Identity bound to the channel.
        """

        self.channel_name = channel_name
        self.identity = identity
        super().__init__(*args)

    def __str__(self) -> str:
        if self.identity is None:
            return f"Peer {self.channel_name} disconnected"
        return f"Player {int(self.identity)} ({self.channel_name}) disconnected"


class InvalidPort(ValueError):
    """Raised when a port would interfere with the well known ports"""

    def __init__(self, port: Port, *args: object) -> None:
        self.port = port
        super().__init__(*args)

    def __str__(self) -> str:
        return f"Port {self.port} is not in the range 1024-65535"

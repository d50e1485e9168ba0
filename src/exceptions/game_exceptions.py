from data_types import CellIndex


class ProtocolViolation(Exception):
    """Raised when a message arrives out of sequence or is malformed.

    Attributes:
        expected: description of what the receiver was waiting for.
        received: raw line or state that was received instead.
    """

    def __init__(self, expected: str, received: object, *args: object) -> None:
        """Initializes the exception with what was expected and received.

        Args:
            expected (str): What the receiver was waiting for.
            received (object): What actually arrived.
        """

        self.expected = expected
        self.received = received
        super().__init__(*args)

    def __str__(self) -> str:
        return f"Expected {self.expected} but received {self.received!r}"


class InvalidMove(Exception):
    """Raised locally when a move is out of range or targets a taken cell"""

    def __init__(self, cell_index: CellIndex, reason: str, *args: object) -> None:
        self.cell_index = cell_index
        self.reason = reason
        super().__init__(*args)

    def __str__(self) -> str:
        return self.reason

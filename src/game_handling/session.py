"""Contains the Session value and the transitions of the session state machine.

A Session holds everything one game needs: the authoritative board, the
turn state and where the game is in its lifecycle. Transitions are plain
functions that take the session, check that the move or command fits the
current state and update it in place. A new Session is built for every
game while the peer channels outlive it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from data_types import CellIndex, Command, GameResult, Identity
from exceptions import ProtocolViolation
from game_modules.board import Board
from game_modules.toc_protocol import MAX_PLAYERS, TocProtocol, symbol_for


class SessionState(Enum):
    """Lifecycle of a session"""

    AWAITING_PLAYERS = "awaiting players"
    IN_PROGRESS = "in progress"
    CONCLUDED = "concluded"
    RESTART_NEGOTIATION = "restart negotiation"
    TERMINATED = "terminated"
    ABORTED = "aborted"


@dataclass
class Session:
    """Dataclass for storing the state of a single game.

    Attributes:
        protocol (TocProtocol): Tracks the active and starting players.
        board (Board): Authoritative copy of the board.
        state (SessionState): Where the game is in its lifecycle.
        game_number (int): 1 for the first game, increased on every restart.
        result (Optional[GameResult]): Set once the game has concluded.
        moves (List[Tuple[Identity, CellIndex]]): Applied moves in order.
        votes (Dict[Identity, Command]): Restart votes received so far.
        awaiting_continue (bool): True between a non-terminal move and the
            mover's continue acknowledgement.
    """

    protocol: TocProtocol = field(default_factory=TocProtocol)
    board: Board = field(default_factory=Board)
    state: SessionState = SessionState.AWAITING_PLAYERS
    game_number: int = 1
    result: Optional[GameResult] = None
    moves: List[Tuple[Identity, CellIndex]] = field(default_factory=list)
    votes: Dict[Identity, Command] = field(default_factory=dict)
    awaiting_continue: bool = False

    @property
    def active_player(self) -> Identity:
        return self.protocol.active_player

    @property
    def inactive_player(self) -> Identity:
        return self.protocol.inactive_player

    @property
    def restart_agreed(self) -> bool:
        """True once every player has voted to restart"""

        return len(self.votes) == MAX_PLAYERS and all(
            vote is Command.RESTART for vote in self.votes.values()
        )

    @property
    def is_finished(self) -> bool:
        return self.state in (SessionState.TERMINATED, SessionState.ABORTED)


def _require_state(session: Session, state: SessionState, received: object) -> None:
    if session.state is not state:
        raise ProtocolViolation(f"message for state {state.value}", received)


def players_connected(session: Session, player_count: int) -> None:
    """Starts the game once every player is connected.

    Raises:
        ProtocolViolation: Raised if the session is not waiting for players
            or the player count is wrong.
    """

    _require_state(session, SessionState.AWAITING_PLAYERS, player_count)

    if player_count != MAX_PLAYERS:
        raise ProtocolViolation(f"{MAX_PLAYERS} players", player_count)

    session.state = SessionState.IN_PROGRESS


def apply_move(session: Session, identity: Identity, cell_index: CellIndex) -> SessionState:
    """Applies the active player's move to the authoritative board.

    Concludes the game if the move completes a line or fills the board,
    otherwise waits for the mover to acknowledge.

    Args:
        session (Session): Session being played.
        identity (Identity): Identity that sent the move.
        cell_index (CellIndex): Cell to mark.

    Raises:
        ProtocolViolation: Raised if a move is not expected, comes from the
            inactive player or targets a cell the board rejects.

    Returns:
        SessionState: State of the session after the move.
    """

    _require_state(session, SessionState.IN_PROGRESS, cell_index)

    if session.awaiting_continue:
        raise ProtocolViolation("continue command", cell_index)
    if identity is not session.active_player:
        raise ProtocolViolation(f"move from player {int(session.active_player)}", identity)
    if not session.board.place_mark(cell_index, symbol_for(identity)):
        raise ProtocolViolation("index of an empty cell", cell_index)

    session.moves.append((identity, cell_index))

    winner = session.board.evaluate_winner()
    if winner is not None or session.board.is_full():
        session.result = GameResult(winner, len(session.moves))
        session.state = SessionState.CONCLUDED
    else:
        session.awaiting_continue = True

    return session.state


def acknowledge(session: Session, identity: Identity, command: Command) -> SessionState:
    """Handles the mover's command after a non-terminal move.

    Continue hands the turn to the other player. Quit ends the session as
    a resignation.

    Raises:
        ProtocolViolation: Raised if no acknowledgement is expected, it comes
            from the wrong player or it is a restart vote.
    """

    _require_state(session, SessionState.IN_PROGRESS, command)

    if not session.awaiting_continue or identity is not session.active_player:
        raise ProtocolViolation(f"move from player {int(session.active_player)}", command)

    if command is Command.CONTINUE:
        session.awaiting_continue = False
        session.protocol.next_active_player()
    elif command is Command.QUIT:
        session.awaiting_continue = False
        session.state = SessionState.TERMINATED
    else:
        raise ProtocolViolation("continue command", command)

    return session.state


def begin_negotiation(session: Session) -> None:
    """Moves a concluded game into restart negotiation"""

    _require_state(session, SessionState.CONCLUDED, session.state)
    session.state = SessionState.RESTART_NEGOTIATION


def next_voter(session: Session) -> Identity:
    """Gets the identity whose restart vote is read next.

    The player that was active when the game concluded votes first, the
    other player second.
    """

    if session.active_player in session.votes:
        return session.inactive_player
    return session.active_player


def record_vote(session: Session, identity: Identity, command: Command) -> SessionState:
    """Records a restart vote.

    A quit from either player terminates the session straight away. The
    session stays in negotiation until both players voted to restart, at
    which point restart_agreed is True and next_game can be called.

    Raises:
        ProtocolViolation: Raised if no vote is expected, it comes out of
            order or it is not a restart or quit command.
    """

    _require_state(session, SessionState.RESTART_NEGOTIATION, command)

    if session.restart_agreed:
        raise ProtocolViolation("no further votes", command)
    if identity is not next_voter(session):
        raise ProtocolViolation(f"vote from player {int(next_voter(session))}", identity)

    if command is Command.QUIT:
        session.votes[identity] = command
        session.state = SessionState.TERMINATED
    elif command is Command.RESTART:
        session.votes[identity] = command
    else:
        raise ProtocolViolation("restart or quit vote", command)

    return session.state


def next_game(session: Session) -> Session:
    """Builds the session for the next game after both players agreed.

    The starting player advances by one so players take turns opening.

    Raises:
        ProtocolViolation: Raised if the players have not both agreed.
    """

    if session.state is not SessionState.RESTART_NEGOTIATION or not session.restart_agreed:
        raise ProtocolViolation("restart agreed by both players", session.state)

    protocol = TocProtocol(session.protocol.starting_player)
    protocol.rotate_starter()

    return Session(
        protocol=protocol,
        state=SessionState.IN_PROGRESS,
        game_number=session.game_number + 1,
    )


def abort(session: Session) -> None:
    """Marks the session as ended by a fatal error"""

    session.awaiting_continue = False
    session.state = SessionState.ABORTED

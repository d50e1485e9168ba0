import pytest

from data_types import Command, GameResult, Identity
from exceptions import ProtocolViolation
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
from tests.testing_data.data_generation import DRAW_MOVES, interleave


@pytest.fixture
def session() -> Session:
    session = Session()
    players_connected(session, 2)
    return session


def play(session: Session, moves) -> None:
    """Plays moves for whoever is active, acknowledging non-terminal ones"""

    for cell_index in moves:
        mover = session.active_player
        if apply_move(session, mover, cell_index) is SessionState.IN_PROGRESS:
            acknowledge(session, mover, Command.CONTINUE)


def test_players_connected(session):
    assert session.state is SessionState.IN_PROGRESS
    assert session.active_player is Identity.FIRST


def test_players_connected_needs_two_players():
    session = Session()

    with pytest.raises(ProtocolViolation):
        players_connected(session, 1)
    assert session.state is SessionState.AWAITING_PLAYERS


def test_turn_passes_to_player_who_did_not_move(session):
    for cell_index in [0, 3, 1, 4]:
        mover = session.active_player
        apply_move(session, mover, cell_index)
        acknowledge(session, mover, Command.CONTINUE)

        assert session.active_player is mover.other()


def test_win_concludes_game(session):
    play(session, [0, 3, 1, 4, 2])

    assert session.state is SessionState.CONCLUDED
    assert session.result == GameResult(Identity.FIRST, 5)
    # Turn state stays with the player who made the final move
    assert session.active_player is Identity.FIRST
    assert len(session.moves) == 5


def test_draw_concludes_game(session):
    play(session, interleave(*DRAW_MOVES))

    assert session.state is SessionState.CONCLUDED
    assert session.result == GameResult(None, 9)
    assert session.result.is_draw


def test_move_from_inactive_player(session):
    with pytest.raises(ProtocolViolation):
        apply_move(session, Identity.SECOND, 0)


def test_move_before_continue(session):
    apply_move(session, Identity.FIRST, 0)

    with pytest.raises(ProtocolViolation):
        apply_move(session, Identity.FIRST, 1)


def test_move_on_taken_cell(session):
    play(session, [4])

    with pytest.raises(ProtocolViolation):
        apply_move(session, Identity.SECOND, 4)
    assert session.moves == [(Identity.FIRST, 4)]


def test_restart_vote_instead_of_continue(session):
    apply_move(session, Identity.FIRST, 0)

    with pytest.raises(ProtocolViolation):
        acknowledge(session, Identity.FIRST, Command.RESTART)


def test_quit_instead_of_continue_terminates(session):
    apply_move(session, Identity.FIRST, 0)

    assert acknowledge(session, Identity.FIRST, Command.QUIT) is SessionState.TERMINATED
    assert session.is_finished


def test_continue_without_move(session):
    with pytest.raises(ProtocolViolation):
        acknowledge(session, Identity.FIRST, Command.CONTINUE)


@pytest.fixture
def concluded(session) -> Session:
    play(session, [0, 3, 1, 4, 2])
    begin_negotiation(session)
    return session


def test_begin_negotiation_needs_concluded_game(session):
    with pytest.raises(ProtocolViolation):
        begin_negotiation(session)


def test_active_player_votes_first(concluded):
    assert next_voter(concluded) is Identity.FIRST

    record_vote(concluded, Identity.FIRST, Command.RESTART)

    assert next_voter(concluded) is Identity.SECOND


def test_first_vote_quit_terminates_without_second_vote(concluded):
    assert record_vote(concluded, Identity.FIRST, Command.QUIT) is SessionState.TERMINATED
    assert Identity.SECOND not in concluded.votes

    with pytest.raises(ProtocolViolation):
        record_vote(concluded, Identity.SECOND, Command.RESTART)


def test_restart_then_quit_terminates(concluded):
    record_vote(concluded, Identity.FIRST, Command.RESTART)

    assert record_vote(concluded, Identity.SECOND, Command.QUIT) is SessionState.TERMINATED
    assert not concluded.restart_agreed


def test_vote_out_of_order(concluded):
    with pytest.raises(ProtocolViolation):
        record_vote(concluded, Identity.SECOND, Command.RESTART)


def test_continue_is_not_a_vote(concluded):
    with pytest.raises(ProtocolViolation):
        record_vote(concluded, Identity.FIRST, Command.CONTINUE)


def test_both_restart_starts_fresh_game(concluded):
    record_vote(concluded, Identity.FIRST, Command.RESTART)
    record_vote(concluded, Identity.SECOND, Command.RESTART)

    assert concluded.restart_agreed

    fresh = next_game(concluded)

    assert fresh is not concluded
    assert fresh.state is SessionState.IN_PROGRESS
    assert fresh.game_number == 2
    assert fresh.board.move_count == 0
    assert fresh.result is None
    assert fresh.active_player is Identity.SECOND

    assert next_game(_agree(fresh, [4, 0, 5, 1, 3])).active_player is Identity.FIRST


def _agree(session: Session, moves) -> Session:
    play(session, moves)
    begin_negotiation(session)
    record_vote(session, next_voter(session), Command.RESTART)
    record_vote(session, next_voter(session), Command.RESTART)
    return session


def test_next_game_needs_agreement(concluded):
    record_vote(concluded, Identity.FIRST, Command.RESTART)

    with pytest.raises(ProtocolViolation):
        next_game(concluded)


def test_abort(session):
    apply_move(session, Identity.FIRST, 0)
    abort(session)

    assert session.state is SessionState.ABORTED
    assert session.is_finished
    with pytest.raises(ProtocolViolation):
        acknowledge(session, Identity.FIRST, Command.CONTINUE)

from unittest.mock import AsyncMock, call

import pytest

from data_types import GameResult, Identity
from exceptions import PeerDisconnected
from game_handling import GameNotifications

pytestmark = pytest.mark.asyncio


@pytest.fixture
def channels():
    return {Identity.FIRST: AsyncMock(), Identity.SECOND: AsyncMock()}


async def test_send_identities(channels):
    await GameNotifications.send_identities(channels)

    channels[Identity.FIRST].write_line.assert_called_once_with("1")
    channels[Identity.SECOND].write_line.assert_called_once_with("2")


async def test_announce_active_player(channels):
    await GameNotifications.announce_active_player(channels, Identity.SECOND)

    for channel in channels.values():
        channel.write_line.assert_called_once_with("2")


async def test_relay_move_goes_to_other_player(channels):
    await GameNotifications.relay_move(channels, Identity.FIRST, 4)

    channels[Identity.SECOND].write_line.assert_called_once_with("4")
    channels[Identity.FIRST].write_line.assert_not_called()


async def test_report_result(channels):
    await GameNotifications.report_result(channels, GameResult(None, 9))
    await GameNotifications.report_result(channels, GameResult(Identity.SECOND, 6))

    assert channels[Identity.FIRST].write_line.call_args_list == [call("0"), call("2")]


async def test_session_over_skips_gone_peer(channels):
    channels[Identity.FIRST].write_line.side_effect = PeerDisconnected("first")

    await GameNotifications.session_over(channels)

    channels[Identity.SECOND].write_line.assert_called_once_with("q")

# Area: Lifecycle Tests
"""Tests for StatePoller."""

from unittest.mock import MagicMock, patch

import pytest

from ttt_client._game.models import Draw, Turn, Unaccepted
from ttt_client._lifecycle.poller import StatePoller
from ttt_client.errors import PollCancelledError, RecordNotFoundError

from conftest import GAME_ADDRESS, FakeGateway, make_game


@pytest.fixture
def poller_setup():
    gateway = FakeGateway()
    activity = MagicMock()
    return gateway, activity, StatePoller(gateway, interval_seconds=0, activity=activity)


class TestStatePoller:
    """Tests for wait_for."""

    def test_returns_first_matching_snapshot(self, poller_setup):
        gateway, activity, poller = poller_setup
        gateway.queue_snapshots(
            GAME_ADDRESS,
            make_game(state=Unaccepted()),
            make_game(state=Unaccepted()),
            make_game(state=Turn(0)),
        )

        game = poller.wait_for(GAME_ADDRESS, lambda g: not isinstance(g.state, Unaccepted))

        assert game.state == Turn(0)
        assert len(gateway.fetch_calls) == 3
        activity.log_observed.assert_called_once_with("turn:0")

    def test_vanished_record_raises(self, poller_setup):
        gateway, _, poller = poller_setup
        gateway.queue_snapshots(GAME_ADDRESS, make_game(state=Turn(1)), None)

        with pytest.raises(RecordNotFoundError):
            poller.wait_for(GAME_ADDRESS, lambda g: isinstance(g.state, Draw))
        assert poller.is_waiting is False

    def test_cancel_stops_waiting(self, poller_setup):
        gateway, activity, poller = poller_setup
        gateway.records[GAME_ADDRESS] = make_game(state=Turn(1))
        original_fetch = gateway.fetch_record

        def fetch_then_cancel(address):
            assert poller.is_waiting is True
            poller.cancel()
            return original_fetch(address)

        gateway.fetch_record = fetch_then_cancel

        with pytest.raises(PollCancelledError):
            poller.wait_for(GAME_ADDRESS, lambda g: False)
        assert poller.is_waiting is False
        activity.log_observed.assert_not_called()

    def test_earlier_cancel_does_not_leak_into_next_wait(self, poller_setup):
        gateway, _, poller = poller_setup
        gateway.records[GAME_ADDRESS] = make_game(state=Turn(0))
        poller.cancel()

        game = poller.wait_for(GAME_ADDRESS, lambda g: True)
        assert game.state == Turn(0)

    def test_sleeps_before_each_fetch(self, poller_setup):
        gateway, _, _ = poller_setup
        gateway.queue_snapshots(
            GAME_ADDRESS, make_game(state=Unaccepted()), make_game(state=Turn(0))
        )
        poller = StatePoller(gateway, interval_seconds=2.0, activity=MagicMock())

        with patch.object(poller._cancelled, "wait", return_value=False) as wait:
            poller.wait_for(GAME_ADDRESS, lambda g: isinstance(g.state, Turn))

        assert wait.call_count == 2
        wait.assert_called_with(2.0)

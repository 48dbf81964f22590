"""Tests for EventSyncClient."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from pitchside.models import EventType, MatchEvent, MatchStatus
from pitchside.services import EventSyncClient, RemoteStoreClient, RemoteStoreError


def _event(event_type=EventType.GOAL):
    return MatchEvent(
        id="temp-abc",
        match_id="m1",
        team_id="t-home",
        player_id="p1",
        type=event_type,
        minute=37,
        created_at=datetime(2025, 5, 1, 18, 37, tzinfo=timezone.utc),
    )


def _row(event_type="goal"):
    return {"id": "srv-1", "match_id": "m1", "team_id": "t-home", "player_id": "p1",
            "type": event_type, "minute": 37, "created_at": "2025-05-01T18:37:02+00:00"}


def test_goal_persists_event_and_score():
    remote = MagicMock(spec=RemoteStoreClient)
    remote.insert.return_value = _row()

    result = EventSyncClient(remote).persist_event(_event(), 3, 1)

    assert result.success
    assert result.data.id == "srv-1"
    remote.insert.assert_called_once_with("match_events", {
        "match_id": "m1", "team_id": "t-home", "player_id": "p1", "type": "goal", "minute": 37,
    })
    remote.update.assert_called_once_with(
        "matches", {"home_score": 3, "away_score": 1}, filters={"id": "eq.m1"}
    )


def test_card_does_not_touch_score():
    remote = MagicMock(spec=RemoteStoreClient)
    remote.insert.return_value = _row("yellow_card")

    result = EventSyncClient(remote).persist_event(_event(EventType.YELLOW_CARD), 0, 0)

    assert result.success
    assert result.data.type is EventType.YELLOW_CARD
    remote.update.assert_not_called()


def test_insert_failure_is_reported():
    remote = MagicMock(spec=RemoteStoreClient)
    remote.insert.side_effect = RemoteStoreError("permission denied")

    result = EventSyncClient(remote).persist_event(_event(), 1, 0)

    assert not result.success
    assert result.error == "permission denied"
    assert result.data is None
    remote.update.assert_not_called()


def test_score_failure_keeps_persisted_event():
    remote = MagicMock(spec=RemoteStoreClient)
    remote.insert.return_value = _row()
    remote.update.side_effect = RemoteStoreError("timeout")

    result = EventSyncClient(remote).persist_event(_event(), 1, 0)

    assert not result.success
    assert result.error == "timeout"
    assert result.data.id == "srv-1"


def test_set_match_status():
    remote = MagicMock(spec=RemoteStoreClient)

    result = EventSyncClient(remote).set_match_status("m1", MatchStatus.LIVE)

    assert result.success
    remote.update.assert_called_once_with("matches", {"status": "live"}, filters={"id": "eq.m1"})


def test_set_match_status_failure():
    remote = MagicMock(spec=RemoteStoreClient)
    remote.update.side_effect = RemoteStoreError("offline")

    result = EventSyncClient(remote).set_match_status("m1", MatchStatus.LIVE)

    assert not result.success
    assert result.error == "offline"

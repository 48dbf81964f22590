import threading
import unittest
from unittest.mock import MagicMock

from pitchside.models import EventType, MatchStatus, PersistedEvent, ServiceResult, SyncStatus
from pitchside.services import (
    EventSyncClient, MatchController, MatchSetupLoader, SessionStore, UnknownTeamError,
)

from tests.helpers import AWAY_ID, HOME_ID, MATCH_ID, FakeClock, make_setup


def _persisted(event, server_id="srv-1"):
    return PersistedEvent(id=server_id, match_id=event.match_id, team_id=event.team_id,
                          player_id=event.player_id, type=event.type, minute=event.minute)


class MatchControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.store = SessionStore(clock=self.clock)
        self.loader = MagicMock(spec=MatchSetupLoader)
        self.sync = MagicMock(spec=EventSyncClient)
        self.sync.set_match_status.return_value = ServiceResult.ok()
        self.sync.persist_event.side_effect = lambda event, home, away: ServiceResult.ok(_persisted(event))
        self.controller = MatchController(self.store, self.loader, self.sync)

        self.loader.load.return_value = ServiceResult.ok(make_setup(home_score=2, away_score=1))
        self.assertTrue(self.controller.load_match(MATCH_ID).success)

    def test_failed_load_keeps_previous_session(self) -> None:
        self.controller.record_event(EventType.GOAL, HOME_ID, "p-h1", 5)
        self.loader.load.return_value = ServiceResult.fail("Match not found")

        result = self.controller.load_match("missing")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Match not found")
        self.assertEqual(self.store.match_id, MATCH_ID)
        self.assertEqual(self.store.home_score, 3)
        self.assertEqual(len(self.store.events), 1)

    def test_starting_clock_marks_match_live(self) -> None:
        outcome = self.controller.toggle_clock()

        self.assertTrue(outcome.success)
        self.assertTrue(outcome.running)
        self.sync.set_match_status.assert_called_once_with(MATCH_ID, MatchStatus.LIVE)

        self.clock.advance(4_000)
        outcome = self.controller.toggle_clock()
        self.assertFalse(outcome.running)
        self.assertEqual(self.sync.set_match_status.call_count, 1)
        self.assertEqual(self.store.elapsed_time_millis(), 4_000)

    def test_failed_status_update_reverts_clock_start(self) -> None:
        self.controller.toggle_clock()
        self.clock.advance(30_000)
        self.controller.toggle_clock()
        self.sync.set_match_status.return_value = ServiceResult.fail("offline")

        outcome = self.controller.toggle_clock()

        self.assertFalse(outcome.success)
        self.assertTrue(outcome.reverted)
        self.assertFalse(outcome.running)
        self.assertEqual(outcome.error, "offline")
        self.assertFalse(self.store.is_running)
        self.clock.advance(10_000)
        self.assertEqual(self.store.elapsed_time_millis(), 30_000)

    def test_pause_during_failed_status_update_is_not_undone(self) -> None:
        def pause_then_fail(match_id, status):
            self.clock.advance(2_000)
            self.store.toggle_clock()
            return ServiceResult.fail("timeout")

        self.sync.set_match_status.side_effect = pause_then_fail

        outcome = self.controller.toggle_clock()

        self.assertFalse(outcome.success)
        self.assertFalse(outcome.reverted)
        self.assertFalse(outcome.running)
        self.assertEqual(outcome.error, "timeout")
        self.assertFalse(self.store.is_running)
        self.clock.advance(60_000)
        self.assertEqual(self.store.elapsed_time_millis(), 2_000)

    def test_concurrent_toggles_are_serialized(self) -> None:
        entered = threading.Event()
        release = threading.Event()

        def slow_status(match_id, status):
            entered.set()
            release.wait(5)
            return ServiceResult.fail("timeout")

        self.sync.set_match_status.side_effect = slow_status
        outcomes = []
        starter = threading.Thread(target=lambda: outcomes.append(self.controller.toggle_clock()))
        starter.start()
        self.assertTrue(entered.wait(5))

        second = threading.Thread(target=lambda: outcomes.append(self.controller.toggle_clock()))
        second.start()
        second.join(0.2)
        self.assertTrue(second.is_alive())
        self.assertTrue(self.store.is_running)

        release.set()
        starter.join(5)
        second.join(5)

        self.assertEqual(len(outcomes), 2)
        self.assertTrue(all(o.reverted and not o.success for o in outcomes))
        self.assertFalse(self.store.is_running)
        self.assertEqual(self.sync.set_match_status.call_count, 2)

    def test_record_event_defaults_to_current_minute_and_syncs_score(self) -> None:
        self.controller.toggle_clock()
        self.clock.advance(37 * 60_000 + 5_000)

        outcome = self.controller.record_event("goal", HOME_ID, "p-h1")

        self.assertEqual(outcome.event.minute, 37)
        self.assertTrue(outcome.sync.success)
        self.sync.persist_event.assert_called_once_with(outcome.event, 3, 1)
        state = self.store.sync_state(outcome.event.id)
        self.assertIs(state.status, SyncStatus.CONFIRMED)
        self.assertEqual(state.server_id, "srv-1")

    def test_failed_sync_keeps_local_event_and_score(self) -> None:
        self.sync.persist_event.side_effect = None
        self.sync.persist_event.return_value = ServiceResult.fail("permission denied")

        outcome = self.controller.record_event(EventType.GOAL, AWAY_ID, "p-a1", 60)

        self.assertFalse(outcome.sync.success)
        self.assertEqual(self.store.away_score, 2)
        self.assertEqual(self.store.events[0], outcome.event)
        state = self.store.sync_state(outcome.event.id)
        self.assertIs(state.status, SyncStatus.FAILED)
        self.assertEqual(state.error, "permission denied")

    def test_rejected_intent_is_not_synced(self) -> None:
        with self.assertRaises(UnknownTeamError):
            self.controller.record_event(EventType.GOAL, "team-x", "p-h1", 3)
        self.sync.persist_event.assert_not_called()

    def test_retry_resends_unpersisted_event(self) -> None:
        self.sync.persist_event.side_effect = None
        self.sync.persist_event.return_value = ServiceResult.fail("offline")
        event = self.controller.record_event(EventType.RED_CARD, AWAY_ID, "p-a1", 70).event

        self.sync.persist_event.return_value = ServiceResult.ok(_persisted(event, "srv-7"))
        result = self.controller.retry_sync(event.id)

        self.assertTrue(result.success)
        self.assertEqual(self.sync.persist_event.call_count, 2)
        self.assertEqual(self.store.sync_state(event.id).server_id, "srv-7")
        self.assertIs(self.store.sync_state(event.id).status, SyncStatus.CONFIRMED)

    def test_retry_after_partial_failure_only_resends_score(self) -> None:
        self.sync.persist_event.side_effect = lambda event, home, away: ServiceResult.fail(
            "score update failed", data=_persisted(event, "srv-3"))
        event = self.controller.record_event(EventType.GOAL, HOME_ID, "p-h1", 12).event
        self.assertEqual(self.store.sync_state(event.id).server_id, "srv-3")

        self.sync.set_match_score.return_value = ServiceResult.ok()
        result = self.controller.retry_sync(event.id)

        self.assertTrue(result.success)
        self.sync.set_match_score.assert_called_once_with(MATCH_ID, 3, 1)
        self.assertEqual(self.sync.persist_event.call_count, 1)
        self.assertIs(self.store.sync_state(event.id).status, SyncStatus.CONFIRMED)

    def test_retry_rejects_unknown_or_confirmed_events(self) -> None:
        self.assertFalse(self.controller.retry_sync("temp-missing").success)

        event = self.controller.record_event(EventType.YELLOW_CARD, HOME_ID, "p-h2", 8).event
        result = self.controller.retry_sync(event.id)
        self.assertFalse(result.success)
        self.assertEqual(result.error, "Event is already synced")


if __name__ == "__main__":
    unittest.main()

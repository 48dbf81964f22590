"""
Operator-facing workflow around the session store.

The controller is what a screen talks to: it loads matches into the store,
forwards intents, hands recorded events to the sync client and turns sync
results into user-visible status. Local state is never rolled back because a
sync failed, with one exception: a clock start whose remote status update fails
is reverted by stopping the clock again.
"""
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Union

from ..models import (
    EventType, MatchEvent, MatchListing, MatchStatus, PersistedEvent, ServiceResult, SyncStatus,
)
from .event_sync import EventSyncClient
from .match_setup_loader import MatchSetupLoader
from .session_store import SessionStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockToggleOutcome:
    """Result of a toggle as seen by the operator."""
    running: bool
    reverted: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RecordOutcome:
    """A locally recorded event together with its sync result."""
    event: MatchEvent
    sync: ServiceResult[PersistedEvent]


class MatchController:
    """Coordinates the session store with the remote collaborators."""

    def __init__(self, store: SessionStore, loader: MatchSetupLoader, sync_client: EventSyncClient):
        self.store = store
        self.loader = loader
        self.sync_client = sync_client
        self._toggle_lock = threading.Lock()

    def list_matches(self) -> ServiceResult[List[MatchListing]]:
        return self.loader.list_open_matches()

    def load_match(self, match_id: str) -> ServiceResult[dict]:
        """
        Load a match and initialize the session from it.

        On failure the current session, if any, is left untouched.

        Returns:
            Result carrying the new read model
        """
        result = self.loader.load(match_id)
        if not result.success or result.data is None:
            return ServiceResult.fail(result.error or "Failed to load match")
        return ServiceResult.ok(self.store.initialize(result.data))

    def toggle_clock(self) -> ClockToggleOutcome:
        """
        Toggle the clock; when starting, mark the match live remotely.

        If the status update fails the clock is stopped again so the local run
        state matches the remote one, and the error is returned. The revert is
        skipped if something else already stopped the clock in the meantime.
        """
        with self._toggle_lock:
            was_running = self.store.is_running
            self.store.toggle_clock()

            match_id = self.store.match_id
            if was_running or match_id is None:
                return ClockToggleOutcome(running=self.store.is_running)

            result = self.sync_client.set_match_status(match_id, MatchStatus.LIVE)
            if result.success:
                return ClockToggleOutcome(running=self.store.is_running)

            log.warning("Reverting clock start for match %s: %s", match_id, result.error)
            reverted = self.store.stop_clock()
            return ClockToggleOutcome(
                running=self.store.is_running,
                reverted=reverted,
                error=result.error or "Failed to update match status",
            )

    def record_event(
        self,
        event_type: Union[EventType, str],
        team_id: str,
        player_id: str,
        minute: Optional[int] = None,
    ) -> RecordOutcome:
        """
        Record an event locally, then forward it for sync.

        Args:
            minute: Match minute; defaults to the current clock minute

        Raises:
            SessionError: If the store rejects the intent
            ValueError: If the event type or minute is invalid
        """
        if minute is None:
            minute = self.store.current_minute()
        event = self.store.record_event(event_type, team_id, player_id, minute)
        return RecordOutcome(event=event, sync=self._sync(event))

    def retry_sync(self, event_id: str) -> ServiceResult[PersistedEvent]:
        """
        Operator-triggered retry of an event whose sync failed.

        Events that already reached the remote store only get the current score
        re-sent, so they are never inserted twice.
        """
        state = self.store.sync_state(event_id)
        event = next((e for e in self.store.events if e.id == event_id), None)
        if state is None or event is None:
            return ServiceResult.fail("Event not found")
        if state.status is SyncStatus.CONFIRMED:
            return ServiceResult.fail("Event is already synced")

        if state.server_id is None:
            return self._sync(event)

        result = self.sync_client.set_match_score(
            event.match_id, self.store.home_score, self.store.away_score
        )
        if result.success:
            self.store.mark_event_confirmed(event_id)
            return ServiceResult.ok()
        self.store.mark_event_failed(event_id, result.error or "Score update failed")
        return ServiceResult.fail(result.error or "Score update failed")

    def _sync(self, event: MatchEvent) -> ServiceResult[PersistedEvent]:
        result = self.sync_client.persist_event(event, self.store.home_score, self.store.away_score)
        if result.success:
            self.store.mark_event_confirmed(event.id, result.data)
        else:
            self.store.mark_event_failed(event.id, result.error or "Sync failed", result.data)
        return result

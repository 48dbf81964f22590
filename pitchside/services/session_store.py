"""Session store for the Pitchside match recorder."""

import logging
import threading
import uuid
from typing import Callable, Dict, Optional, Tuple, Union

from ..models import (
    EventSyncState, EventType, MatchEvent, MatchSession, MatchSetup, MatchStatus,
    PersistedEvent, RosterPlayer, SyncStatus, TeamRef,
)
from ..utils import TEMP_EVENT_ID_PREFIX, fmt_elapsed, from_epoch_ms, now_ms
from . import match_clock
from .match_clock import MatchClock

log = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for intents the session cannot apply."""


class SessionNotInitializedError(SessionError):
    """Raised when an event is recorded before any match was loaded."""


class UnknownTeamError(SessionError):
    """Raised when an event names a team that is not playing in the match."""


class SessionStore:
    """
    Single source of truth for the active match.

    All mutation goes through the intents below; each one fully applies under
    the store lock before returning. Readers get copies or immutable values.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        """
        Args:
            clock: Returns the current wall-clock time in epoch milliseconds
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._session = MatchSession()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def initialize(self, setup: MatchSetup) -> dict:
        """
        Replace the whole session with a freshly loaded match.

        The clock runs if the match is live. A start time, when present, seeds
        the elapsed time as wall-clock time since kickoff.

        Returns:
            The new read model
        """
        match = setup.match
        running = match.status is MatchStatus.LIVE
        now = self._clock()
        clock = match_clock.clock_from_start_time(match.start_time_ms, running, now)

        with self._lock:
            self._session = MatchSession(
                match_id=match.id,
                home_score=match.home_score,
                away_score=match.away_score,
                is_running=running,
                clock_anchor_ms=clock.anchor_ms,
                banked_elapsed_ms=clock.banked_ms,
                home_team=TeamRef.from_team(setup.home_team),
                away_team=TeamRef.from_team(setup.away_team),
                home_roster=tuple(RosterPlayer.from_player(p) for p in setup.home_players),
                away_roster=tuple(RosterPlayer.from_player(p) for p in setup.away_players),
            )
            log.info("Session initialized for match %s (%s, %d-%d)",
                     match.id, match.status.value, match.home_score, match.away_score)
            return self._snapshot_locked(now)

    def toggle_clock(self) -> dict:
        """
        Start a stopped clock or stop a running one.

        Stopping banks the elapsed time; starting re-anchors so elapsed time
        continues from the banked value. Every call flips the running flag.

        Callers that mark the match live remotely when starting the clock must
        revert the local run state with ``stop_clock`` if that update fails.
        The store does not roll back on its own.

        Returns:
            The new read model
        """
        now = self._clock()
        with self._lock:
            self._toggle_locked(now)
            return self._snapshot_locked(now)

    def stop_clock(self) -> bool:
        """
        Stop the clock only if it is running.

        Returns:
            True if the clock was running and has been stopped
        """
        now = self._clock()
        with self._lock:
            if not self._session.is_running:
                return False
            self._toggle_locked(now)
            return True

    def record_event(
        self,
        event_type: Union[EventType, str],
        team_id: str,
        player_id: str,
        minute: int,
    ) -> MatchEvent:
        """
        Record an event at the front of the log and update the score.

        Goals increment the score of the team matching ``team_id``. Nothing is
        sent to the remote store; the event starts out pending in the sync
        ledger.

        Args:
            event_type: Event kind or its string value
            team_id: Id of the home or away team
            player_id: Player the event is attributed to
            minute: Match minute at the time of recording

        Returns:
            The recorded event, for forwarding to the sync client

        Raises:
            SessionNotInitializedError: If no match has been loaded
            UnknownTeamError: If ``team_id`` is neither the home nor away team
            ValueError: If the event type is unknown or the minute is negative
        """
        event_type = EventType(event_type)
        minute = int(minute)
        if minute < 0:
            raise ValueError(f"Minute must be non-negative, got {minute}")

        now = self._clock()
        with self._lock:
            session = self._session
            if session.match_id is None:
                raise SessionNotInitializedError("No match session has been initialized")

            is_home = session.home_team is not None and team_id == session.home_team.id
            is_away = session.away_team is not None and team_id == session.away_team.id
            if not (is_home or is_away):
                raise UnknownTeamError(f"Team {team_id!r} is not playing in match {session.match_id}")

            event = MatchEvent(
                id=f"{TEMP_EVENT_ID_PREFIX}{uuid.uuid4().hex}",
                match_id=session.match_id,
                team_id=team_id,
                player_id=player_id,
                type=event_type,
                minute=minute,
                created_at=from_epoch_ms(now),
            )
            session.events.insert(0, event)
            session.sync[event.id] = EventSyncState()

            if event.is_goal:
                if is_home:
                    session.home_score += 1
                else:
                    session.away_score += 1

            log.debug("Recorded %s for team %s at minute %d (%d-%d)",
                      event_type.value, team_id, minute, session.home_score, session.away_score)
            return event

    # ------------------------------------------------------------------
    # Sync ledger
    # ------------------------------------------------------------------
    def mark_event_confirmed(self, event_id: str, persisted: Optional[PersistedEvent] = None) -> None:
        """Record that the remote store accepted an event."""
        with self._lock:
            state = self._session.sync.get(event_id)
            if state is None:
                return  # event belongs to a replaced session
            state.status = SyncStatus.CONFIRMED
            state.server_id = persisted.id if persisted else state.server_id
            state.error = None

    def mark_event_failed(self, event_id: str, error: str, persisted: Optional[PersistedEvent] = None) -> None:
        """Record a failed sync; the local event and score stay as they are."""
        with self._lock:
            state = self._session.sync.get(event_id)
            if state is None:
                return
            state.status = SyncStatus.FAILED
            state.error = error
            if persisted is not None:
                state.server_id = persisted.id

    def sync_state(self, event_id: str) -> Optional[EventSyncState]:
        with self._lock:
            state = self._session.sync.get(event_id)
            if state is None:
                return None
            return EventSyncState(status=state.status, server_id=state.server_id, error=state.error)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def elapsed_time_millis(self) -> int:
        """Elapsed match time in milliseconds; 0 if the clock never started."""
        with self._lock:
            return match_clock.elapsed_millis(self._clock_value(), self._session.is_running, self._clock())

    def formatted_elapsed(self) -> str:
        """Elapsed match time as zero-padded ``MM:SS``."""
        return fmt_elapsed(self.elapsed_time_millis())

    def current_minute(self) -> int:
        with self._lock:
            return match_clock.elapsed_minute(self._clock_value(), self._session.is_running, self._clock())

    @property
    def is_initialized(self) -> bool:
        return self._session.match_id is not None

    @property
    def match_id(self) -> Optional[str]:
        return self._session.match_id

    @property
    def home_score(self) -> int:
        return self._session.home_score

    @property
    def away_score(self) -> int:
        return self._session.away_score

    @property
    def is_running(self) -> bool:
        return self._session.is_running

    @property
    def events(self) -> Tuple[MatchEvent, ...]:
        with self._lock:
            return tuple(self._session.events)

    @property
    def home_team(self) -> Optional[TeamRef]:
        return self._session.home_team

    @property
    def away_team(self) -> Optional[TeamRef]:
        return self._session.away_team

    @property
    def home_roster(self) -> Tuple[RosterPlayer, ...]:
        return self._session.home_roster

    @property
    def away_roster(self) -> Tuple[RosterPlayer, ...]:
        return self._session.away_roster

    def roster_for(self, team_id: str) -> Tuple[RosterPlayer, ...]:
        """
        Players of the given team.

        Raises:
            UnknownTeamError: If the team is not playing in the match
        """
        with self._lock:
            session = self._session
            if session.home_team and team_id == session.home_team.id:
                return session.home_roster
            if session.away_team and team_id == session.away_team.id:
                return session.away_roster
        raise UnknownTeamError(f"Team {team_id!r} is not playing in this match")

    def player_name(self, player_id: str) -> str:
        with self._lock:
            for player in self._session.home_roster + self._session.away_roster:
                if player.id == player_id:
                    return player.name
        return "Unknown"

    def snapshot(self) -> dict:
        """JSON-ready read model of the session at the current instant."""
        now = self._clock()
        with self._lock:
            return self._snapshot_locked(now)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _toggle_locked(self, now: int) -> None:
        session = self._session
        clock = self._clock_value()
        if session.is_running:
            clock = match_clock.stop(clock, now)
        else:
            clock = match_clock.start(clock, now)
        session.is_running = not session.is_running
        session.clock_anchor_ms = clock.anchor_ms
        session.banked_elapsed_ms = clock.banked_ms
        log.debug("Clock %s at %s", "started" if session.is_running else "stopped",
                  fmt_elapsed(clock.banked_ms))

    def _clock_value(self) -> MatchClock:
        return MatchClock(anchor_ms=self._session.clock_anchor_ms, banked_ms=self._session.banked_elapsed_ms)

    def _snapshot_locked(self, now: int) -> dict:
        data = self._session.to_json()
        elapsed = match_clock.elapsed_millis(self._clock_value(), self._session.is_running, now)
        data["elapsed_ms"] = elapsed
        data["elapsed"] = fmt_elapsed(elapsed)
        data["current_minute"] = match_clock.elapsed_minute(self._clock_value(), self._session.is_running, now)
        data["sync_counts"] = self._sync_counts()
        return data

    def _sync_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in SyncStatus}
        for state in self._session.sync.values():
            counts[state.status.value] += 1
        return counts

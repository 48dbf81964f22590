"""Persists recorded events and match status changes to the remote store."""

import logging

from ..models import MatchEvent, MatchStatus, PersistedEvent, ServiceResult
from ..utils.constants import EVENTS_TABLE, MATCHES_TABLE
from .remote_store import RemoteStoreClient, RemoteStoreError, eq

log = logging.getLogger(__name__)


class EventSyncClient:
    """Writes single events and status updates. Failures are reported, never retried."""

    def __init__(self, remote: RemoteStoreClient):
        self.remote = remote

    def persist_event(
        self, event: MatchEvent, home_score: int, away_score: int
    ) -> ServiceResult[PersistedEvent]:
        """
        Insert an event; for goals also store the given score as authoritative.

        If the insert succeeds but the score update fails, the failed result
        still carries the persisted event so the caller knows it landed.
        """
        try:
            row = self.remote.insert(EVENTS_TABLE, event.to_insert_row())
            persisted = PersistedEvent.from_dict(row)
        except RemoteStoreError as exc:
            log.warning("Event %s was not persisted: %s", event.id, exc)
            return ServiceResult.fail(str(exc))
        except (KeyError, ValueError) as exc:
            return ServiceResult.fail(f"Unexpected event row: {exc}")

        if event.is_goal:
            score = self.set_match_score(event.match_id, home_score, away_score)
            if not score.success:
                return ServiceResult.fail(score.error, data=persisted)

        log.debug("Event %s persisted as %s", event.id, persisted.id)
        return ServiceResult.ok(persisted)

    def set_match_score(self, match_id: str, home_score: int, away_score: int) -> ServiceResult[None]:
        """Store the given score as the match's authoritative score."""
        try:
            self.remote.update(
                MATCHES_TABLE,
                {"home_score": home_score, "away_score": away_score},
                filters={"id": eq(match_id)},
            )
        except RemoteStoreError as exc:
            log.warning("Score %d-%d for match %s was not persisted: %s",
                        home_score, away_score, match_id, exc)
            return ServiceResult.fail(str(exc))
        return ServiceResult.ok()

    def set_match_status(self, match_id: str, status: MatchStatus) -> ServiceResult[None]:
        """Update the match status, e.g. mark it live when the clock starts."""
        try:
            self.remote.update(MATCHES_TABLE, {"status": MatchStatus(status).value},
                               filters={"id": eq(match_id)})
        except RemoteStoreError as exc:
            log.warning("Status of match %s not updated: %s", match_id, exc)
            return ServiceResult.fail(str(exc))
        return ServiceResult.ok()

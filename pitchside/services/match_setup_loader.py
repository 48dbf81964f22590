"""Loads match setups and open match listings from the remote store."""

import logging
from typing import List

from ..models import Match, MatchListing, MatchSetup, MatchStatus, Player, ServiceResult, Team
from ..utils.constants import MATCHES_TABLE, PLAYERS_TABLE, TEAMS_TABLE
from .remote_store import RemoteStoreClient, RemoteStoreError, eq, in_

log = logging.getLogger(__name__)

_LISTING_COLUMNS = "*,home_team:teams!home_team_id(*),away_team:teams!away_team_id(*)"


class MatchSetupLoader:
    """Fetches everything needed to start tracking a match. Performs no retries."""

    def __init__(self, remote: RemoteStoreClient):
        self.remote = remote

    def load(self, match_id: str) -> ServiceResult[MatchSetup]:
        """
        Fetch the match, both teams and both rosters.

        Args:
            match_id: Remote id of the match

        Returns:
            Successful result carrying a ``MatchSetup``, or a failure with a
            human-readable message (e.g. ``"Match not found"``)
        """
        try:
            row = self.remote.select_one(MATCHES_TABLE, filters={"id": eq(match_id)})
            if row is None:
                return ServiceResult.fail("Match not found")
            match = Match.from_dict(row)

            home_row = self.remote.select_one(TEAMS_TABLE, filters={"id": eq(match.home_team_id)})
            if home_row is None:
                return ServiceResult.fail("Home team not found")

            away_row = self.remote.select_one(TEAMS_TABLE, filters={"id": eq(match.away_team_id)})
            if away_row is None:
                return ServiceResult.fail("Away team not found")

            home_players = self._roster(match.home_team_id)
            away_players = self._roster(match.away_team_id)
        except RemoteStoreError as exc:
            log.warning("Loading match %s failed: %s", match_id, exc)
            return ServiceResult.fail(str(exc))
        except (KeyError, ValueError) as exc:
            log.warning("Match %s has malformed data: %s", match_id, exc)
            return ServiceResult.fail(f"Malformed match data: {exc}")

        return ServiceResult.ok(MatchSetup(
            match=match,
            home_team=Team.from_dict(home_row),
            away_team=Team.from_dict(away_row),
            home_players=home_players,
            away_players=away_players,
        ))

    def list_open_matches(self) -> ServiceResult[List[MatchListing]]:
        """Live and scheduled matches, live first, then by start time."""
        try:
            rows = self.remote.select(
                MATCHES_TABLE,
                columns=_LISTING_COLUMNS,
                filters={"status": in_([MatchStatus.LIVE.value, MatchStatus.SCHEDULED.value])},
                order="status.desc,start_time.asc",
            )
            listings = [
                MatchListing(
                    match=Match.from_dict(row),
                    home_team=Team.from_dict(row["home_team"]),
                    away_team=Team.from_dict(row["away_team"]),
                )
                for row in rows
            ]
        except RemoteStoreError as exc:
            log.warning("Listing matches failed: %s", exc)
            return ServiceResult.fail(str(exc))
        except (KeyError, TypeError, ValueError) as exc:
            return ServiceResult.fail(f"Malformed match data: {exc}")
        return ServiceResult.ok(listings)

    def _roster(self, team_id: str) -> List[Player]:
        rows = self.remote.select(PLAYERS_TABLE, filters={"team_id": eq(team_id)})
        return [Player.from_dict(row) for row in rows]

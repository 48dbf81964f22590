"""Shared builders for the test suite."""

import json
from typing import Any, Optional

import requests

from pitchside.models import Match, MatchSetup, MatchStatus, Player, Team
from pitchside.utils import from_epoch_ms, to_epoch_ms

KICKOFF_MS = 1_700_000_000_000
HOME_ID = "team-home"
AWAY_ID = "team-away"
MATCH_ID = "match-1"


class FakeClock:
    """Injectable wall clock in epoch milliseconds."""

    def __init__(self, now: int = KICKOFF_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


def iso_at(millis: int) -> str:
    return from_epoch_ms(millis).isoformat()


def make_setup(
    status: MatchStatus = MatchStatus.SCHEDULED,
    home_score: int = 0,
    away_score: int = 0,
    start_time: Optional[str] = None,
    match_id: str = MATCH_ID,
) -> MatchSetup:
    return MatchSetup(
        match=Match(
            id=match_id,
            league_id="league-1",
            home_team_id=HOME_ID,
            away_team_id=AWAY_ID,
            status=status,
            home_score=home_score,
            away_score=away_score,
            start_time_ms=to_epoch_ms(start_time),
        ),
        home_team=Team(id=HOME_ID, name="Harbour City", short_name="HAR"),
        away_team=Team(id=AWAY_ID, name="Northfield Rovers"),
        home_players=[
            Player(id="p-h1", team_id=HOME_ID, name="Ada Okafor", jersey_number=9),
            Player(id="p-h2", team_id=HOME_ID, name="Lena Brandt", jersey_number=4),
        ],
        away_players=[
            Player(id="p-a1", team_id=AWAY_ID, name="Sam Ferreira", jersey_number=10),
        ],
    )


def make_response(status_code: int = 200, body: Any = None, reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response

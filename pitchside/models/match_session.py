"""
MatchSession model for the Pitchside match recorder.

This module contains the MatchSession dataclass which holds the complete state
of one actively tracked match: score, clock, event log and rosters.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .match_event import EventSyncState, MatchEvent
from .match_setup import Player, Team


@dataclass(frozen=True)
class TeamRef:
    """Team metadata kept for the lifetime of a session."""
    id: str
    name: str
    short_name: Optional[str] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_team(cls, team: Team) -> "TeamRef":
        return cls(id=team.id, name=team.name, short_name=team.short_name, logo_url=team.logo_url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "logo_url": self.logo_url,
        }


@dataclass(frozen=True)
class RosterPlayer:
    """A player available for event attribution."""
    id: str
    name: str
    jersey_number: Optional[int] = None

    @classmethod
    def from_player(cls, player: Player) -> "RosterPlayer":
        return cls(id=player.id, name=player.name, jersey_number=player.jersey_number)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "jersey_number": self.jersey_number}


@dataclass
class MatchSession:
    """
    Represents the complete state of the active match.

    Attributes:
        match_id: Remote id of the match, None before initialization
        home_score: Goals for the home team
        away_score: Goals for the away team
        is_running: Whether the clock is currently advancing
        clock_anchor_ms: Epoch ms from which running time is measured
        banked_elapsed_ms: Elapsed ms preserved across pauses
        events: Recorded events, newest first
        sync: Sync ledger keyed by temporary event id
        home_team: Home team metadata
        away_team: Away team metadata
        home_roster: Home players
        away_roster: Away players
    """
    match_id: Optional[str] = None
    home_score: int = 0
    away_score: int = 0
    is_running: bool = False
    clock_anchor_ms: Optional[int] = None
    banked_elapsed_ms: int = 0
    events: List[MatchEvent] = field(default_factory=list)
    sync: Dict[str, EventSyncState] = field(default_factory=dict)
    home_team: Optional[TeamRef] = None
    away_team: Optional[TeamRef] = None
    home_roster: Tuple[RosterPlayer, ...] = ()
    away_roster: Tuple[RosterPlayer, ...] = ()

    def goal_tally(self) -> Tuple[int, int]:
        """Count goals per side from the event log."""
        home = away = 0
        for event in self.events:
            if not event.is_goal:
                continue
            if self.home_team and event.team_id == self.home_team.id:
                home += 1
            elif self.away_team and event.team_id == self.away_team.id:
                away += 1
        return home, away

    def to_json(self) -> dict:
        """
        Convert the session to a JSON-serializable dictionary.

        Clock fields are raw; elapsed time is added by the store since it
        depends on the current wall-clock time.
        """
        return {
            "match_id": self.match_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_running": self.is_running,
            "clock_anchor_ms": self.clock_anchor_ms,
            "banked_elapsed_ms": self.banked_elapsed_ms,
            "events": [
                dict(event.to_dict(), sync=self.sync[event.id].to_dict())
                if event.id in self.sync else event.to_dict()
                for event in self.events
            ],
            "home_team": self.home_team.to_dict() if self.home_team else None,
            "away_team": self.away_team.to_dict() if self.away_team else None,
            "home_roster": [p.to_dict() for p in self.home_roster],
            "away_roster": [p.to_dict() for p in self.away_roster],
        }

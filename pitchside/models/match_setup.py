"""
Remote record models for the Pitchside match recorder.

These dataclasses mirror the rows kept by the remote store (matches, teams,
players) and the ``MatchSetup`` snapshot a session is initialized from.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pitchside.utils.time_utils import from_epoch_ms, to_epoch_ms


class MatchStatus(Enum):
    """Lifecycle status of a match in the remote store."""
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINISHED = "finished"


@dataclass(frozen=True)
class Team:
    """A team row."""
    id: str
    name: str
    league_id: Optional[str] = None
    short_name: Optional[str] = None
    logo_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.short_name or self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "league_id": self.league_id,
            "name": self.name,
            "short_name": self.short_name,
            "logo_url": self.logo_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Create from a remote row."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            league_id=data.get("league_id"),
            short_name=data.get("short_name"),
            logo_url=data.get("logo_url"),
        )


@dataclass(frozen=True)
class Player:
    """A player row."""
    id: str
    team_id: str
    name: str
    jersey_number: Optional[int] = None
    photo_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "team_id": self.team_id,
            "name": self.name,
            "jersey_number": self.jersey_number,
            "photo_url": self.photo_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Create from a remote row."""
        number = data.get("jersey_number")
        return cls(
            id=str(data["id"]),
            team_id=str(data.get("team_id") or ""),
            name=data.get("name") or "",
            jersey_number=int(number) if number is not None else None,
            photo_url=data.get("photo_url"),
        )


@dataclass(frozen=True)
class Match:
    """A match row."""
    id: str
    home_team_id: str
    away_team_id: str
    status: MatchStatus = MatchStatus.SCHEDULED
    home_score: int = 0
    away_score: int = 0
    start_time_ms: Optional[int] = None  # epoch ms, parsed from the ISO-8601 column
    league_id: Optional[str] = None
    is_synced: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        start = self.start_time_ms
        return {
            "id": self.id,
            "league_id": self.league_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "start_time": from_epoch_ms(start).isoformat() if start is not None else None,
            "status": self.status.value,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_synced": self.is_synced,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """
        Create from a remote row.

        Raises:
            ValueError: If the status is not a known match status or the
                start time is not a valid ISO-8601 timestamp
        """
        return cls(
            id=str(data["id"]),
            league_id=data.get("league_id"),
            home_team_id=str(data["home_team_id"]),
            away_team_id=str(data["away_team_id"]),
            start_time_ms=to_epoch_ms(data.get("start_time")),
            status=MatchStatus(data.get("status") or MatchStatus.SCHEDULED.value),
            home_score=max(0, int(data.get("home_score") or 0)),
            away_score=max(0, int(data.get("away_score") or 0)),
            is_synced=bool(data.get("is_synced", False)),
        )


@dataclass(frozen=True)
class MatchSetup:
    """Everything a session needs to start tracking a match."""
    match: Match
    home_team: Team
    away_team: Team
    home_players: List[Player] = field(default_factory=list)
    away_players: List[Player] = field(default_factory=list)


@dataclass(frozen=True)
class MatchListing:
    """A match with both teams embedded, as shown in the open matches list."""
    match: Match
    home_team: Team
    away_team: Team

    def to_dict(self) -> Dict[str, Any]:
        data = self.match.to_dict()
        data["home_team"] = self.home_team.to_dict()
        data["away_team"] = self.away_team.to_dict()
        return data

"""Match event models: locally recorded events and their remote counterparts."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class EventType(Enum):
    """Kinds of events an operator can record."""
    GOAL = "goal"
    YELLOW_CARD = "yellow_card"
    RED_CARD = "red_card"


class SyncStatus(Enum):
    """Remote confirmation state of a locally recorded event."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class MatchEvent:
    """
    An event recorded in the local session.

    Attributes:
        id: Temporary local id, never a server-assigned id
        match_id: Match the event belongs to
        team_id: Team credited with the event
        player_id: Player the event is attributed to
        type: Event kind
        minute: Match minute when it was recorded
        created_at: Wall-clock instant of recording (UTC)
    """
    id: str
    match_id: str
    team_id: str
    player_id: str
    type: EventType
    minute: int
    created_at: datetime

    @property
    def is_goal(self) -> bool:
        return self.type is EventType.GOAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "match_id": self.match_id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "type": self.type.value,
            "minute": self.minute,
            "created_at": self.created_at.isoformat(),
        }

    def to_insert_row(self) -> Dict[str, Any]:
        """Columns sent when inserting; the server assigns id and created_at."""
        return {
            "match_id": self.match_id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "type": self.type.value,
            "minute": self.minute,
        }


@dataclass(frozen=True)
class PersistedEvent:
    """An event row as confirmed by the remote store."""
    id: str
    match_id: str
    team_id: str
    player_id: str
    type: EventType
    minute: int
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersistedEvent":
        return cls(
            id=str(data["id"]),
            match_id=str(data["match_id"]),
            team_id=str(data["team_id"]),
            player_id=str(data["player_id"]),
            type=EventType(data["type"]),
            minute=int(data.get("minute") or 0),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "match_id": self.match_id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "type": self.type.value,
            "minute": self.minute,
            "created_at": self.created_at,
        }


@dataclass
class EventSyncState:
    """Sync ledger entry for one locally recorded event."""
    status: SyncStatus = SyncStatus.PENDING
    server_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "server_id": self.server_id,
            "error": self.error,
        }

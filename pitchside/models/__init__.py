"""
Models package for the Pitchside match recorder.

This package contains the core data models used throughout the application.
"""
from .match_setup import MatchStatus, Team, Player, Match, MatchSetup, MatchListing
from .match_event import EventType, SyncStatus, MatchEvent, PersistedEvent, EventSyncState
from .match_session import MatchSession, TeamRef, RosterPlayer
from .service_result import ServiceResult

__all__ = [
    "MatchStatus", "Team", "Player", "Match", "MatchSetup", "MatchListing",
    "EventType", "SyncStatus", "MatchEvent", "PersistedEvent", "EventSyncState",
    "MatchSession", "TeamRef", "RosterPlayer", "ServiceResult",
]

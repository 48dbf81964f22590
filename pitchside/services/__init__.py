"""
Services package for the Pitchside match recorder.

This package contains the session store, the elapsed-time calculator, the
remote collaborators and the factory that wires them together.
"""
from .match_clock import MatchClock
from .session_store import (
    SessionStore, SessionError, SessionNotInitializedError, UnknownTeamError,
)
from .remote_store import RemoteStoreClient, RemoteStoreError
from .match_setup_loader import MatchSetupLoader
from .event_sync import EventSyncClient
from .match_controller import MatchController, ClockToggleOutcome, RecordOutcome
from .display_ticker import ClockDisplayTicker
from .service_factory import ServiceFactory

__all__ = [
    "MatchClock", "SessionStore", "SessionError", "SessionNotInitializedError",
    "UnknownTeamError", "RemoteStoreClient", "RemoteStoreError", "MatchSetupLoader",
    "EventSyncClient", "MatchController", "ClockToggleOutcome", "RecordOutcome",
    "ClockDisplayTicker", "ServiceFactory",
]

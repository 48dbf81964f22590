"""
Pitchside Live Match Recorder

Records a live match: a wall-clock anchored match clock, goals and cards
attributed to players and minutes, and a running score that is synchronized
to a remote store.

This package provides the session core and a Flask JSON API for the
operator screens.
"""
from .models import MatchSetup, MatchEvent, EventType, MatchStatus
from .services import SessionStore, MatchController, ServiceFactory
from .ui import create_app, run_web_app
from .utils import fmt_elapsed, now_ms, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "MatchSetup", "MatchEvent", "EventType", "MatchStatus",
    "SessionStore", "MatchController", "ServiceFactory",
    "create_app", "run_web_app", "fmt_elapsed", "now_ms", "APP_TITLE",
]

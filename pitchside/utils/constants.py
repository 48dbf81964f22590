"""
Constants for the Pitchside match recorder.

This module contains configuration defaults used throughout the application.
Runtime overrides are read from the environment by ``pitchside.config``.
"""

# Application metadata
APP_TITLE = "Pitchside"

# Clock display
DEFAULT_TICK_INTERVAL_S = 1.0
MILLIS_PER_MINUTE = 60 * 1000

# Remote store
DEFAULT_HTTP_TIMEOUT_S = 10.0
REST_PATH = "/rest/v1"
MATCHES_TABLE = "matches"
TEAMS_TABLE = "teams"
PLAYERS_TABLE = "players"
EVENTS_TABLE = "match_events"

# Web server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122

# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Local ids handed out before the remote store assigns its own
TEMP_EVENT_ID_PREFIX = "temp-"

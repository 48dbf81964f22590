"""
Utilities package for the Pitchside match recorder.

This package contains time helpers, constants and logging setup.
"""
from .time_utils import fmt_mmss, fmt_elapsed, now_ms, to_epoch_ms, from_epoch_ms
from .constants import APP_TITLE, MILLIS_PER_MINUTE, TEMP_EVENT_ID_PREFIX
from .logging_setup import configure_logging

__all__ = [
    "fmt_mmss", "fmt_elapsed", "now_ms", "to_epoch_ms", "from_epoch_ms",
    "APP_TITLE", "MILLIS_PER_MINUTE", "TEMP_EVENT_ID_PREFIX", "configure_logging",
]

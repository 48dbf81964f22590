"""Elapsed-time calculator for the Pitchside match clock.

Elapsed time is never accumulated tick by tick. The clock keeps an anchor, the
wall-clock instant at which elapsed time would have been zero had the match run
continuously, plus the elapsed time banked at the last pause. Every read is
recomputed from the current wall-clock time, so a display that stops polling
(backgrounded process, throttled timer) is correct again on its next read.

All values are integer epoch milliseconds and all functions are pure.
"""
from dataclasses import dataclass
from typing import Optional

from ..utils import MILLIS_PER_MINUTE, fmt_elapsed


@dataclass(frozen=True)
class MatchClock:
    """
    Immutable clock value.

    Attributes:
        anchor_ms: Instant elapsed time is measured from while running
        banked_ms: Elapsed time preserved at the last stop (or at start)
    """
    anchor_ms: Optional[int] = None
    banked_ms: int = 0


def start(clock: MatchClock, now: int) -> MatchClock:
    """Resume from the banked value: ``anchor = now - banked``."""
    return MatchClock(anchor_ms=now - clock.banked_ms, banked_ms=clock.banked_ms)


def stop(clock: MatchClock, now: int) -> MatchClock:
    """Bank ``now - anchor`` so a later start continues from it."""
    return MatchClock(anchor_ms=clock.anchor_ms, banked_ms=_running_elapsed(clock, now))


def elapsed_millis(clock: MatchClock, running: bool, now: int) -> int:
    """
    Elapsed match time net of paused intervals.

    While stopped only the banked value counts; the anchor is not consulted.
    """
    if running:
        return _running_elapsed(clock, now)
    return clock.banked_ms


def elapsed_minute(clock: MatchClock, running: bool, now: int) -> int:
    """Whole minutes elapsed; minute 0 covers the first sixty seconds."""
    return elapsed_millis(clock, running, now) // MILLIS_PER_MINUTE


def format_elapsed(clock: MatchClock, running: bool, now: int) -> str:
    return fmt_elapsed(elapsed_millis(clock, running, now))


def clock_from_start_time(start_ms: Optional[int], running: bool, now: int) -> MatchClock:
    """
    Build the clock for a match loaded from the remote store.

    Elapsed-so-far is the wall-clock time since ``start_ms``; a start time in
    the future counts as zero. A live match without a start time counts from
    ``now``.
    """
    if start_ms is None:
        return MatchClock(anchor_ms=now if running else None)

    elapsed = max(0, now - start_ms)
    if running:
        return MatchClock(anchor_ms=now - elapsed, banked_ms=elapsed)
    return MatchClock(anchor_ms=None, banked_ms=elapsed)


def _running_elapsed(clock: MatchClock, now: int) -> int:
    if clock.anchor_ms is None:
        return clock.banked_ms
    # A wall clock stepped backwards must not undo time already banked
    return max(clock.banked_ms, now - clock.anchor_ms)

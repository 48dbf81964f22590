"""
Time utility functions for the Pitchside match recorder.

All match timing is done in integer epoch milliseconds so elapsed time can be
derived from wall-clock readings without floating point drift.
"""
import re
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_FRACTION = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def fmt_elapsed(millis: int) -> str:
    """
    Format elapsed milliseconds as MM:SS.

    Sub-second remainders are truncated, never rounded.

    Example:
        >>> fmt_elapsed(65_999)
        '01:05'
    """
    return fmt_mmss(max(0, int(millis)) // 1000)


def now_ms() -> int:
    """
    Get current timestamp in epoch milliseconds.

    Returns:
        Current wall-clock time as integer epoch milliseconds
    """
    return int(time.time() * 1000)


def to_epoch_ms(value: Union[str, datetime, None]) -> Optional[int]:
    """
    Convert an ISO-8601 string or datetime to epoch milliseconds.

    Naive datetimes are treated as UTC. A trailing ``Z`` is accepted.

    Args:
        value: Timestamp as returned by the remote store, or None

    Returns:
        Epoch milliseconds, or None when no value was given

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        # fromisoformat before 3.11 only takes 3 or 6 fractional digits
        text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(millis: int) -> datetime:
    """Return an aware UTC datetime for epoch milliseconds."""
    return _EPOCH + timedelta(milliseconds=millis)

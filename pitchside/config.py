"""Runtime configuration for the Pitchside match recorder."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .utils.constants import (
    DEFAULT_HOST, DEFAULT_HTTP_TIMEOUT_S, DEFAULT_LOG_LEVEL, DEFAULT_PORT,
    DEFAULT_TICK_INTERVAL_S,
)


@dataclass(frozen=True)
class Settings:
    """
    Environment-driven settings.

    Attributes:
        supabase_url: Base URL of the remote store (no trailing slash)
        supabase_key: API key sent with every remote request
        http_timeout: Timeout in seconds for remote requests
        tick_interval: Seconds between clock display refreshes
        host: Address the web API binds to
        port: Port the web API listens on
        log_level: Name of the package log level
    """
    supabase_url: str = ""
    supabase_key: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_S
    tick_interval: float = DEFAULT_TICK_INTERVAL_S
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``PITCHSIDE_*`` environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        return cls(
            supabase_url=env.get("PITCHSIDE_SUPABASE_URL", "").rstrip("/"),
            supabase_key=env.get("PITCHSIDE_SUPABASE_KEY", ""),
            http_timeout=float(env.get("PITCHSIDE_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT_S)),
            tick_interval=float(env.get("PITCHSIDE_TICK_INTERVAL", DEFAULT_TICK_INTERVAL_S)),
            host=env.get("PITCHSIDE_HOST", DEFAULT_HOST),
            port=int(env.get("PITCHSIDE_PORT", DEFAULT_PORT)),
            log_level=env.get("PITCHSIDE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

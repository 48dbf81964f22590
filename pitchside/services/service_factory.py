"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances with their dependencies injected. Nothing here is a module-level
global, so independent sessions can coexist (e.g. one per test).
"""
from typing import Callable, Optional

import requests

from ..config import Settings
from ..utils import now_ms
from .display_ticker import ClockDisplayTicker
from .event_sync import EventSyncClient
from .match_controller import MatchController
from .match_setup_loader import MatchSetupLoader
from .remote_store import RemoteStoreClient
from .session_store import SessionStore


class ServiceFactory:
    """Factory for creating service instances with proper dependency injection."""

    def __init__(self, settings: Optional[Settings] = None, http_session: Optional[requests.Session] = None):
        """
        Args:
            settings: Runtime settings; read from the environment when omitted
            http_session: Optional ``requests.Session`` for the remote client
        """
        self.settings = settings or Settings.from_env()
        self._http_session = http_session
        self._remote: Optional[RemoteStoreClient] = None

    def create_session_store(self, clock: Callable[[], int] = now_ms) -> SessionStore:
        return SessionStore(clock=clock)

    def create_match_setup_loader(self) -> MatchSetupLoader:
        return MatchSetupLoader(self._get_remote())

    def create_event_sync_client(self) -> EventSyncClient:
        return EventSyncClient(self._get_remote())

    def create_match_controller(self, store: Optional[SessionStore] = None) -> MatchController:
        """
        Create a MatchController with loader and sync client injected.

        Args:
            store: Session store to drive; a new one is created when omitted

        Returns:
            Configured MatchController instance
        """
        return MatchController(
            store=store or self.create_session_store(),
            loader=self.create_match_setup_loader(),
            sync_client=self.create_event_sync_client(),
        )

    def create_display_ticker(self, store: SessionStore, on_tick=None) -> ClockDisplayTicker:
        return ClockDisplayTicker(store, interval=self.settings.tick_interval, on_tick=on_tick)

    def _get_remote(self) -> RemoteStoreClient:
        """Get the shared remote store client."""
        if self._remote is None:
            self._remote = RemoteStoreClient(
                self.settings.supabase_url,
                api_key=self.settings.supabase_key,
                timeout=self.settings.http_timeout,
                session=self._http_session,
            )
        return self._remote

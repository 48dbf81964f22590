"""HTTP client for the remote match store (a PostgREST/Supabase REST endpoint)."""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..utils.constants import DEFAULT_HTTP_TIMEOUT_S, REST_PATH

log = logging.getLogger(__name__)


class RemoteStoreError(Exception):
    """Raised when the remote store cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def eq(value: Any) -> str:
    """PostgREST equality filter."""
    return f"eq.{value}"


def in_(values: Iterable[Any]) -> str:
    """PostgREST membership filter."""
    return "in.({})".format(",".join(str(v) for v in values))


class RemoteStoreClient:
    """
    Thin table-level client: select, insert and update rows.

    No retries are attempted; every failure surfaces as ``RemoteStoreError``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = DEFAULT_HTTP_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Project URL, e.g. ``https://xyz.supabase.co``
            api_key: Key sent as ``apikey`` and bearer token
            timeout: Request timeout in seconds
            session: Optional preconfigured ``requests.Session``
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if api_key:
            self.session.headers.update({
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            })

    def select(
        self,
        table: str,
        *,
        filters: Optional[Dict[str, str]] = None,
        columns: str = "*",
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return all rows of ``table`` matching ``filters``."""
        params: Dict[str, str] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        rows = self._request("GET", table, params=params)
        return rows if isinstance(rows, list) else []

    def select_one(
        self,
        table: str,
        *,
        filters: Dict[str, str],
        columns: str = "*",
    ) -> Optional[Dict[str, Any]]:
        """Return the first matching row, or None when there is none."""
        params = dict(filters)
        params["limit"] = "1"
        rows = self.select(table, filters=params, columns=columns)
        return rows[0] if rows else None

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            RemoteStoreError: If the insert fails or returns no row
        """
        rows = self._request(
            "POST", table, json=row, headers={"Prefer": "return=representation"}
        )
        if isinstance(rows, list):
            if not rows:
                raise RemoteStoreError(f"Insert into {table} returned no row")
            return rows[0]
        return rows

    def update(self, table: str, values: Dict[str, Any], *, filters: Dict[str, str]) -> None:
        """Update matching rows of ``table`` with ``values``."""
        if not filters:
            raise ValueError("Refusing to update without filters")
        self._request("PATCH", table, params=filters, json=values, headers={"Prefer": "return=minimal"})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _url(self, table: str) -> str:
        return f"{self.base_url}{REST_PATH}/{table}"

    def _request(self, method: str, table: str, **kwargs: Any) -> Any:
        if not self.base_url:
            raise RemoteStoreError("Remote store URL is not configured")

        url = self._url(table)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            log.warning("%s %s failed: %s", method, url, exc)
            raise RemoteStoreError(str(exc)) from exc

        if response.status_code >= 400:
            message = self._error_message(response)
            log.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise RemoteStoreError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteStoreError(f"Invalid JSON from {table}: {exc}") from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "error_description", "error", "hint"):
                if body.get(key):
                    return str(body[key])
        return f"HTTP {response.status_code}: {response.reason or 'request failed'}"

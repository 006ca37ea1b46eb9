"""Shared HTTP helpers for the Twitch GQL, legacy API and usher endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

DEFAULT_CLIENT_ID = "kimne78kx3ncx6brgo4mv6wki5h1ko"
GQL_URL = "https://gql.twitch.tv/gql"

REAL_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

BASE_HEADERS: Dict[str, str] = {
    "accept": "*/*",
    "user-agent": REAL_USER_AGENT,
    "accept-language": "en-US,en;q=0.9",
}


class HttpClient:
    """Issues requests to the upstream service with the client identifier attached.

    Status codes are not interpreted here: each API module maps them onto its
    own failures. Connection-level errors are logged and re-raised unchanged.
    """

    def __init__(self, client_id: str = DEFAULT_CLIENT_ID, timeout: float = 10) -> None:
        self.client_id = client_id
        self.timeout = timeout
        self._session = requests.Session()

        self._headers = BASE_HEADERS.copy()
        self._headers["Client-ID"] = client_id
        self._session.headers.update(self._headers)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        try:
            return self._session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:  # pragma: no cover - network errors
            logging.error("HTTP GET to %s failed: %s", url, exc)
            raise

    def post_gql(self, payload: Any, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """POST a GQL operation (or a batch of them) as JSON."""

        try:
            return self._session.post(GQL_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:  # pragma: no cover - network errors
            logging.error("GQL request failed: %s", exc)
            raise

    def prepare_url(self, url: str, params: Dict[str, Any]) -> str:
        """Return ``url`` with ``params`` encoded the way :meth:`get` would send them."""

        return requests.Request("GET", url, params=params).prepare().url

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

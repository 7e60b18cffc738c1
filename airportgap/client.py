"""
HTTP client for the Airport Gap API.

A thin wrapper around ``requests.Session`` with one method per endpoint
the suite consumes.  Every method returns the raw ``requests.Response``
without checking its status: the callers are tests, and a 401 or 422 is
as much an expected outcome as a 200.

Transport failures (DNS, refused connections, TLS errors, timeouts) are
not caught here; they propagate as ``requests.RequestException`` so the
step that triggered them fails immediately.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def auth_headers(token: str) -> dict[str, str]:
    """Build JSON API headers with bearer token auth."""
    return {"Authorization": f"Bearer {token}", **JSON_HEADERS}


class AirportGapClient:
    """
    Client for ``https://airportgap.com/api``.

    Attributes:
        base_url: API root including the ``/api`` base path.
        token: Bearer token presented on protected endpoints, or
            ``None`` to send requests without credentials.
        timeout: Seconds to wait for each round trip.
        session: Underlying ``requests.Session`` (or a compatible fake).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float | None = 30.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "AirportGapClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def with_token(self, token: str | None) -> "AirportGapClient":
        """
        Return a client sharing this session but presenting *token*.

        Pass ``None`` for an anonymous client, or any string to present
        a credential the service does not recognise.
        """
        return AirportGapClient(
            self.base_url,
            token=token,
            timeout=self.timeout,
            session=self.session,
        )

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> requests.Response:
        """
        Send one request and return the response unchecked.

        Args:
            method: HTTP method.
            path: Path below the API root (e.g. ``/airports``).
            json: JSON body for POST/PATCH.
            params: Query parameters.
            authenticated: Attach the bearer token when one is set.

        Returns:
            The ``requests.Response`` as received.
        """
        if authenticated and self.token is not None:
            headers = auth_headers(self.token)
        else:
            headers = dict(JSON_HEADERS)

        response = self.session.request(
            method=method,
            url=self.url_for(path),
            headers=headers,
            json=json,
            params=params,
            timeout=self.timeout,
        )
        logger.info("%s %s -> %s", method, path, response.status_code)
        return response

    # -------------------------------------------------------------------------
    # Airports
    # -------------------------------------------------------------------------

    def list_airports(self, page: int | None = None) -> requests.Response:
        """GET /airports, optionally a specific page."""
        params = {"page": page} if page is not None else None
        return self._request("GET", "/airports", params=params)

    def get_airport(self, code: str) -> requests.Response:
        """GET /airports/{code}."""
        return self._request("GET", f"/airports/{code}")

    def calculate_distance(self, origin: str, destination: str) -> requests.Response:
        """POST /airports/distance with ``{"from", "to"}``."""
        return self._request(
            "POST",
            "/airports/distance",
            json={"from": origin, "to": destination},
        )

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def create_token(self, email: str, password: str) -> requests.Response:
        """POST /tokens to exchange account credentials for a token."""
        return self._request("POST", "/tokens", json={"email": email, "password": password})

    # -------------------------------------------------------------------------
    # Favorites (bearer auth)
    # -------------------------------------------------------------------------

    def list_favorites(self) -> requests.Response:
        """GET /favorites."""
        return self._request("GET", "/favorites", authenticated=True)

    def get_favorite(self, favorite_id: int | str) -> requests.Response:
        """GET /favorites/{id}."""
        return self._request("GET", f"/favorites/{favorite_id}", authenticated=True)

    def create_favorite(self, airport_id: str, note: str | None = None) -> requests.Response:
        """
        POST /favorites.

        ``note`` is omitted from the body entirely when ``None``.
        """
        body: dict[str, Any] = {"airport_id": airport_id}
        if note is not None:
            body["note"] = note
        return self._request("POST", "/favorites", json=body, authenticated=True)

    def update_favorite(self, favorite_id: int | str, note: str) -> requests.Response:
        """PATCH /favorites/{id} with a new note."""
        return self._request(
            "PATCH",
            f"/favorites/{favorite_id}",
            json={"note": note},
            authenticated=True,
        )

    def delete_favorite(self, favorite_id: int | str) -> requests.Response:
        """DELETE /favorites/{id}."""
        return self._request("DELETE", f"/favorites/{favorite_id}", authenticated=True)

    def clear_favorites(self) -> requests.Response:
        """DELETE /favorites/clear_all."""
        return self._request("DELETE", "/favorites/clear_all", authenticated=True)

"""User CRUD API client.

A thin wrapper around the ``/users`` REST resource built on the
``requests`` library.  It is what the management frontend and the
``manage_users`` command line tool use to talk to the API.

The client exposes one method per operation:

* :meth:`list_users` – return every user.
* :meth:`get_user` – fetch a single user by its identifier.
* :meth:`create_user` – create a user from ``email``/``firstName``/``lastName``.
* :meth:`update_user` – change some fields of an existing user.
* :meth:`delete_user` – delete a user.

Every method returns a tuple ``(result, error)``.  On success ``error``
is ``None``; on failure ``result`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message``.  ``status_code``
is ``None`` when the server could not be reached at all.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15

ApiError = Dict[str, Any]


class UserCrudAPI:
    """Client for interacting with the User CRUD API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            prefix: Path prefix the server mounts its routes under
                (its ``API_PREFIX`` setting), e.g. ``/api/v1``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/") + prefix.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/users``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies such as 204).
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all users.

        Returns:
            A tuple ``(users, error)``.  ``users`` is empty on failure.
        """
        data, error = self._request("GET", "/users")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_user(self, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a single user by ID."""
        return self._request("GET", f"/users/{user_id}")

    def create_user(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a user.

        Args:
            payload: ``{"email": ..., "firstName": ..., "lastName": ...}``.
        """
        return self._request("POST", "/users", json_body=payload)

    def update_user(
        self, user_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Update a user.  Only the keys in ``payload`` are sent and changed."""
        return self._request("PATCH", f"/users/{user_id}", json_body=payload)

    def delete_user(self, user_id: int) -> Tuple[bool, Optional[ApiError]]:
        """Delete a user.

        Returns:
            A tuple ``(deleted, error)``.
        """
        _, error = self._request("DELETE", f"/users/{user_id}")
        if error:
            return False, error
        return True, None

"""
Hawkin Dynamics cloud HTTP client.

Handles HTTP transport, session state, region routing, and error handling.
All endpoint-specific logic lives in the sibling modules (auth, tests, etc.).
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from hawkin_cloud.sdk.exceptions import (
    AuthError,
    HawkinAPIError,
    NotFoundError,
    ServerError,
)

logger = logging.getLogger(__name__)

SUPPORT_EMAIL = "support@hawkindynamics.com"


@dataclass(frozen=True)
class Session:
    """An access token and the regional API it is valid for."""
    access_token: str
    expires_at: int  # epoch seconds
    base_url: str

    def is_expired(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_at


def raise_for_status(response: requests.Response, operation: str) -> None:
    """Map a non-success status code to the matching HawkinError."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if status == 401:
        raise AuthError(
            f"{operation} -> Error 401: Access token is invalid or expired. Call login() again.",
            status_code=status,
        )
    if status == 403:
        raise AuthError(
            f"{operation} -> Error 403: Access token is missing. Call login() again.",
            status_code=status,
        )
    if status == 404:
        raise NotFoundError(
            f"{operation} -> Error 404: Requested resource not found",
            status_code=status,
        )
    if status >= 500:
        raise ServerError(
            f"{operation} -> Error {status}: Something went wrong. Please contact {SUPPORT_EMAIL}",
            status_code=status,
        )
    raise HawkinAPIError(
        f"{operation} -> Unexpected status code: {status}",
        status_code=status,
    )


class HawkinClient:
    """
    Hawkin Dynamics cloud HTTP transport.

    Holds the session (access token, expiry, regional base URL) and builds
    authenticated requests. Endpoint calls are in sibling modules
    (sdk.auth, sdk.tests, etc.) and take the client as first argument.
    """

    def __init__(self, session: Optional[Session] = None):
        self._session_state: Optional[Session] = session
        self._http = requests.Session()

    @property
    def session(self) -> Optional[Session]:
        return self._session_state

    @property
    def is_logged_in(self) -> bool:
        return self._session_state is not None and not self._session_state.is_expired()

    @property
    def expires_at(self) -> Optional[int]:
        return self._session_state.expires_at if self._session_state else None

    def require_session(self) -> Session:
        """
        Return the current session if it has not expired.

        Raises:
            AuthError: If no login happened or the token has expired
        """
        session = self._session_state
        if session is None or session.is_expired():
            raise AuthError("Access token not available or expired. Call login() again.")
        return session

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        json_data: Any = None,
        operation: str = None,
    ) -> Any:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST/PUT)
            endpoint: Path relative to the regional base URL ("" for the root)
            params: Query parameters
            json_data: JSON body data
            operation: Name used to prefix error and log messages

        Returns:
            Decoded JSON body

        Raises:
            AuthError: If not logged in, or on 401/403
            NotFoundError: On 404
            ServerError: On 5xx
        """
        session = self.require_session()
        operation = operation or endpoint or "get_tests"

        url = session.base_url.rstrip("/")
        if endpoint:
            url = f"{url}/{endpoint.lstrip('/')}"

        headers = {"Authorization": f"Bearer {session.access_token}"}
        logger.debug("%s -> %s: %s", operation, method.upper(), url)

        response = self._http.request(
            method.upper(), url, headers=headers, params=params, json=json_data,
        )
        raise_for_status(response, operation)
        return response.json()

    def logout(self) -> None:
        """Clear the session."""
        self._session_state = None

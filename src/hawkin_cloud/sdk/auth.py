"""
Hawkin authentication SDK functions.

GET <region>/api/token exchanges a refresh token for an access token.
"""

import logging
from typing import Union

from hawkin_cloud.sdk.client import HawkinClient, Session, raise_for_status
from hawkin_cloud.sdk.exceptions import AuthError, ValidationError
from hawkin_cloud.sdk.types import Region, api_url, resolve_region, token_url
from hawkin_cloud.utils import epoch_to_local

logger = logging.getLogger(__name__)


def login(
    client: HawkinClient,
    refresh_token: str,
    region: Union[Region, str] = Region.AMERICAS,
) -> Session:
    """
    Exchange a refresh token for an access token and store it on the client.

    GET /api/token

    Args:
        client: HawkinClient instance
        refresh_token: Refresh token generated in the Hawkin cloud integrations page
        region: Region enum member or display name ("Americas", "Europe", ...)

    Returns:
        The new Session

    Raises:
        ValidationError: If the refresh token is empty
        ConfigError: If the region is unknown
        AuthError: On 401/403, with the client's session left unchanged
        ServerError: On 5xx
    """
    if not isinstance(refresh_token, str) or not refresh_token:
        raise ValidationError("refreshToken must be a non-empty string")

    region = resolve_region(region)
    url = token_url(region)
    logger.debug("login -> GET: %s", url)

    response = client._http.get(
        url, headers={"Authorization": f"Bearer {refresh_token}"},
    )
    # token endpoint wording differs from the data API
    if response.status_code == 401:
        raise AuthError("login -> Error 401: Refresh token is invalid or expired.", status_code=401)
    if response.status_code == 403:
        raise AuthError("login -> Error 403: Refresh token is missing.", status_code=403)
    raise_for_status(response, "login")

    data = response.json()
    session = Session(
        access_token=data["access_token"],
        expires_at=int(data["expires_at"]),
        base_url=api_url(region),
    )
    client._session_state = session

    logger.info(
        "login -> Success! Your access token was received and stored. "
        "Your token will expire at %s",
        epoch_to_local(session.expires_at),
    )
    return session

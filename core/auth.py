"""
Credential providers for the Product Hunt API.

Two strategies share one operation, ``get_token()``:

- ``StaticTokenProvider``   — a developer token used as-is as a bearer token
- ``OAuthTokenProvider``    — a client-credentials exchange against the
  token endpoint; the token is kept until shortly before it expires

Both raise ``AuthError`` when no token can be produced. Which one is used is
decided once, from configuration, by ``provider_from_settings``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Optional, Protocol

import requests

from core.errors import AuthError, ConfigError

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

#: Refresh an OAuth token this many seconds before it expires.
_EXPIRY_MARGIN = 60.0


class CredentialProvider(Protocol):
    def get_token(self) -> str: ...


class StaticTokenProvider:
    """Returns a fixed developer token."""

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str:
        if not self._token:
            raise AuthError("Product Hunt API key is not configured.")
        return self._token


class OAuthTokenProvider:
    """Obtains an application token via the OAuth client-credentials grant.

    The token is reused across searches. Client-credentials tokens from
    Product Hunt normally do not expire; when the response does carry
    ``expires_in``, a new token is requested once it is close to expiring.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.timeout = timeout
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None

    def get_token(self) -> str:
        if self._token and (self._expires_at is None or self._clock() < self._expires_at):
            return self._token

        logger.info("Requesting Product Hunt access token from %s", self.token_url)
        try:
            response = requests.post(
                self.token_url,
                json={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise AuthError("Could not reach the Product Hunt token endpoint.") from exc

        if response.status_code != 200:
            logger.error(
                "Token endpoint returned %d: %s", response.status_code, response.text[:500]
            )
            raise AuthError(f"Product Hunt token request failed ({response.status_code}).")

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError("Product Hunt token response was not JSON.") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthError("Product Hunt token response had no access_token.")

        expires_in = payload.get("expires_in")
        self._token = token
        self._expires_at = (
            self._clock() + float(expires_in) - _EXPIRY_MARGIN if expires_in else None
        )
        return token


def provider_from_settings(settings: Settings) -> CredentialProvider:
    """Build the credential provider selected by ``PRODUCTHUNT_AUTH``."""
    if settings.producthunt_auth == "static":
        return StaticTokenProvider(settings.producthunt_api_key)
    if settings.producthunt_auth == "oauth":
        return OAuthTokenProvider(
            client_id=settings.producthunt_client_id,
            client_secret=settings.producthunt_client_secret,
            token_url=settings.producthunt_token_url,
            timeout=settings.request_timeout,
        )
    raise ConfigError(f"Unknown PRODUCTHUNT_AUTH mode {settings.producthunt_auth!r}.")

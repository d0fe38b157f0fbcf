"""Apple Music developer token retrieval.

DevTokenProvider fetches a short-lived developer token and the user's
storefront from the TapeDeck backend (GET /v1/apple/dev-token).
"""

from __future__ import annotations
import logging
import requests

from ..base import Credential, CredentialProvider
from ..http import is_success, json_body
from ...errors import AuthBackendError

logger = logging.getLogger(__name__)

DEV_TOKEN_PATH = "/v1/apple/dev-token"


class DevTokenProvider(CredentialProvider):
    """Obtain a developer token + storefront from the backend.

    No caching: every call performs a fresh request, so each export runs with
    a newly issued token.
    """

    def __init__(self, base_url: str, timeout: float = 15):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return self.base_url + DEV_TOKEN_PATH

    def get_credential(self) -> Credential:
        logger.debug(f"Requesting developer token from {self.url}")
        try:
            r = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise AuthBackendError(
                "Could not reach the TapeDeck backend to authorize Apple Music",
                details={"url": self.url, "original_error": str(e)},
            ) from e
        if not is_success(r):
            raise AuthBackendError(
                f"TapeDeck backend refused to issue a developer token (HTTP {r.status_code})",
                details={"url": self.url, "status_code": r.status_code},
            )
        try:
            payload = json_body(r)
        except ValueError as e:
            raise AuthBackendError(
                "TapeDeck backend returned an unreadable developer token response",
                details={"url": self.url, "original_error": str(e)},
            ) from e
        token = payload.get("token")
        storefront = payload.get("storefront")
        if not isinstance(token, str) or not token or not isinstance(storefront, str) or not storefront:
            raise AuthBackendError(
                "TapeDeck backend returned a malformed developer token response",
                details={"url": self.url, "keys": sorted(payload.keys())},
            )
        logger.debug(f"Developer token received (length={len(token)}, storefront={storefront})")
        return Credential(service_token=token, storefront=storefront)


__all__ = ["DevTokenProvider", "DEV_TOKEN_PATH"]

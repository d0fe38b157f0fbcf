"""YouTube credentials.

YouTube calls are authorized with the user's OAuth access token directly;
there is no backend-issued service token. The configured region code plays
the role of the storefront.
"""

from __future__ import annotations

from ..base import Credential, CredentialProvider
from ...errors import AuthBackendError


class StaticCredentialProvider(CredentialProvider):
    """Hands out the configured access token as the per-export credential."""

    def __init__(self, access_token: str | None, region_code: str = "US"):
        self.access_token = access_token
        self.region_code = region_code

    def get_credential(self) -> Credential:
        if not self.access_token:
            raise AuthBackendError("No YouTube access token configured")
        return Credential(service_token=self.access_token, storefront=self.region_code or "US")


__all__ = ["StaticCredentialProvider"]

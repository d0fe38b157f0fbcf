"""User authorization gates shared by providers."""

from __future__ import annotations
import logging

from .base import AuthorizationState, Authorizer

logger = logging.getLogger(__name__)


class UserTokenAuthorizer(Authorizer):
    """Authorized when a user grant (Music-User-Token, OAuth access token) is configured."""

    def __init__(self, user_token: str | None):
        self.user_token = user_token

    def request_authorization(self) -> AuthorizationState:
        if self.user_token:
            return AuthorizationState.AUTHORIZED
        logger.debug("No user token configured; treating authorization as denied")
        return AuthorizationState.DENIED


__all__ = ["UserTokenAuthorizer"]

"""Provider abstraction public API.

Apple Music and YouTube are registered here. Additional providers can
register by using register_provider() with a Provider instance.
"""

from .base import (
    TrackKind,
    TrackRequest,
    ResolvedTrack,
    Credential,
    AuthorizationState,
    ProviderCapabilities,
    ProviderLinkGenerator,
    MusicProvider,
    CredentialProvider,
    Authorizer,
    Provider,
    register_provider,
    get_provider_instance,
    available_provider_instances,
)

from .apple_music import AppleMusicProvider
from .youtube import YouTubeProvider

register_provider(AppleMusicProvider())
register_provider(YouTubeProvider())


__all__ = [
    "TrackKind",
    "TrackRequest",
    "ResolvedTrack",
    "Credential",
    "AuthorizationState",
    "ProviderCapabilities",
    "ProviderLinkGenerator",
    "MusicProvider",
    "CredentialProvider",
    "Authorizer",
    "Provider",
    "register_provider",
    "get_provider_instance",
    "available_provider_instances",
]

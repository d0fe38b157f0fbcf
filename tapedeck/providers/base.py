"""Provider abstraction layer.

This module defines provider-neutral domain models and abstract interfaces so
every music service (Apple Music, YouTube, ...) plugs into the same export
pipeline without the orchestrator branching on provider type.

Key abstractions:
- Domain models: TrackRequest, ResolvedTrack, Credential, AuthorizationState
- MusicProvider: resolve / create_playlist / add_tracks capability interface
- CredentialProvider: issues the service credential used by a MusicProvider
- Authorizer: user-level consent gate checked once per export
- Provider: factory wiring the three above from configuration
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Protocol, Dict, Any

# ---------------- Domain Models -----------------


class TrackKind(str, Enum):
    SONG = "song"
    VIDEO = "video"


@dataclass(frozen=True)
class TrackRequest:
    """An (artist, title) entry to be resolved against a provider catalog."""
    artist: str
    title: str

    @property
    def search_term(self) -> str:
        """Free-text query: artist and title joined by a single space."""
        return f"{self.artist} {self.title}".strip()

    def __str__(self) -> str:
        return f"{self.title} by {self.artist}"


@dataclass(frozen=True)
class ResolvedTrack:
    catalog_id: str  # provider-native identifier
    kind: TrackKind = TrackKind.SONG


@dataclass(frozen=True)
class Credential:
    """Short-lived service credential plus the regional catalog it applies to."""
    service_token: str
    storefront: str

    def __repr__(self) -> str:
        # keep tokens out of logs and tracebacks
        return f"Credential(service_token='***', storefront={self.storefront!r})"


class AuthorizationState(str, Enum):
    UNKNOWN = "unknown"
    DENIED = "denied"
    AUTHORIZED = "authorized"


# ---------------- Capability descriptor -----------------

@dataclass(frozen=True)
class ProviderCapabilities:
    search: bool = True
    create_playlist: bool = True
    # True when add_tracks submits all ids in one request
    batch_add: bool = True


# ---------------- Link Generator (for web URLs) -----------------

class ProviderLinkGenerator(Protocol):
    """Protocol for generating web links to provider resources."""

    def track_url(self, track_id: str) -> str:
        """Generate URL for a track page."""
        ...  # pragma: no cover

    def playlist_url(self, playlist_id: str) -> str:
        """Generate URL for a playlist page."""
        ...  # pragma: no cover


# ---------------- Export capability interface -----------------

class MusicProvider(ABC):
    """Catalog search and playlist write operations of one provider.

    Implementations wrap their transport errors into the taxonomy from
    :mod:`tapedeck.errors`; no ``requests`` exception may escape.
    """

    #: Registry name of the provider (e.g. 'apple_music').
    name: str = ""
    #: Human-readable name used in user-facing messages.
    display_name: str = "music provider"
    capabilities: ProviderCapabilities = ProviderCapabilities()

    @abstractmethod
    def resolve(self, entry: TrackRequest, credential: Credential) -> ResolvedTrack | None:
        """Resolve one entry to the top catalog match.

        Returns:
            ResolvedTrack, or None when the catalog has no match

        Raises:
            TransientSearchError: Network error, timeout, 429 or 5xx for this entry
            AuthError: Credential rejected (401/403); caller must abort
        """

    @abstractmethod
    def create_playlist(self, name: str, credential: Credential, description: str = "") -> str:
        """Create an empty playlist and return its provider id.

        Not idempotent: two calls with the same name create two playlists.

        Raises:
            CreateError: On any failure
        """

    @abstractmethod
    def add_tracks(self, playlist_id: str, catalog_ids: Sequence[str], credential: Credential) -> int:
        """Append catalog ids to a playlist, preserving order.

        Returns:
            Number of tracks added (all submitted ids on success)

        Raises:
            CommitError: On any failure
        """


# ---------------- Credentials and authorization -----------------

class CredentialProvider(ABC):
    """Issues a fresh service credential for each export. No caching."""

    @abstractmethod
    def get_credential(self) -> Credential:
        """Fetch a credential.

        Raises:
            AuthBackendError: Issuer unreachable or payload malformed
        """


class Authorizer(ABC):
    """User-level authorization gate for the destination provider."""

    @abstractmethod
    def request_authorization(self) -> AuthorizationState:
        """Ask for (or look up) the user's consent. Called once per export."""


# ---------------- Provider Factory (Complete Provider) -----------------

class Provider(ABC):
    """Complete provider abstraction: builds the export collaborators from config.

    Example:
        provider = get_provider_instance('apple_music')
        provider.validate_config(config['providers']['apple_music'])
        music = provider.create_music_provider(provider_cfg)
        credentials = provider.create_credential_provider(provider_cfg, config['backend'])
        authorizer = provider.create_authorizer(provider_cfg)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'apple_music', 'youtube')."""

    @abstractmethod
    def create_music_provider(self, config: Dict[str, Any]) -> MusicProvider:
        """Create the catalog/playlist client from provider configuration."""

    @abstractmethod
    def create_credential_provider(self, config: Dict[str, Any], backend_config: Dict[str, Any]) -> CredentialProvider:
        """Create the credential source used for every export."""

    @abstractmethod
    def create_authorizer(self, config: Dict[str, Any]) -> Authorizer:
        """Create the user authorization gate."""

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate provider-specific configuration.

        Raises:
            ValueError: If required config keys missing or invalid
        """

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values for this provider."""

    @abstractmethod
    def get_link_generator(self, storefront: str | None = None) -> ProviderLinkGenerator:
        """Get link generator for this provider."""


# ---------------- Provider instance registry -----------------

_provider_instances: dict[str, Provider] = {}


def register_provider(provider: Provider) -> None:
    """Register a provider instance.

    Args:
        provider: Provider instance to register
    """
    _provider_instances[provider.name] = provider


def get_provider_instance(name: str) -> Provider:
    """Get registered provider instance by name.

    Args:
        name: Provider name (e.g., 'apple_music')

    Returns:
        Provider instance

    Raises:
        KeyError: If provider not registered
    """
    return _provider_instances[name]


def available_provider_instances() -> list[str]:
    """Get list of available provider instance names."""
    return sorted(_provider_instances.keys())


__all__ = [
    'TrackKind', 'TrackRequest', 'ResolvedTrack', 'Credential', 'AuthorizationState',
    'ProviderCapabilities', 'ProviderLinkGenerator', 'MusicProvider',
    'CredentialProvider', 'Authorizer', 'Provider',
    'register_provider', 'get_provider_instance', 'available_provider_instances',
]

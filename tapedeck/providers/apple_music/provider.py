"""Apple Music provider implementation.

Complete Apple Music provider that implements the Provider interface.
Wires the REST client into a MusicProvider, creates the developer-token
credential source and the authorization gate, validates configuration, and
provides link generation.
"""

from __future__ import annotations
from typing import Dict, Any, Sequence

from ..base import (
    Authorizer,
    Credential,
    CredentialProvider,
    MusicProvider,
    Provider,
    ProviderCapabilities,
    ProviderLinkGenerator,
    ResolvedTrack,
    TrackKind,
    TrackRequest,
)
from ..authorization import UserTokenAuthorizer
from .auth import DevTokenProvider
from .client import API_BASE, AppleMusicAPIClient


class AppleMusicLinkGenerator:
    """Generates Apple Music web URLs for songs and library playlists."""

    def __init__(self, storefront: str | None = None):
        self.storefront = storefront or "us"

    def track_url(self, track_id: str) -> str:
        """Generate Apple Music song URL."""
        return f"https://music.apple.com/{self.storefront}/song/{track_id}"

    def playlist_url(self, playlist_id: str) -> str:
        """Generate Apple Music library playlist URL."""
        return f"https://music.apple.com/library/playlist/{playlist_id}"


class AppleMusicCatalog(MusicProvider):
    """MusicProvider backed by the Apple Music REST API."""

    name = "apple_music"
    display_name = "Apple Music"
    capabilities = ProviderCapabilities(search=True, create_playlist=True, batch_add=True)

    def __init__(self, client: AppleMusicAPIClient):
        self.client = client

    def resolve(self, entry: TrackRequest, credential: Credential) -> ResolvedTrack | None:
        song = self.client.search_song(entry.search_term, credential)
        if song is None:
            return None
        return ResolvedTrack(catalog_id=str(song["id"]), kind=TrackKind.SONG)

    def create_playlist(self, name: str, credential: Credential, description: str = "") -> str:
        return self.client.create_library_playlist(name, description, credential)

    def add_tracks(self, playlist_id: str, catalog_ids: Sequence[str], credential: Credential) -> int:
        ids = list(catalog_ids)
        self.client.add_library_playlist_tracks(playlist_id, ids, credential)
        return len(ids)


class AppleMusicProvider(Provider):
    """Apple Music streaming provider implementation.

    Provides factory methods for the export collaborators, validates
    configuration, and provides default config values.
    """

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "apple_music"

    def create_music_provider(self, config: Dict[str, Any]) -> MusicProvider:
        """Create the Apple Music catalog/playlist client.

        Args:
            config: Apple Music configuration dict with keys:
                - api_base: REST base URL (default: https://api.music.apple.com/v1)
                - user_token: Music-User-Token for library writes
                - search_timeout / create_timeout / commit_timeout: seconds
                - rate_limit_retries: extra attempts on 429 (default: 0)
        """
        client = AppleMusicAPIClient(
            api_base=config.get('api_base') or API_BASE,
            user_token=config.get('user_token'),
            search_timeout=config.get('search_timeout', 15),
            create_timeout=config.get('create_timeout', 30),
            commit_timeout=config.get('commit_timeout', 30),
            rate_limit_retries=config.get('rate_limit_retries', 0),
        )
        return AppleMusicCatalog(client)

    def create_credential_provider(self, config: Dict[str, Any], backend_config: Dict[str, Any]) -> CredentialProvider:
        """Developer tokens are issued by the TapeDeck backend."""
        base_url = backend_config.get('base_url')
        if not base_url:
            raise ValueError("backend.base_url not configured")
        return DevTokenProvider(base_url, timeout=backend_config.get('timeout_seconds', 15))

    def create_authorizer(self, config: Dict[str, Any]) -> Authorizer:
        return UserTokenAuthorizer(config.get('user_token'))

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate Apple Music configuration.

        The user token is deliberately optional here: a missing token is an
        authorization denial at export time, not a configuration error.

        Raises:
            ValueError: If values are present but invalid
        """
        for key in ('search_timeout', 'create_timeout', 'commit_timeout'):
            if key in config:
                value = config[key]
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                    raise ValueError(f"Invalid {key}: {value}. Must be a positive number of seconds")
        if 'rate_limit_retries' in config:
            retries = config['rate_limit_retries']
            if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
                raise ValueError(f"Invalid rate_limit_retries: {retries}. Must be a non-negative integer")
        api_base = config.get('api_base')
        if api_base is not None and not str(api_base).startswith(('http://', 'https://')):
            raise ValueError(f"Invalid api_base: {api_base}. Must be an http(s) URL")

    def get_default_config(self) -> Dict[str, Any]:
        """Get default Apple Music configuration."""
        return {
            'api_base': API_BASE,
            'user_token': None,
            'search_timeout': 15,
            'create_timeout': 30,
            'commit_timeout': 30,
            'rate_limit_retries': 0,
        }

    def get_link_generator(self, storefront: str | None = None) -> ProviderLinkGenerator:
        return AppleMusicLinkGenerator(storefront)  # type: ignore[return-value]


__all__ = ["AppleMusicProvider", "AppleMusicCatalog", "AppleMusicLinkGenerator"]

"""YouTube provider implementation.

Complete YouTube provider that implements the Provider interface on top of
the YouTube Data API v3.
"""

from __future__ import annotations
import logging
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
from .auth import StaticCredentialProvider
from .client import API_BASE, YouTubeAPIClient
from ...errors import CommitError

logger = logging.getLogger(__name__)

PRIVACY_STATUSES = ("private", "unlisted", "public")


class YouTubeLinkGenerator:
    """Generates YouTube web URLs for videos and playlists."""

    def track_url(self, track_id: str) -> str:
        return f"https://www.youtube.com/watch?v={track_id}"

    def playlist_url(self, playlist_id: str) -> str:
        return f"https://www.youtube.com/playlist?list={playlist_id}"


class YouTubeCatalog(MusicProvider):
    """MusicProvider backed by the YouTube Data API.

    ``add_tracks`` inserts items one at a time because the API has no batch
    endpoint. The first failure stops the loop and raises ``CommitError``;
    how many items made it is recorded in ``details['applied']``.
    """

    name = "youtube"
    display_name = "YouTube"
    capabilities = ProviderCapabilities(search=True, create_playlist=True, batch_add=False)

    def __init__(self, client: YouTubeAPIClient):
        self.client = client

    def resolve(self, entry: TrackRequest, credential: Credential) -> ResolvedTrack | None:
        item = self.client.search_video(entry.search_term, credential)
        if item is None:
            return None
        return ResolvedTrack(catalog_id=str(item["id"]["videoId"]), kind=TrackKind.VIDEO)

    def create_playlist(self, name: str, credential: Credential, description: str = "") -> str:
        return self.client.insert_playlist(name, description, credential)

    def add_tracks(self, playlist_id: str, catalog_ids: Sequence[str], credential: Credential) -> int:
        applied = 0
        for video_id in catalog_ids:
            try:
                self.client.insert_playlist_item(playlist_id, video_id, credential)
            except CommitError as e:
                e.details["applied"] = applied
                logger.debug(f"Playlist item insert failed after {applied} item(s): {e}")
                raise
            applied += 1
        return applied


class YouTubeProvider(Provider):
    """YouTube provider: OAuth access token from config, region code as storefront."""

    @property
    def name(self) -> str:
        return "youtube"

    def create_music_provider(self, config: Dict[str, Any]) -> MusicProvider:
        client = YouTubeAPIClient(
            api_base=config.get('api_base') or API_BASE,
            privacy_status=config.get('privacy_status', 'private'),
            search_timeout=config.get('search_timeout', 15),
            create_timeout=config.get('create_timeout', 30),
            commit_timeout=config.get('commit_timeout', 30),
            rate_limit_retries=config.get('rate_limit_retries', 0),
        )
        return YouTubeCatalog(client)

    def create_credential_provider(self, config: Dict[str, Any], backend_config: Dict[str, Any]) -> CredentialProvider:
        """The access token doubles as the service credential; the backend is not involved."""
        return StaticCredentialProvider(config.get('access_token'), region_code=config.get('region_code', 'US'))

    def create_authorizer(self, config: Dict[str, Any]) -> Authorizer:
        return UserTokenAuthorizer(config.get('access_token'))

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate YouTube configuration.

        Raises:
            ValueError: If values are present but invalid
        """
        privacy = config.get('privacy_status')
        if privacy is not None and privacy not in PRIVACY_STATUSES:
            raise ValueError(f"Invalid privacy_status: {privacy}. Must be one of {', '.join(PRIVACY_STATUSES)}")
        region = config.get('region_code')
        if region is not None and (not isinstance(region, str) or len(region) != 2):
            raise ValueError(f"Invalid region_code: {region}. Must be a two-letter country code")
        for key in ('search_timeout', 'create_timeout', 'commit_timeout'):
            if key in config:
                value = config[key]
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                    raise ValueError(f"Invalid {key}: {value}. Must be a positive number of seconds")
        if 'rate_limit_retries' in config:
            retries = config['rate_limit_retries']
            if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
                raise ValueError(f"Invalid rate_limit_retries: {retries}. Must be a non-negative integer")

    def get_default_config(self) -> Dict[str, Any]:
        return {
            'api_base': API_BASE,
            'access_token': None,
            'region_code': 'US',
            'privacy_status': 'private',
            'search_timeout': 15,
            'create_timeout': 30,
            'commit_timeout': 30,
            'rate_limit_retries': 0,
        }

    def get_link_generator(self, storefront: str | None = None) -> ProviderLinkGenerator:
        return YouTubeLinkGenerator()  # type: ignore[return-value]


__all__ = ["YouTubeProvider", "YouTubeCatalog", "YouTubeLinkGenerator"]

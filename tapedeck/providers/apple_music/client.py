"""Apple Music API client.

Handles the HTTP requests to the Apple Music REST API used by the export
pipeline: catalog song search, library playlist creation and batch add.

Every call takes the per-export ``Credential`` (developer token + storefront).
Library writes additionally carry the user's Music-User-Token.
"""

from __future__ import annotations
import requests
from typing import Dict, Any, Sequence
import logging

from ..base import Credential
from ..http import is_success, json_body, search_error, search_retrying
from ...errors import CommitError, CreateError, TransientSearchError

logger = logging.getLogger(__name__)
API_BASE = "https://api.music.apple.com/v1"


def _song_items(data: Dict[str, Any]) -> list | None:
    """``results.songs.data`` of a search body; None when the shape is wrong."""
    results = data.get("results") or {}
    if not isinstance(results, dict):
        return None
    songs = results.get("songs") or {}
    if not isinstance(songs, dict):
        return None
    items = songs.get("data") or []
    return items if isinstance(items, list) else None


class AppleMusicAPIClient:
    """Apple Music REST client.

    Provides catalog search (read) and library playlist writes.
    """

    def __init__(
        self,
        api_base: str = API_BASE,
        user_token: str | None = None,
        search_timeout: float = 15,
        create_timeout: float = 30,
        commit_timeout: float = 30,
        rate_limit_retries: int = 0,
    ):
        self.api_base = api_base.rstrip("/")
        self.user_token = user_token
        self.search_timeout = search_timeout
        self.create_timeout = create_timeout
        self.commit_timeout = commit_timeout
        self.rate_limit_retries = rate_limit_retries

    def _headers(self, credential: Credential, library: bool = False) -> Dict[str, str]:
        """Build authorization headers for API requests."""
        headers = {"Authorization": f"Bearer {credential.service_token}"}
        if library and self.user_token:
            headers["Music-User-Token"] = self.user_token
        return headers

    # ---------------- Catalog search -----------------

    def search_song(self, term: str, credential: Credential) -> Dict[str, Any] | None:
        """Return the top catalog song for a free-text term, or None.

        Raises:
            TransientSearchError: Network error, timeout, 429, 5xx, malformed body
            AuthError: 401/403
        """
        retrying = search_retrying(self.rate_limit_retries)
        return retrying(self._search_once, term, credential)

    def _search_once(self, term: str, credential: Credential) -> Dict[str, Any] | None:
        url = f"{self.api_base}/catalog/{credential.storefront}/search"
        params = {"term": term, "limit": 1, "types": "songs"}
        try:
            r = requests.get(url, headers=self._headers(credential), params=params, timeout=self.search_timeout)
        except requests.Timeout as e:
            raise TransientSearchError(
                f"Catalog search timed out after {self.search_timeout}s",
                details={"term": term, "original_error": str(e)},
            ) from e
        except requests.RequestException as e:
            raise TransientSearchError(
                "Catalog search failed: network error",
                details={"term": term, "original_error": str(e)},
            ) from e
        if not is_success(r):
            raise search_error(r, term)
        try:
            data = json_body(r)
        except ValueError as e:
            raise TransientSearchError(
                "Catalog search returned an unreadable response",
                details={"term": term, "original_error": str(e)},
            ) from e
        songs = _song_items(data)
        if songs is None:
            raise TransientSearchError(
                "Catalog search returned an unexpected response",
                details={"term": term, "keys": sorted(data.keys())},
            )
        if not songs:
            return None
        first = songs[0]
        if not isinstance(first, dict) or not first.get("id"):
            raise TransientSearchError(
                "Catalog search returned a song without an id",
                details={"term": term},
            )
        return first

    # ---------------- Library writes -----------------

    def create_library_playlist(self, name: str, description: str, credential: Credential) -> str:
        """Create an empty library playlist and return its id.

        Raises:
            CreateError: On network failure, non-2xx, or a body without an id
        """
        body = {"attributes": {"name": name, "description": description}}
        try:
            r = requests.post(
                f"{self.api_base}/me/library/playlists",
                headers=self._headers(credential, library=True),
                json=body,
                timeout=self.create_timeout,
            )
        except requests.RequestException as e:
            raise CreateError(
                f"Could not create playlist '{name}': network error",
                details={"original_error": str(e)},
            ) from e
        if not is_success(r):
            raise CreateError(
                f"Could not create playlist '{name}' (HTTP {r.status_code})",
                details={"status_code": r.status_code},
            )
        try:
            data = json_body(r).get("data") or []
        except ValueError as e:
            raise CreateError(
                f"Could not create playlist '{name}': unreadable response",
                details={"original_error": str(e)},
            ) from e
        playlist_id = None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            playlist_id = data[0].get("id")
        if not playlist_id or not isinstance(playlist_id, str):
            raise CreateError(f"Could not create playlist '{name}': response carried no playlist id")
        logger.debug(f"Created library playlist {playlist_id} name='{name}'")
        return playlist_id

    def add_library_playlist_tracks(self, playlist_id: str, song_ids: Sequence[str], credential: Credential) -> None:
        """Add songs to a library playlist in a single request.

        Raises:
            CommitError: On network failure or non-2xx
        """
        body = {"data": [{"id": sid, "type": "songs"} for sid in song_ids]}
        details: Dict[str, Any] = {"playlist_id": playlist_id, "submitted": len(song_ids)}
        try:
            r = requests.post(
                f"{self.api_base}/me/library/playlists/{playlist_id}/tracks",
                headers=self._headers(credential, library=True),
                json=body,
                timeout=self.commit_timeout,
            )
        except requests.RequestException as e:
            raise CommitError(
                "Could not add tracks to the playlist: network error",
                details={**details, "original_error": str(e)},
            ) from e
        if not is_success(r):
            raise CommitError(
                f"Could not add tracks to the playlist (HTTP {r.status_code})",
                details={**details, "status_code": r.status_code},
            )
        logger.debug(f"Added {len(song_ids)} songs to library playlist {playlist_id}")


__all__ = ["AppleMusicAPIClient", "API_BASE"]

"""YouTube Data API v3 client.

Covers the three calls the export pipeline needs: video search, playlist
insert and playlist item insert. The API has no batch insert for playlist
items, so adding tracks is one request per video.
"""

from __future__ import annotations
import requests
from typing import Dict, Any
import logging

from ..base import Credential
from ..http import is_success, json_body, search_error, search_retrying
from ...errors import CommitError, CreateError, TransientSearchError

logger = logging.getLogger(__name__)
API_BASE = "https://www.googleapis.com/youtube/v3"

# YouTube video category "Music"
MUSIC_CATEGORY_ID = "10"


class YouTubeAPIClient:
    """YouTube Data API client authenticated with a user OAuth access token."""

    def __init__(
        self,
        api_base: str = API_BASE,
        privacy_status: str = "private",
        search_timeout: float = 15,
        create_timeout: float = 30,
        commit_timeout: float = 30,
        rate_limit_retries: int = 0,
    ):
        self.api_base = api_base.rstrip("/")
        self.privacy_status = privacy_status
        self.search_timeout = search_timeout
        self.create_timeout = create_timeout
        self.commit_timeout = commit_timeout
        self.rate_limit_retries = rate_limit_retries

    def _headers(self, credential: Credential) -> Dict[str, str]:
        return {"Authorization": f"Bearer {credential.service_token}"}

    def search_video(self, term: str, credential: Credential) -> Dict[str, Any] | None:
        """Return the top music video search item for a term, or None.

        Raises:
            TransientSearchError: Network error, timeout, 429, 5xx, malformed body
            AuthError: 401/403
        """
        retrying = search_retrying(self.rate_limit_retries)
        return retrying(self._search_once, term, credential)

    def _search_once(self, term: str, credential: Credential) -> Dict[str, Any] | None:
        params = {
            "part": "snippet",
            "q": term,
            "type": "video",
            "videoCategoryId": MUSIC_CATEGORY_ID,
            "maxResults": 1,
            "regionCode": credential.storefront,
        }
        try:
            r = requests.get(
                f"{self.api_base}/search", headers=self._headers(credential), params=params, timeout=self.search_timeout
            )
        except requests.Timeout as e:
            raise TransientSearchError(
                f"Video search timed out after {self.search_timeout}s",
                details={"term": term, "original_error": str(e)},
            ) from e
        except requests.RequestException as e:
            raise TransientSearchError(
                "Video search failed: network error",
                details={"term": term, "original_error": str(e)},
            ) from e
        if not is_success(r):
            raise search_error(r, term)
        try:
            items = json_body(r).get("items") or []
        except ValueError as e:
            raise TransientSearchError(
                "Video search returned an unreadable response",
                details={"term": term, "original_error": str(e)},
            ) from e
        if not isinstance(items, list):
            raise TransientSearchError(
                "Video search returned an unexpected response",
                details={"term": term, "items_type": type(items).__name__},
            )
        for item in items[:1]:
            if not isinstance(item, dict) or not isinstance(item.get("id"), dict):
                raise TransientSearchError(
                    "Video search returned a malformed item",
                    details={"term": term},
                )
            if item["id"].get("videoId"):
                return item
        return None

    def insert_playlist(self, title: str, description: str, credential: Credential) -> str:
        """Create a playlist on the authorized channel and return its id.

        Raises:
            CreateError: On network failure, non-2xx, or a body without an id
        """
        body = {
            "snippet": {"title": title, "description": description},
            "status": {"privacyStatus": self.privacy_status},
        }
        try:
            r = requests.post(
                f"{self.api_base}/playlists",
                headers=self._headers(credential),
                params={"part": "snippet,status"},
                json=body,
                timeout=self.create_timeout,
            )
        except requests.RequestException as e:
            raise CreateError(
                f"Could not create playlist '{title}': network error",
                details={"original_error": str(e)},
            ) from e
        if not is_success(r):
            raise CreateError(
                f"Could not create playlist '{title}' (HTTP {r.status_code})",
                details={"status_code": r.status_code},
            )
        try:
            playlist_id = json_body(r).get("id")
        except ValueError as e:
            raise CreateError(
                f"Could not create playlist '{title}': unreadable response",
                details={"original_error": str(e)},
            ) from e
        if not playlist_id or not isinstance(playlist_id, str):
            raise CreateError(f"Could not create playlist '{title}': response carried no playlist id")
        logger.debug(f"Created YouTube playlist {playlist_id} title='{title}'")
        return playlist_id

    def insert_playlist_item(self, playlist_id: str, video_id: str, credential: Credential) -> None:
        """Append one video to a playlist.

        Raises:
            CommitError: On network failure or non-2xx
        """
        body = {
            "snippet": {
                "playlistId": playlist_id,
                "resourceId": {"kind": "youtube#video", "videoId": video_id},
            }
        }
        details: Dict[str, Any] = {"playlist_id": playlist_id, "video_id": video_id}
        try:
            r = requests.post(
                f"{self.api_base}/playlistItems",
                headers=self._headers(credential),
                params={"part": "snippet"},
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


__all__ = ["YouTubeAPIClient", "API_BASE", "MUSIC_CATEGORY_ID"]

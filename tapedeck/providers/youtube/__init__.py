"""YouTube provider package.

- auth.py: access-token credential source
- client.py: YouTube Data API v3 client (search, playlists, playlistItems)
- provider.py: Complete YouTube provider implementation
"""

from .auth import StaticCredentialProvider
from .client import YouTubeAPIClient
from .provider import YouTubeProvider, YouTubeCatalog, YouTubeLinkGenerator

__all__ = [
    "StaticCredentialProvider",
    "YouTubeAPIClient",
    "YouTubeProvider",
    "YouTubeCatalog",
    "YouTubeLinkGenerator",
]

"""Apple Music provider package.

This package contains all Apple Music-specific logic:
- auth.py: developer token retrieval from the TapeDeck backend
- client.py: REST client for catalog search and library playlist writes
- provider.py: Complete Apple Music provider implementation

Other parts of the codebase should use the Provider interface from
tapedeck.providers.base instead of direct imports.
"""

from .auth import DevTokenProvider
from .client import AppleMusicAPIClient
from .provider import AppleMusicProvider, AppleMusicCatalog, AppleMusicLinkGenerator

__all__ = [
    "DevTokenProvider",
    "AppleMusicAPIClient",
    "AppleMusicProvider",
    "AppleMusicCatalog",
    "AppleMusicLinkGenerator",
]

"""Typed configuration dataclasses for tapedeck-export.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any


def _known(cls, data: Dict[str, Any] | None) -> Dict[str, Any]:
    """Keep only keys the dataclass declares (env vars may add stray keys)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass
class BackendConfig:
    """TapeDeck backend (developer token issuer)."""
    base_url: str = "https://timedeck-api.onrender.com"
    timeout_seconds: float = 15

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppleMusicConfig:
    """Apple Music REST API configuration."""
    api_base: str = "https://api.music.apple.com/v1"
    user_token: str | None = None  # Music-User-Token granted by the user
    search_timeout: float = 15
    create_timeout: float = 30
    commit_timeout: float = 30
    rate_limit_retries: int = 0  # extra attempts on HTTP 429 during search

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class YouTubeConfig:
    """YouTube Data API configuration."""
    api_base: str = "https://www.googleapis.com/youtube/v3"
    access_token: str | None = None  # user OAuth access token
    region_code: str = "US"
    privacy_status: str = "private"
    search_timeout: float = 15
    create_timeout: float = 30
    commit_timeout: float = 30
    rate_limit_retries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProvidersConfig:
    """Configuration for all providers."""
    apple_music: AppleMusicConfig = field(default_factory=AppleMusicConfig)
    youtube: YouTubeConfig = field(default_factory=YouTubeConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {"apple_music": self.apple_music.to_dict(), "youtube": self.youtube.to_dict()}


@dataclass
class ExportConfig:
    """Export pipeline configuration."""
    pacing_seconds: float = 0.2  # fixed pause between catalog searches
    description: str = "Created with TapeDeck"
    progress_interval: int = 10  # log resolution progress every N entries

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    provider: str = "apple_music"
    backend: BackendConfig = field(default_factory=BackendConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary.

        Returns:
            Nested dict structure matching config format
        """
        return {
            "log_level": self.log_level,
            "provider": self.provider,
            "backend": self.backend.to_dict(),
            "providers": self.providers.to_dict(),
            "export": self.export.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        providers_data = data.get("providers", {})
        return cls(
            log_level=data.get("log_level", "INFO"),
            provider=data.get("provider", "apple_music"),
            backend=BackendConfig(**_known(BackendConfig, data.get("backend"))),
            providers=ProvidersConfig(
                apple_music=AppleMusicConfig(**_known(AppleMusicConfig, providers_data.get("apple_music"))),
                youtube=YouTubeConfig(**_known(YouTubeConfig, providers_data.get("youtube"))),
            ),
            export=ExportConfig(**_known(ExportConfig, data.get("export"))),
        )


__all__ = [
    "BackendConfig",
    "AppleMusicConfig",
    "YouTubeConfig",
    "ProvidersConfig",
    "ExportConfig",
    "AppConfig",
]

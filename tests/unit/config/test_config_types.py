"""Unit tests for typed configuration dataclasses."""

from tapedeck.config_types import (
    AppConfig,
    AppleMusicConfig,
    BackendConfig,
    ExportConfig,
    ProvidersConfig,
    YouTubeConfig,
)


def test_backend_config_defaults():
    """Test BackendConfig default values."""
    config = BackendConfig()

    assert config.base_url == "https://timedeck-api.onrender.com"
    assert config.timeout_seconds == 15


def test_apple_music_config_defaults():
    config = AppleMusicConfig()

    assert config.api_base == "https://api.music.apple.com/v1"
    assert config.user_token is None
    assert config.rate_limit_retries == 0


def test_youtube_config_defaults():
    config = YouTubeConfig()

    assert config.region_code == "US"
    assert config.privacy_status == "private"
    assert config.access_token is None


def test_export_config_to_dict():
    """Test ExportConfig.to_dict() serialization."""
    data = ExportConfig(pacing_seconds=0.5).to_dict()

    assert data == {"pacing_seconds": 0.5, "description": "Created with TapeDeck", "progress_interval": 10}


def test_providers_config_to_dict():
    data = ProvidersConfig().to_dict()

    assert set(data) == {"apple_music", "youtube"}
    assert data["youtube"]["privacy_status"] == "private"


def test_app_config_round_trip(test_config):
    """from_dict(...).to_dict() keeps every known value."""
    config = AppConfig.from_dict(test_config)

    assert config.provider == "apple_music"
    assert config.providers.apple_music.user_token == "user-token-xyz"
    assert config.providers.youtube.region_code == "GB"
    assert config.export.pacing_seconds == 0.0
    assert config.to_dict() == test_config


def test_app_config_from_partial_dict():
    config = AppConfig.from_dict({"provider": "youtube", "export": {"description": "mine"}})

    assert config.provider == "youtube"
    assert config.export.description == "mine"
    assert config.export.pacing_seconds == 0.2
    assert config.backend == BackendConfig()


def test_app_config_ignores_unknown_keys():
    """Stray TAPEDECK__* variables must not break typed loading."""
    config = AppConfig.from_dict({
        "backend": {"base_url": "https://b.example.test", "colour": "red"},
        "providers": {"apple_music": {"user_token": "t", "legacy_flag": True}},
    })

    assert config.backend.base_url == "https://b.example.test"
    assert config.providers.apple_music.user_token == "t"

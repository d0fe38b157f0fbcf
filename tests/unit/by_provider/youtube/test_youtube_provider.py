"""Unit tests for YouTubeProvider factory and catalog adapter."""

from unittest.mock import MagicMock

import pytest

from tapedeck.errors import AuthBackendError, CommitError
from tapedeck.providers import get_provider_instance
from tapedeck.providers.base import AuthorizationState, Credential, TrackKind, TrackRequest
from tapedeck.providers.youtube import YouTubeCatalog, YouTubeLinkGenerator, YouTubeProvider
from tapedeck.providers.youtube.auth import StaticCredentialProvider
from tapedeck.providers.youtube.client import YouTubeAPIClient

CRED = Credential(service_token="ya29", storefront="US")


def test_registered_under_name():
    assert isinstance(get_provider_instance("youtube"), YouTubeProvider)


def test_create_music_provider():
    music = YouTubeProvider().create_music_provider({"privacy_status": "public"})
    assert isinstance(music, YouTubeCatalog)
    assert music.capabilities.batch_add is False
    assert music.client.privacy_status == "public"


def test_credentials_from_access_token():
    credentials = YouTubeProvider().create_credential_provider({"access_token": "ya29", "region_code": "DE"}, {})
    credential = credentials.get_credential()
    assert credential.service_token == "ya29"
    assert credential.storefront == "DE"


def test_missing_access_token():
    with pytest.raises(AuthBackendError):
        StaticCredentialProvider(None).get_credential()
    authorizer = YouTubeProvider().create_authorizer({})
    assert authorizer.request_authorization() is AuthorizationState.DENIED


@pytest.mark.parametrize("config", [
    {"privacy_status": "friends"},
    {"region_code": "USA"},
    {"search_timeout": 0},
    {"rate_limit_retries": True},
])
def test_validate_config_rejects(config):
    with pytest.raises(ValueError):
        YouTubeProvider().validate_config(config)


def test_validate_config_accepts_defaults():
    provider = YouTubeProvider()
    provider.validate_config(provider.get_default_config())


def test_resolve_returns_video():
    client = MagicMock(spec=YouTubeAPIClient)
    client.search_video.return_value = {"id": {"videoId": "abc"}}
    hit = YouTubeCatalog(client).resolve(TrackRequest(artist="a-ha", title="Take On Me"), CRED)
    client.search_video.assert_called_once_with("a-ha Take On Me", CRED)
    assert hit.catalog_id == "abc"
    assert hit.kind is TrackKind.VIDEO


def test_add_tracks_one_insert_per_video():
    client = MagicMock(spec=YouTubeAPIClient)
    added = YouTubeCatalog(client).add_tracks("PL1", ["v1", "v2", "v3"], CRED)
    assert added == 3
    assert [c.args[1] for c in client.insert_playlist_item.call_args_list] == ["v1", "v2", "v3"]


def test_add_tracks_records_applied_on_failure():
    client = MagicMock(spec=YouTubeAPIClient)
    client.insert_playlist_item.side_effect = [None, CommitError("Could not add tracks to the playlist (HTTP 500)"), None]
    with pytest.raises(CommitError) as exc:
        YouTubeCatalog(client).add_tracks("PL1", ["v1", "v2", "v3"], CRED)
    assert exc.value.details["applied"] == 1
    assert client.insert_playlist_item.call_count == 2


def test_link_generator():
    links = YouTubeLinkGenerator()
    assert links.track_url("abc") == "https://www.youtube.com/watch?v=abc"
    assert links.playlist_url("PL1") == "https://www.youtube.com/playlist?list=PL1"

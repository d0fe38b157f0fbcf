"""Unit tests for the YouTube Data API client (HTTP patched)."""

from unittest.mock import patch

import pytest
import requests

from tapedeck.errors import AuthError, CommitError, CreateError, RateLimitedError, TransientSearchError
from tapedeck.providers.base import Credential
from tapedeck.providers.youtube.client import MUSIC_CATEGORY_ID, YouTubeAPIClient

from mocks.responses import make_response

CRED = Credential(service_token="ya29.token", storefront="GB")
GET = 'tapedeck.providers.youtube.client.requests.get'
POST = 'tapedeck.providers.youtube.client.requests.post'

@pytest.fixture
def client():
    return YouTubeAPIClient(api_base="https://yt.example.test/youtube/v3", privacy_status="unlisted")

def test_search_request_shape(client):
    body = {"items": [{"id": {"kind": "youtube#video", "videoId": "fJ9rUzIMcZQ"}}]}
    with patch(GET, return_value=make_response(200, body)) as get:
        item = client.search_video("Queen Bohemian Rhapsody", CRED)

    assert item["id"]["videoId"] == "fJ9rUzIMcZQ"
    args, kwargs = get.call_args
    assert args[0] == "https://yt.example.test/youtube/v3/search"
    assert kwargs["params"]["q"] == "Queen Bohemian Rhapsody"
    assert kwargs["params"]["videoCategoryId"] == MUSIC_CATEGORY_ID
    assert kwargs["params"]["regionCode"] == "GB"
    assert kwargs["params"]["maxResults"] == 1
    assert kwargs["headers"] == {"Authorization": "Bearer ya29.token"}

@pytest.mark.parametrize("body", [{}, {"items": []}, {"items": [{"id": {"kind": "youtube#channel"}}]}])
def test_search_without_video_is_none(client, body):
    with patch(GET, return_value=make_response(200, body)):
        assert client.search_video("x", CRED) is None

def test_search_auth_rejection(client):
    with patch(GET, return_value=make_response(401)):
        with pytest.raises(AuthError):
            client.search_video("x", CRED)

def test_search_network_error_is_transient(client):
    with patch(GET, side_effect=requests.ConnectionError("down")):
        with pytest.raises(TransientSearchError):
            client.search_video("x", CRED)

def test_search_timeout_is_transient(client):
    with patch(GET, side_effect=requests.Timeout("read timed out")):
        with pytest.raises(TransientSearchError, match="timed out"):
            client.search_video("x", CRED)

def test_search_rate_limited(client):
    with patch(GET, return_value=make_response(429, headers={"Retry-After": "3"})) as get:
        with pytest.raises(RateLimitedError) as exc:
            client.search_video("x", CRED)
    assert get.call_count == 1
    assert exc.value.retry_after == 3.0
    assert not exc.value.fatal

@pytest.mark.parametrize("status", [400, 500, 503])
def test_search_other_status_is_transient(client, status):
    with patch(GET, return_value=make_response(status)):
        with pytest.raises(TransientSearchError) as exc:
            client.search_video("x", CRED)
    assert exc.value.details["status_code"] == status

def test_search_unreadable_body_is_transient(client):
    with patch(GET, return_value=make_response(200, raw=b"<html>")):
        with pytest.raises(TransientSearchError, match="unreadable"):
            client.search_video("x", CRED)

@pytest.mark.parametrize("body", [
    {"items": {"a": 1}},
    {"items": "abc"},
    {"items": ["x"]},
    {"items": [{"id": "fJ9rUzIMcZQ"}]},
])
def test_search_malformed_body_is_transient(client, body):
    with patch(GET, return_value=make_response(200, body)):
        with pytest.raises(TransientSearchError):
            client.search_video("x", CRED)


def test_insert_playlist(client):
    with patch(POST, return_value=make_response(200, {"id": "PL123"})) as post:
        playlist_id = client.insert_playlist("Radio 1987", "desc", CRED)

    assert playlist_id == "PL123"
    args, kwargs = post.call_args
    assert args[0] == "https://yt.example.test/youtube/v3/playlists"
    assert kwargs["params"] == {"part": "snippet,status"}
    assert kwargs["json"]["status"] == {"privacyStatus": "unlisted"}
    assert kwargs["json"]["snippet"] == {"title": "Radio 1987", "description": "desc"}

@pytest.mark.parametrize("body", [{}, {"id": {"playlistId": "PL1"}}, {"id": 7}])
def test_insert_playlist_without_id(client, body):
    with patch(POST, return_value=make_response(200, body)):
        with pytest.raises(CreateError, match="no playlist id"):
            client.insert_playlist("X", "", CRED)

def test_insert_playlist_item(client):
    with patch(POST, return_value=make_response(200, {"id": "item"})) as post:
        client.insert_playlist_item("PL123", "vid1", CRED)

    _, kwargs = post.call_args
    assert kwargs["json"]["snippet"] == {
        "playlistId": "PL123",
        "resourceId": {"kind": "youtube#video", "videoId": "vid1"},
    }

def test_insert_playlist_item_failure(client):
    with patch(POST, return_value=make_response(409)):
        with pytest.raises(CommitError) as exc:
            client.insert_playlist_item("PL123", "vid1", CRED)
    assert exc.value.details["video_id"] == "vid1"

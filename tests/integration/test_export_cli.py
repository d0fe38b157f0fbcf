"""End-to-end export through the CLI with the Apple Music and YouTube HTTP layers patched."""
import json
from pathlib import Path
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from tapedeck.cli import cli
from tapedeck.cli.export_cmds import ConfirmingAuthorizer
from tapedeck.providers.base import AuthorizationState

from mocks.fake_provider import FakeAuthorizer
from mocks.responses import make_response

CATALOG = {"Queen Bohemian Rhapsody": "1440806041", "a-ha Take On Me": "1035048414"}


class FakeAppleMusic:
    """Routes patched requests.get/post calls by URL like the real service would."""

    def __init__(self, create_status=201, commit_status=204):
        self.create_status = create_status
        self.commit_status = commit_status
        self.searches = []
        self.posts = []

    def get(self, url, **kwargs):
        if url.endswith('/v1/apple/dev-token'):
            return make_response(200, {'token': 'dev-token', 'storefront': 'us'})
        term = kwargs['params']['term']
        self.searches.append(term)
        if term in CATALOG:
            return make_response(200, {'results': {'songs': {'data': [{'id': CATALOG[term], 'type': 'songs'}]}}})
        return make_response(200, {'results': {}})

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs['json']))
        if url.endswith('/me/library/playlists'):
            return make_response(self.create_status, {'data': [{'id': 'p.NEW'}]})
        return make_response(self.commit_status)


@pytest.fixture
def tracks_file(tmp_path: Path) -> Path:
    path = tmp_path / 'tracks.json'
    path.write_text(json.dumps({'tracks': [
        {'artist': 'Queen', 'title': 'Bohemian Rhapsody'},
        {'artist': 'Unknown', 'title': 'Nonexistent Song'},
        {'artist': 'a-ha', 'title': 'Take On Me'},
    ]}), encoding='utf-8')
    return path


def _invoke(cfg, args, service, input=None):
    with patch('requests.get', side_effect=service.get), patch('requests.post', side_effect=service.post):
        return CliRunner().invoke(cli, args, obj=cfg, input=input)


def test_export_apple_music(test_config, tracks_file):
    service = FakeAppleMusic()
    result = _invoke(test_config, ['export', 'Radio 1987', '--tracks', str(tracks_file), '--yes'], service)

    assert result.exit_code == 0, result.output
    assert service.searches == ['Queen Bohemian Rhapsody', 'Unknown Nonexistent Song', 'a-ha Take On Me']
    assert service.posts[0] == (
        'https://music.example.test/v1/me/library/playlists',
        {'attributes': {'name': 'Radio 1987', 'description': 'Created with TapeDeck'}},
    )
    assert service.posts[1][1] == {'data': [{'id': '1440806041', 'type': 'songs'}, {'id': '1035048414', 'type': 'songs'}]}
    assert "Added 2 of 3 tracks to 'Radio 1987'." in result.output
    assert 'Nonexistent Song by Unknown' in result.output
    assert 'https://music.apple.com/library/playlist/p.NEW' in result.output


def test_export_description_override(test_config, tracks_file):
    service = FakeAppleMusic()
    args = ['export', 'Mine', '--tracks', str(tracks_file), '--yes', '--description', 'Sunday drive']
    _invoke(test_config, args, service)

    assert service.posts[0][1]['attributes']['description'] == 'Sunday drive'


def test_export_declined_at_prompt(test_config, tracks_file):
    service = FakeAppleMusic()
    result = _invoke(test_config, ['export', 'Radio 1987', '--tracks', str(tracks_file)], service, input='n\n')

    assert result.exit_code == 1
    assert service.searches == []
    assert service.posts == []
    assert 'access denied' in result.output


def test_export_confirmed_at_prompt(test_config, tracks_file):
    service = FakeAppleMusic()
    result = _invoke(test_config, ['export', 'Radio 1987', '--tracks', str(tracks_file)], service, input='y\n')

    assert result.exit_code == 0, result.output
    assert len(service.posts) == 2


def test_export_without_user_token_is_denied(test_config, tracks_file):
    test_config['providers']['apple_music']['user_token'] = None
    service = FakeAppleMusic()
    result = _invoke(test_config, ['export', 'X', '--tracks', str(tracks_file), '--yes'], service)

    assert result.exit_code == 1
    assert service.searches == []


def test_export_commit_failure_reports_playlist(test_config, tracks_file):
    service = FakeAppleMusic(commit_status=500)
    result = _invoke(test_config, ['export', 'Broken', '--tracks', str(tracks_file), '--yes'], service)

    assert result.exit_code == 1
    assert "'Broken' was created but is incomplete" in result.output
    assert 'p.NEW' in result.output


def test_export_youtube(test_config, tracks_file):
    posts = []

    def get(url, **kwargs):
        term = kwargs['params']['q']
        if term in CATALOG:
            return make_response(200, {'items': [{'id': {'videoId': 'v-' + CATALOG[term]}}]})
        return make_response(200, {'items': []})

    def post(url, **kwargs):
        posts.append(url)
        if url.endswith('/playlists'):
            return make_response(200, {'id': 'PLxyz'})
        return make_response(200, {'id': 'item'})

    with patch('requests.get', side_effect=get), patch('requests.post', side_effect=post):
        result = CliRunner().invoke(
            cli, ['export', 'Tube', '--tracks', str(tracks_file), '--provider', 'youtube', '-y'], obj=test_config
        )

    assert result.exit_code == 0, result.output
    assert posts == [
        'https://yt.example.test/youtube/v3/playlists',
        'https://yt.example.test/youtube/v3/playlistItems',
        'https://yt.example.test/youtube/v3/playlistItems',
    ]
    assert 'https://www.youtube.com/playlist?list=PLxyz' in result.output


def test_export_bad_tracks_file(test_config, tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('[{"artist": "Queen"}]', encoding='utf-8')
    result = CliRunner().invoke(cli, ['export', 'X', '--tracks', str(path), '--yes'], obj=test_config)

    assert result.exit_code == 2
    assert 'Track #1' in result.output


def test_export_unknown_provider(test_config, tracks_file):
    result = CliRunner().invoke(
        cli, ['export', 'X', '--tracks', str(tracks_file), '--provider', 'tidal', '--yes'], obj=test_config
    )
    assert result.exit_code == 2
    assert "Unknown provider 'tidal'" in result.output


def test_confirming_authorizer_skips_prompt_when_provider_denies():
    inner = FakeAuthorizer(AuthorizationState.DENIED)
    with patch.object(click, 'confirm') as confirm:
        state = ConfirmingAuthorizer(inner, 'Proceed?').request_authorization()
    assert state is AuthorizationState.DENIED
    confirm.assert_not_called()


def test_confirming_authorizer_treats_abort_as_denied():
    with patch.object(click, 'confirm', side_effect=click.Abort()):
        state = ConfirmingAuthorizer(FakeAuthorizer(), 'Proceed?').request_authorization()
    assert state is AuthorizationState.DENIED


def test_export_with_closed_stdin_is_denied(test_config, tracks_file):
    service = FakeAppleMusic()
    result = _invoke(test_config, ['export', 'Radio 1987', '--tracks', str(tracks_file)], service)

    assert result.exit_code == 1
    assert service.searches == []
    assert service.posts == []
    assert 'access denied' in result.output
    assert 'Export failed: ' not in result.output

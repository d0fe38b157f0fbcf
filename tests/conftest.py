"""Pytest fixtures for test configuration.

Global test safety measures:
 - Never read a developer's .env (TAPEDECK_ENABLE_DOTENV unset)
 - Strip TAPEDECK__* variables so real tokens never reach a test
"""
import pytest
import os
from typing import Dict, Any

# Expose fake collaborators and their fixtures (fake_provider, fake_credentials, ...)
from mocks.fixtures import *  # noqa: F401,F403


def pytest_sessionstart(session):  # type: ignore[no-untyped-def]
    os.environ.pop('TAPEDECK_ENABLE_DOTENV', None)
    for key in [k for k in os.environ if k.startswith('TAPEDECK__')]:
        os.environ.pop(key, None)


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Provide a minimal test configuration as a dict.

    Tests should use this fixture and pass cfg to CLI/modules directly,
    rather than creating .env files or setting environment variables.

    Pacing is disabled and endpoints point at example hosts so nothing
    sleeps or talks to a real service.
    """
    return {
        'log_level': 'DEBUG',
        'provider': 'apple_music',
        'backend': {
            'base_url': 'https://backend.example.test',
            'timeout_seconds': 5,
        },
        'providers': {
            'apple_music': {
                'api_base': 'https://music.example.test/v1',
                'user_token': 'user-token-xyz',
                'search_timeout': 5,
                'create_timeout': 5,
                'commit_timeout': 5,
                'rate_limit_retries': 0,
            },
            'youtube': {
                'api_base': 'https://yt.example.test/youtube/v3',
                'access_token': 'yt-access-token',
                'region_code': 'GB',
                'privacy_status': 'private',
                'search_timeout': 5,
                'create_timeout': 5,
                'commit_timeout': 5,
                'rate_limit_retries': 0,
            },
        },
        'export': {
            'pacing_seconds': 0.0,
            'description': 'Created with TapeDeck',
            'progress_interval': 10,
        },
    }

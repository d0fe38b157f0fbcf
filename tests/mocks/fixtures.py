from __future__ import annotations
import pytest

from tapedeck.providers.base import TrackRequest
from tapedeck.services.export_service import ExportOrchestrator
from .fake_provider import FakeAuthorizer, FakeCredentialProvider, FakeMusicProvider, RecordingPacer


@pytest.fixture
def fake_provider():
    return FakeMusicProvider()


@pytest.fixture
def fake_credentials():
    return FakeCredentialProvider()


@pytest.fixture
def fake_authorizer():
    return FakeAuthorizer()


@pytest.fixture
def pacer():
    return RecordingPacer()


@pytest.fixture
def orchestrator(fake_provider, fake_credentials, fake_authorizer, pacer):
    return ExportOrchestrator(
        provider=fake_provider,
        credentials=fake_credentials,
        authorizer=fake_authorizer,
        pacer=pacer,
        description="test",
    )


@pytest.fixture
def sample_entries():
    return [
        TrackRequest(artist="Queen", title="Bohemian Rhapsody"),
        TrackRequest(artist="Unknown", title="Nonexistent Song"),
    ]

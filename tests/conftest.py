"""Shared fixtures: a provider that records instead of serving."""

import pytest

from bitform.testing import RecordingProvider


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def log() -> list[str]:
    return []

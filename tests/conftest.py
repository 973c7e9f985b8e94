"""Shared fixtures: provider configs and a fake OAuth 1 provider."""

import pytest

from oauth1_client.config import OAuthVersion, ProviderConfig
from tests.fakes import FakeProvider, make_config


@pytest.fixture
def config() -> ProviderConfig:
    """OAuth 1.0a provider configuration."""
    return make_config()


@pytest.fixture
def config_10() -> ProviderConfig:
    """OAuth 1.0 provider configuration."""
    return make_config(OAuthVersion.CORE_10)


@pytest.fixture
def provider() -> FakeProvider:
    """Fake OAuth 1.0a provider."""
    return FakeProvider()


@pytest.fixture
def provider_10() -> FakeProvider:
    """Fake OAuth 1.0 provider (no verifier, no callback confirmation)."""
    return FakeProvider(revision_a=False, callback_confirmed=False)

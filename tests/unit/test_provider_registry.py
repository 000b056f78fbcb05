"""Unit tests for provider registry functionality."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from docvoice.config import parse_config
from docvoice.providers import ProviderRegistry, build_providers, create_provider
from docvoice.providers.elevenlabs import ElevenLabsProvider
from docvoice.providers.google_cloud import GoogleCloudProvider
from docvoice.providers.gtts_provider import GTTSProvider


class MockProvider:
    """Mock provider class for testing registration."""

    pass


class AnotherMockProvider:
    """Another mock provider class for testing multiple registrations."""

    pass


@pytest.fixture
def clean_registry():
    """Empty the registry for a test and restore it afterwards."""
    saved = dict(ProviderRegistry._providers)
    ProviderRegistry._providers.clear()
    yield ProviderRegistry
    ProviderRegistry._providers.clear()
    ProviderRegistry._providers.update(saved)


class TestProviderRegistry:
    """Test ProviderRegistry functionality."""

    def test_register_and_get_provider(self, clean_registry) -> None:
        """Test registering and retrieving a provider."""
        clean_registry.register("test", MockProvider)

        assert clean_registry.get("test") is MockProvider
        assert clean_registry.names() == ["test"]

    def test_register_multiple_providers(self, clean_registry) -> None:
        clean_registry.register("provider1", MockProvider)
        clean_registry.register("provider2", AnotherMockProvider)

        assert clean_registry.get("provider1") is MockProvider
        assert clean_registry.get("provider2") is AnotherMockProvider

    def test_register_overwrites_existing(self, clean_registry) -> None:
        clean_registry.register("test", MockProvider)
        clean_registry.register("test", AnotherMockProvider)

        assert clean_registry.get("test") is AnotherMockProvider

    def test_get_unknown_provider_lists_available(self, clean_registry) -> None:
        clean_registry.register("known", MockProvider)

        with pytest.raises(KeyError, match="Available providers: known"):
            clean_registry.get("unknown")

    def test_get_from_empty_registry(self, clean_registry) -> None:
        with pytest.raises(KeyError, match="Available providers: none"):
            clean_registry.get("anything")

    def test_builtin_providers_registered(self) -> None:
        assert ProviderRegistry.get("google") is GoogleCloudProvider
        assert ProviderRegistry.get("gtts") is GTTSProvider
        assert ProviderRegistry.get("elevenlabs") is ElevenLabsProvider


class TestBuildProviders:
    """Test provider construction from configuration."""

    def test_default_order_is_google_then_gtts(self) -> None:
        providers = build_providers(parse_config({}))

        assert [p.name for p in providers] == ["google", "gtts"]
        assert isinstance(providers[0], GoogleCloudProvider)
        assert isinstance(providers[1], GTTSProvider)

    def test_configured_order(self) -> None:
        config = parse_config({"synthesis": {"providers": ["gtts", "elevenlabs"]}})

        assert [p.name for p in build_providers(config)] == ["gtts", "elevenlabs"]

    def test_create_provider_passes_timeout(self) -> None:
        config = parse_config({"synthesis": {"timeout": 7.5}})

        provider = create_provider("gtts", config)

        assert provider._timeout == 7.5
        assert provider._config is config.gtts

    def test_unknown_provider_name_raises(self) -> None:
        config = parse_config({"synthesis": {"providers": ["google", "festival"]}})

        with pytest.raises(KeyError, match="festival"):
            build_providers(config)

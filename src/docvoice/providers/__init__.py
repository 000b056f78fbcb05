"""Provider abstraction for text-to-speech services.

This module provides a registry pattern for managing TTS providers,
allowing the provider chain to be assembled from configured names.
"""

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ..config import DocvoiceConfig
    from .base import TTSProvider

from .elevenlabs import ElevenLabsProvider
from .google_cloud import GoogleCloudProvider
from .gtts_provider import GTTSProvider

__all__ = ["ProviderRegistry", "build_providers"]


class ProviderRegistry:
    """Registry for managing TTS providers.

    This class maintains a registry of available TTS providers,
    allowing registration and retrieval by name.
    """

    _providers: ClassVar[dict[str, type["TTSProvider"]]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type["TTSProvider"]) -> None:
        """Register a TTS provider.

        Args:
            name: Name to register the provider under
            provider_class: Provider class that implements TTSProvider
        """
        cls._providers[name] = provider_class

    @classmethod
    def get(cls, name: str) -> type["TTSProvider"]:
        """Get a provider class by name.

        Args:
            name: Name of the provider to retrieve

        Returns:
            Provider class

        Raises:
            KeyError: If provider name not found
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) if cls._providers else "none"
            raise KeyError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return cls._providers[name]

    @classmethod
    def names(cls) -> list[str]:
        return list(cls._providers)


def create_provider(name: str, config: "DocvoiceConfig") -> "TTSProvider":
    """Instantiate a registered provider with its config section.

    Raises:
        KeyError: If provider name not found
    """
    provider_class = ProviderRegistry.get(name)
    timeout = config.synthesis.timeout
    if provider_class is GoogleCloudProvider:
        return GoogleCloudProvider(config=config.google, timeout=timeout)
    if provider_class is GTTSProvider:
        return GTTSProvider(config=config.gtts, timeout=timeout)
    if provider_class is ElevenLabsProvider:
        return ElevenLabsProvider(config=config.elevenlabs, timeout=timeout)
    return provider_class()


def build_providers(config: "DocvoiceConfig") -> list["TTSProvider"]:
    """Instantiate the providers named in synthesis.providers, in order."""
    return [create_provider(name, config) for name in config.synthesis.providers]


# Register providers
ProviderRegistry.register("google", GoogleCloudProvider)
ProviderRegistry.register("elevenlabs", ElevenLabsProvider)
ProviderRegistry.register("gtts", GTTSProvider)

"""Abstract base class for text-to-speech providers.

This module defines the interface that all TTS providers must implement,
ensuring consistent behavior across different TTS backends.
"""

from abc import ABC, abstractmethod

from ..tts.models import VoiceInfo, VoiceSpec


class TTSProvider(ABC):
    """Abstract base class for text-to-speech providers.

    All TTS providers must inherit from this class and implement
    the required methods for synthesizing speech and listing voices.

    Providers receive text that has already been prepared (stripped and
    truncated) and must not shorten it further, since the cached audio is
    keyed by that exact text.
    """

    name: str = "base"

    def is_available(self) -> bool:
        """Whether the provider has the credentials/config it needs.

        Providers that report False are skipped by the chain without being
        called. Defaults to True for providers that need nothing.
        """
        return True

    @abstractmethod
    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        """Convert text to audio bytes.

        Args:
            text: The prepared text to convert to speech
            voice: Resolved voice spec to map onto the provider's voices

        Returns:
            Encoded audio data as bytes

        Raises:
            TTSError: If synthesis fails
        """
        pass

    @abstractmethod
    async def list_voices(self) -> list[VoiceInfo]:
        """Return the voices this provider maps voice specs onto."""
        pass

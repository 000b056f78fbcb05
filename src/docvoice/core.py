"""Core functionality for docvoice - process-wide engine entry points."""

import logging

from .config import load_config
from .providers import ProviderRegistry, create_provider
from .tts.errors import TTSError
from .tts.models import VoiceInfo, VoiceStyle, VoiceType
from .tts.pipeline import SpeechPipeline

logger = logging.getLogger(__name__)

_default_pipeline: SpeechPipeline | None = None


def get_pipeline() -> SpeechPipeline:
    """Return the shared pipeline, creating it from config on first use."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = SpeechPipeline(config=load_config())
    return _default_pipeline


def set_pipeline(pipeline: SpeechPipeline | None) -> None:
    """Replace the shared pipeline (None resets it to config defaults)."""
    global _default_pipeline
    _default_pipeline = pipeline


async def synthesize_speech(
    text: str,
    voice_type: str | VoiceType | None = None,
    style: str | VoiceStyle | None = None,
    description: str | None = None,
    language: str | None = None,
) -> bytes:
    """Convert text to speech, reusing cached audio when possible.

    Args:
        text: Text to speak
        voice_type: "feminine" or "masculine" (default feminine)
        style: Optional "professorial", "podcast" or "bedtime-story"
        description: Optional free-text voice description
        language: Language tag (default "es")

    Returns:
        Encoded audio bytes

    Raises:
        ValueError: If text is empty
        SynthesisChainError: If no provider could synthesize the text
        AudioStoreError: If the cache could not read or persist audio
    """
    return await get_pipeline().synthesize(
        text,
        voice_type=voice_type,
        style=style,
        description=description,
        language=language,
    )


def invalidate_for_document(document_text: str) -> int:
    """Remove cached audio for a document. Returns the number removed."""
    return get_pipeline().invalidate_for_document(document_text)


async def list_available_voices(provider: str = "google") -> list[VoiceInfo]:
    """List the voices a provider maps voice specs onto.

    Args:
        provider: Provider name to list voices from

    Raises:
        KeyError: If provider not found
        TTSError: If listing fails
    """
    ProviderRegistry.get(provider)
    provider_instance = create_provider(provider, load_config())
    try:
        return await provider_instance.list_voices()
    except TTSError:
        raise
    except Exception as e:
        raise TTSError(f"Failed to list voices: {e}", e) from e

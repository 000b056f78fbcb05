"""TTS (Text-to-Speech) package for docvoice.

This package holds the voice models, the error hierarchy and the
cache-then-synthesize pipeline built on the provider chain.
"""

from .errors import (
    AudioStoreError,
    SynthesisChainError,
    TTSAPIError,
    TTSAuthError,
    TTSError,
    TTSTimeoutError,
    TTSUnsupportedVoiceError,
)
from .models import SpeechResult, VoiceSpec, VoiceStyle, VoiceType

__all__ = [
    "AudioStoreError",
    "SpeechResult",
    "SynthesisChainError",
    "TTSAPIError",
    "TTSAuthError",
    "TTSError",
    "TTSTimeoutError",
    "TTSUnsupportedVoiceError",
    "VoiceSpec",
    "VoiceStyle",
    "VoiceType",
]

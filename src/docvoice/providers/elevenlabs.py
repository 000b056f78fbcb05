"""ElevenLabs text-to-speech provider implementation."""

import asyncio
import os

from elevenlabs.client import ElevenLabs

from ..config import ElevenLabsConfig, load_config
from ..tts.errors import TTSAPIError, TTSAuthError
from ..tts.models import VoiceInfo, VoiceSettings, VoiceSpec, VoiceStyle, VoiceType
from .base import TTSProvider

# Premade voices, keyed by style-or-type
VOICE_IDS = {
    VoiceType.FEMININE.value: ("21m00Tcm4TlvDq8ikWAM", "Rachel"),
    VoiceType.MASCULINE.value: ("pNInz6obpgDQGcFmaJgB", "Adam"),
    VoiceStyle.PROFESSORIAL.value: ("onwK4e9ZLuTAKqWW03F9", "Daniel"),
    VoiceStyle.PODCAST.value: ("IKne3meq5aSn9XLyUdCD", "Charlie"),
    VoiceStyle.BEDTIME_STORY.value: ("ThT5KcBeYPX3keUQqHPh", "Dorothy"),
}

STYLE_SETTINGS = {
    VoiceStyle.PROFESSORIAL: VoiceSettings(
        stability=0.75, similarity_boost=0.75, style=0.2, speaking_rate=1.0
    ),
    VoiceStyle.PODCAST: VoiceSettings(
        stability=0.45, similarity_boost=0.75, style=0.6, speaking_rate=1.1
    ),
    VoiceStyle.BEDTIME_STORY: VoiceSettings(
        stability=0.8, similarity_boost=0.75, style=0.3, speaking_rate=0.85
    ),
}


def voice_id_for(voice: VoiceSpec) -> str:
    voice_id, _ = VOICE_IDS.get(voice.voice_key, VOICE_IDS[voice.type.value])
    return voice_id


def voice_settings_for(voice: VoiceSpec) -> VoiceSettings:
    if voice.style is None:
        return VoiceSettings()
    return STYLE_SETTINGS.get(voice.style, VoiceSettings())


class ElevenLabsProvider(TTSProvider):
    """ElevenLabs TTS provider implementation.

    Only available when ELEVENLABS_API_KEY (or an explicit key) is set.
    Uses a multilingual model so Spanish and English share the same voices.
    """

    name = "elevenlabs"

    def __init__(
        self,
        api_key: str | None = None,
        config: ElevenLabsConfig | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize ElevenLabs provider.

        Args:
            api_key: ElevenLabs API key. If not provided, reads from
                    ELEVENLABS_API_KEY environment variable.
            config: ElevenLabs settings (loaded from the config file if omitted)
            timeout: Per-request timeout in seconds
        """
        if config is None or timeout is None:
            loaded = load_config()
            config = config or loaded.elevenlabs
            timeout = timeout if timeout is not None else loaded.synthesis.timeout
        self._api_key = api_key or os.getenv("ELEVENLABS_API_KEY")
        self._config = config
        self._timeout = timeout
        self._client: ElevenLabs | None = None

    def is_available(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> ElevenLabs:
        if self._client is not None:
            return self._client

        if not self._api_key:
            raise TTSAuthError(
                "ElevenLabs API key not found. Set ELEVENLABS_API_KEY environment "
                "variable or provide api_key parameter."
            )
        try:
            self._client = ElevenLabs(api_key=self._api_key, timeout=self._timeout)
        except Exception as e:
            raise TTSAuthError(f"Failed to initialize ElevenLabs client: {e}") from e
        return self._client

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        """Convert text to speech audio bytes.

        Args:
            text: Prepared text to convert to speech
            voice: Resolved voice spec

        Returns:
            Audio data as bytes (MP3 format)

        Raises:
            TTSAPIError: If API call fails
            TTSAuthError: If authentication fails
            ValueError: If text is empty
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        client = self._get_client()
        voice_id = voice_id_for(voice)
        voice_settings = voice_settings_for(voice)

        # Run synchronous ElevenLabs client in thread to avoid blocking event loop
        def _sync_convert() -> bytes:
            audio_generator = client.text_to_speech.convert(
                text=text,
                voice_id=voice_id,
                model_id=self._config.model,
                voice_settings=voice_settings.to_dict(),
            )
            # Collect all audio chunks
            return b"".join(audio_generator)

        try:
            audio_bytes = await asyncio.to_thread(_sync_convert)
        except Exception as e:
            if "unauthorized" in str(e).lower() or "401" in str(e):
                raise TTSAuthError(f"Authentication failed: {e}") from e
            elif "429" in str(e):
                raise TTSAPIError(f"Rate limit exceeded: {e}", 429) from e
            elif "5" in str(e)[:1]:  # 5xx server errors
                raise TTSAPIError(f"Server error: {e}") from e
            else:
                raise TTSAPIError(f"API call failed: {e}") from e

        if not audio_bytes:
            raise TTSAPIError("No audio data received from API")

        return audio_bytes

    async def list_voices(self) -> list[VoiceInfo]:
        """List the premade voices voice specs map onto."""
        return [
            VoiceInfo(voice_id=voice_id, name=f"{name} ({key})", provider=self.name)
            for key, (voice_id, name) in VOICE_IDS.items()
        ]

"""Google Cloud Text-to-Speech provider implementation."""

import asyncio
import logging
import os
from pathlib import Path

from google.api_core import exceptions as google_exceptions
from google.auth.exceptions import GoogleAuthError
from google.cloud import texttospeech

from ..config import GoogleConfig, load_config
from ..tts.errors import (
    TTSAPIError,
    TTSAuthError,
    TTSError,
    TTSTimeoutError,
    TTSUnsupportedVoiceError,
)
from ..tts.models import AudioParams, VoiceInfo, VoiceSpec, VoiceStyle, VoiceType
from ..tts.voices import DEFAULT_LANGUAGE
from .base import TTSProvider

logger = logging.getLogger(__name__)

LANGUAGE_REGIONS = {"es": "es-ES", "en": "en-US"}

# Keyed by (language, style-or-type). Neural2 voices accept rate/pitch/gain.
ENHANCED_VOICES = {
    ("es", VoiceType.FEMININE.value): "es-ES-Neural2-A",
    ("es", VoiceType.MASCULINE.value): "es-ES-Neural2-B",
    ("es", VoiceStyle.PROFESSORIAL.value): "es-ES-Neural2-F",
    ("es", VoiceStyle.PODCAST.value): "es-ES-Neural2-C",
    ("es", VoiceStyle.BEDTIME_STORY.value): "es-ES-Neural2-E",
    ("en", VoiceType.FEMININE.value): "en-US-Neural2-C",
    ("en", VoiceType.MASCULINE.value): "en-US-Neural2-D",
    ("en", VoiceStyle.PROFESSORIAL.value): "en-US-Neural2-J",
    ("en", VoiceStyle.PODCAST.value): "en-US-Neural2-F",
    ("en", VoiceStyle.BEDTIME_STORY.value): "en-US-Neural2-H",
}

# Retried when the enhanced voice is rejected. Keyed by (language, type).
STANDARD_VOICES = {
    ("es", VoiceType.FEMININE.value): "es-ES-Standard-A",
    ("es", VoiceType.MASCULINE.value): "es-ES-Standard-B",
    ("en", VoiceType.FEMININE.value): "en-US-Standard-C",
    ("en", VoiceType.MASCULINE.value): "en-US-Standard-D",
}

NEUTRAL_PARAMS = AudioParams(speaking_rate=1.0, pitch=0.0, volume_gain_db=0.0)

STYLE_PARAMS = {
    VoiceStyle.PROFESSORIAL: AudioParams(
        speaking_rate=1.0, pitch=1.0, volume_gain_db=1.0
    ),
    VoiceStyle.PODCAST: AudioParams(speaking_rate=1.1, pitch=2.0, volume_gain_db=2.0),
    VoiceStyle.BEDTIME_STORY: AudioParams(
        speaking_rate=0.85, pitch=-2.0, volume_gain_db=-2.0
    ),
}

_VOICE_ERROR_MARKERS = ("voice", "model")


def default_credentials_path() -> Path:
    """Location of the gcloud application-default credentials file."""
    filename = "application_default_credentials.json"
    config_dir = os.getenv("CLOUDSDK_CONFIG")
    if config_dir:
        return Path(config_dir) / filename
    if os.name == "nt" and os.getenv("APPDATA"):
        return Path(os.environ["APPDATA"]) / "gcloud" / filename
    return Path.home() / ".config" / "gcloud" / filename


def _region_language(language: str) -> str:
    return language if language in LANGUAGE_REGIONS else DEFAULT_LANGUAGE


def enhanced_voice_name(voice: VoiceSpec) -> str:
    """Enhanced voice for a spec; unknown combinations get the language default."""
    language = _region_language(voice.language)
    name = ENHANCED_VOICES.get((language, voice.voice_key))
    if name is None:
        name = ENHANCED_VOICES[(language, VoiceType.FEMININE.value)]
    return name


def standard_voice_name(voice: VoiceSpec) -> str:
    """Standard voice used after the enhanced voice is rejected."""
    language = _region_language(voice.language)
    name = STANDARD_VOICES.get((language, voice.type.value))
    if name is None:
        name = STANDARD_VOICES[(language, VoiceType.FEMININE.value)]
    return name


def audio_params_for(voice: VoiceSpec) -> AudioParams:
    if voice.style is None:
        return NEUTRAL_PARAMS
    return STYLE_PARAMS.get(voice.style, NEUTRAL_PARAMS)


def classify_google_error(error: Exception) -> TTSError:
    """Map a Google client exception onto the TTS error hierarchy."""
    message = str(error)
    lowered = message.lower()

    if isinstance(
        error, google_exceptions.InvalidArgument | google_exceptions.NotFound
    ):
        if any(marker in lowered for marker in _VOICE_ERROR_MARKERS):
            return TTSUnsupportedVoiceError(
                f"Voice not supported: {message}", error.code, error
            )
        return TTSAPIError(f"Invalid request: {message}", error.code, error)
    if isinstance(
        error, google_exceptions.Unauthenticated | google_exceptions.PermissionDenied
    ):
        return TTSAuthError(f"Authentication failed: {message}", error)
    if isinstance(error, google_exceptions.ResourceExhausted):
        return TTSAPIError(f"Quota exceeded: {message}", 429, error)
    if isinstance(error, google_exceptions.DeadlineExceeded):
        return TTSTimeoutError(f"Request timed out: {message}", 504, error)
    if isinstance(error, google_exceptions.GoogleAPICallError):
        return TTSAPIError(f"API call failed: {message}", error.code, error)
    if isinstance(error, GoogleAuthError):
        return TTSAuthError(f"Credentials error: {message}", error)
    return TTSAPIError(f"API call failed: {message}", None, error)


class GoogleCloudProvider(TTSProvider):
    """Google Cloud Text-to-Speech provider.

    Tries the enhanced (Neural2) voice for the request's style or type and,
    if the service rejects that voice, retries once with the standard voice
    for the same language and type.
    """

    name = "google"

    def __init__(
        self, config: GoogleConfig | None = None, timeout: float | None = None
    ) -> None:
        """Initialize Google Cloud provider.

        The client is created lazily so constructing the provider never
        touches credentials.

        Args:
            config: Google settings (loaded from the config file if omitted)
            timeout: Per-request deadline in seconds passed to the client
        """
        if config is None or timeout is None:
            loaded = load_config()
            config = config or loaded.google
            timeout = timeout if timeout is not None else loaded.synthesis.timeout
        self._config = config
        self._timeout = timeout
        self._client: texttospeech.TextToSpeechClient | None = None

    def is_available(self) -> bool:
        """True if a credentials file, a project id or default credentials exist."""
        credentials = self._config.credentials
        if credentials and Path(credentials).expanduser().is_file():
            return True
        if self._config.project:
            return True
        return default_credentials_path().is_file()

    def _get_client(self) -> texttospeech.TextToSpeechClient:
        if self._client is not None:
            return self._client

        client_options = (
            {"quota_project_id": self._config.project} if self._config.project else None
        )
        try:
            if self._config.credentials:
                client_class = texttospeech.TextToSpeechClient
                self._client = client_class.from_service_account_file(
                    str(Path(self._config.credentials).expanduser()),
                    client_options=client_options,
                )
            else:
                self._client = texttospeech.TextToSpeechClient(
                    client_options=client_options
                )
        except (GoogleAuthError, OSError, ValueError) as e:
            raise TTSAuthError(
                f"Failed to initialize Google Cloud TTS client: {e}", e
            ) from e
        return self._client

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        """Convert text to speech audio bytes.

        Args:
            text: Prepared text to convert to speech
            voice: Resolved voice spec

        Returns:
            Audio data in the configured encoding (MP3 by default)

        Raises:
            TTSAuthError: If credentials are rejected
            TTSAPIError: If the API call fails, including a failed standard-voice retry
            ValueError: If text is empty
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        params = audio_params_for(voice)
        enhanced = enhanced_voice_name(voice)

        try:
            return await self._synthesize_with_voice(text, voice, enhanced, params)
        except TTSUnsupportedVoiceError as e:
            standard = standard_voice_name(voice)
            logger.warning(
                f"Voice {enhanced} rejected ({e}), retrying with {standard}"
            )
            return await self._synthesize_with_voice(text, voice, standard, params)

    async def _synthesize_with_voice(
        self, text: str, voice: VoiceSpec, voice_name: str, params: AudioParams
    ) -> bytes:
        language_code = LANGUAGE_REGIONS[_region_language(voice.language)]

        def _sync_synthesize() -> bytes:
            client = self._get_client()
            response = client.synthesize_speech(
                input=texttospeech.SynthesisInput(text=text),
                voice=texttospeech.VoiceSelectionParams(
                    language_code=language_code, name=voice_name
                ),
                audio_config=texttospeech.AudioConfig(
                    audio_encoding=texttospeech.AudioEncoding[
                        self._config.audio_encoding
                    ],
                    speaking_rate=params.speaking_rate,
                    pitch=params.pitch,
                    volume_gain_db=params.volume_gain_db,
                ),
                timeout=self._timeout,
            )
            return response.audio_content

        logger.debug(f"Requesting {voice_name} ({language_code}) from Google Cloud")
        try:
            # Blocking gRPC call; the deadline above bounds it on the server side too
            audio_bytes = await asyncio.to_thread(_sync_synthesize)
        except TTSError:
            raise
        except Exception as e:
            raise classify_google_error(e) from e

        if not audio_bytes:
            raise TTSAPIError("No audio data received from API")

        return audio_bytes

    async def list_voices(self) -> list[VoiceInfo]:
        """List the Google voices that voice specs map onto."""
        voices = []
        tiers = (("enhanced", ENHANCED_VOICES), ("standard", STANDARD_VOICES))
        for tier, mapping in tiers:
            for (language, key), name in mapping.items():
                voices.append(
                    VoiceInfo(
                        voice_id=name,
                        name=f"{key} ({tier})",
                        language=LANGUAGE_REGIONS[language],
                        provider=self.name,
                    )
                )
        return voices

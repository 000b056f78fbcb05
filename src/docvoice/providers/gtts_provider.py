"""gTTS provider, the universal fallback backend.

Uses the Google Translate speech endpoint through the gTTS library. It needs
no credentials, so it is always available, but only knows one voice per
language and ignores voice type and style.
"""

import asyncio
import logging
import threading
import time
import uuid
from pathlib import Path

from gtts import gTTS, gTTSError

from ..config import GTTSConfig, load_config
from ..tts.errors import TTSAPIError, TTSTimeoutError
from ..tts.models import VoiceInfo, VoiceSpec
from ..tts.voices import DEFAULT_LANGUAGE
from .base import TTSProvider

logger = logging.getLogger(__name__)

GTTS_LANGUAGES: tuple[str, ...] = ("es", "en", "fr", "de", "it", "pt")


def gtts_language(language: str) -> str:
    """Coerce a language code onto the gTTS allow-list."""
    code = (language or "").lower()
    if code not in GTTS_LANGUAGES:
        logger.debug(f"gTTS does not accept '{language}', using '{DEFAULT_LANGUAGE}'")
        return DEFAULT_LANGUAGE
    return code


class GTTSProvider(TTSProvider):
    """gTTS provider writing MP3 through a scratch directory.

    Each call streams into a uniquely named file under the configured temp
    directory, reads it back and deletes it, also on failure or timeout.
    """

    name = "gtts"

    def __init__(
        self, config: GTTSConfig | None = None, timeout: float | None = None
    ) -> None:
        """Initialize gTTS provider.

        Args:
            config: gTTS settings (loaded from the config file if omitted)
            timeout: Per-request HTTP timeout in seconds
        """
        if config is None or timeout is None:
            loaded = load_config()
            config = config or loaded.gtts
            timeout = timeout if timeout is not None else loaded.synthesis.timeout
        self._config = config
        self._timeout = timeout

    @property
    def temp_dir(self) -> Path:
        return self._config.temp_dir

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        """Convert text to speech using gTTS.

        gTTS sends one HTTP request per text chunk. The whole call is bounded
        by the provider timeout, checked between chunks, and stops at the
        next chunk when the awaiting task is cancelled. The scratch file is
        removed by the worker thread itself, so an abandoned call still
        cleans up once its current request returns.

        Args:
            text: Prepared text to convert to speech
            voice: Resolved voice spec; only the language is used

        Returns:
            Audio data as bytes (MP3 format)

        Raises:
            TTSTimeoutError: If the chunks do not arrive within the timeout
            TTSAPIError: If gTTS fails or produces no audio
            ValueError: If text is empty
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        lang = gtts_language(voice.language)
        output_path = self.temp_dir / f"tts_{uuid.uuid4().hex}.mp3"
        cancelled = threading.Event()

        def _sync_save() -> bytes:
            deadline = time.monotonic() + self._timeout
            self.temp_dir.mkdir(parents=True, exist_ok=True)
            try:
                tts = gTTS(text, lang=lang, tld=self._config.tld, timeout=self._timeout)
                with open(output_path, "wb") as f:
                    for chunk in tts.stream():
                        if cancelled.is_set():
                            raise TTSTimeoutError("gTTS call abandoned by caller", 504)
                        if time.monotonic() > deadline:
                            raise TTSTimeoutError(
                                f"gTTS did not finish within {self._timeout}s", 504
                            )
                        f.write(chunk)
                return output_path.read_bytes()
            finally:
                output_path.unlink(missing_ok=True)

        try:
            audio_bytes = await asyncio.to_thread(_sync_save)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        except gTTSError as e:
            raise TTSAPIError(f"gTTS request failed: {e}", None, e) from e
        except (OSError, ValueError) as e:
            raise TTSAPIError(f"gTTS synthesis failed: {e}", None, e) from e

        if not audio_bytes:
            raise TTSAPIError("No audio data received from gTTS")

        logger.debug(f"gTTS produced {len(audio_bytes)} bytes ({lang})")
        return audio_bytes

    async def list_voices(self) -> list[VoiceInfo]:
        """One voice per allow-listed language."""
        return [
            VoiceInfo(
                voice_id=lang, name=f"gTTS {lang}", language=lang, provider=self.name
            )
            for lang in GTTS_LANGUAGES
        ]

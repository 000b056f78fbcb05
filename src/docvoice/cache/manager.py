"""Audio cache manager for fingerprint-addressed TTS caching.

Ties the key deriver, the audio store and invalidation reconstruction
together so the pipeline deals with one object.
"""

import logging

from ..config import load_config
from ..tts.errors import AudioStoreError
from ..tts.models import VoiceSpec
from .invalidation import invalidate_document
from .keys import derive_fingerprint
from .models import CacheStats
from .storage import AudioStore, FileAudioStore

logger = logging.getLogger(__name__)


class AudioCacheManager:
    """High-level cache for synthesized audio.

    Example:
        cache = AudioCacheManager(FileAudioStore("/var/cache/docvoice"))

        fingerprint = cache.fingerprint("Hola", voice)
        audio = cache.get(fingerprint)
        if audio is None:
            audio = (await chain.synthesize("Hola", voice)).audio
            cache.put(fingerprint, audio)

        # Later, when the source document is deleted
        removed = cache.invalidate(document_text)
    """

    def __init__(
        self, store: AudioStore | None = None, include_styles: bool = False
    ):
        """Initialize cache manager and prepare its store.

        Args:
            store: Audio store to use (defaults to a file store in the
                configured cache.dir)
            include_styles: Whether invalidation also checks style variants

        Raises:
            AudioStoreError: If the store cannot be initialized
        """
        if store is None:
            store = FileAudioStore(load_config().cache.dir)
        self.store = store
        self.include_styles = include_styles
        self.store.init()

        logger.debug(
            f"AudioCacheManager initialized with {type(self.store).__name__}, "
            f"include_styles={include_styles}"
        )

    def fingerprint(self, text: str, voice: VoiceSpec) -> str:
        """Cache key for prepared text and a resolved voice."""
        return derive_fingerprint(text, voice)

    def get(self, fingerprint: str) -> bytes | None:
        """Return cached audio, or None on a miss.

        Raises:
            AudioStoreError: If an existing entry cannot be read
        """
        audio = self.store.read(fingerprint)
        if audio is None:
            logger.debug(f"Cache miss for {fingerprint[:8]}")
        else:
            logger.debug(f"Cache hit for {fingerprint[:8]} ({len(audio)} bytes)")
        return audio

    def put(self, fingerprint: str, audio: bytes) -> None:
        """Store audio so later requests with the same key are served from disk.

        Raises:
            AudioStoreError: If the audio cannot be persisted
        """
        try:
            self.store.write(fingerprint, audio)
        except AudioStoreError as e:
            logger.error(f"Failed to cache audio {fingerprint[:8]}: {e}")
            raise
        logger.info(f"Cached {len(audio)} bytes of audio as {fingerprint[:8]}")

    def invalidate(self, document_text: str) -> int:
        """Remove cached audio reconstructed from a document's text."""
        return invalidate_document(
            self.store, document_text, include_styles=self.include_styles
        )

    def stats(self) -> CacheStats:
        fingerprints = self.store.fingerprints()
        location = str(getattr(self.store, "cache_dir", type(self.store).__name__))
        return CacheStats(
            location=location,
            entries=len(fingerprints),
            total_bytes=sum(self.store.size(fp) for fp in fingerprints),
        )

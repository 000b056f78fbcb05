"""Speech pipeline orchestrator for docvoice.

Coordinates voice resolution, the audio cache and the provider chain so
every caller (CLI, library API, services embedding the engine) goes through
the same cache-then-synthesize workflow.
"""

import logging

from ..cache.manager import AudioCacheManager
from ..cache.models import CacheStats
from ..cache.storage import FileAudioStore
from ..config import DocvoiceConfig, load_config
from ..providers import build_providers
from .chain import ProviderChain
from .models import SpeechResult, VoiceStyle, VoiceType
from .voices import prepare_text, resolve_voice

logger = logging.getLogger(__name__)


class SpeechPipeline:
    """Orchestrates the complete workflow from text to audio bytes.

    Handles voice resolution, cache lookup, provider fallback and cache
    writes. Supports both pre-built collaborators (tests, long-lived
    services) and on-demand creation from configuration.

    Example (pre-built components):
        cache = AudioCacheManager(FileAudioStore(tmp_dir))
        chain = ProviderChain([GTTSProvider()], timeout=10)
        pipeline = SpeechPipeline(cache_manager=cache, chain=chain)

        audio = await pipeline.synthesize("Hola mundo", voice_type="masculine")

    Example (from config):
        pipeline = SpeechPipeline()
        result = await pipeline.process("Hello", language="en-US", style="podcast")
        # result.cached is False the first time, True afterwards
    """

    def __init__(
        self,
        cache_manager: AudioCacheManager | None = None,
        chain: ProviderChain | None = None,
        config: DocvoiceConfig | None = None,
    ) -> None:
        """Initialize speech pipeline with optional pre-built components.

        Args:
            cache_manager: Optional pre-built cache manager
            chain: Optional pre-built provider chain
            config: Configuration used for components that are not provided

        Note:
            Components that are not provided are created on first use, so
            constructing a pipeline never touches the disk or credentials.
        """
        self._config = config
        self.cache_manager = cache_manager
        self.chain = chain

        logger.debug(
            f"SpeechPipeline initialized with "
            f"cache_manager={'pre-loaded' if cache_manager else 'on-demand'}, "
            f"chain={'pre-loaded' if chain else 'on-demand'}"
        )

    @property
    def config(self) -> DocvoiceConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    def _get_cache_manager(self) -> AudioCacheManager:
        if self.cache_manager is None:
            self.cache_manager = AudioCacheManager(
                FileAudioStore(self.config.cache.dir),
                include_styles=self.config.cache.invalidate_styles,
            )
            logger.debug(f"Created cache manager on-demand at {self.config.cache.dir}")
        return self.cache_manager

    def _get_chain(self) -> ProviderChain:
        if self.chain is None:
            self.chain = ProviderChain(
                build_providers(self.config), timeout=self.config.synthesis.timeout
            )
            logger.debug(f"Created provider chain on-demand: {self.chain.names}")
        return self.chain

    async def process(
        self,
        text: str,
        voice_type: str | VoiceType | None = None,
        style: str | VoiceStyle | None = None,
        description: str | None = None,
        language: str | None = None,
    ) -> SpeechResult:
        """Return audio for text and voice, from cache or freshly synthesized.

        Args:
            text: Text to speak; truncated to the cache limit
            voice_type: "feminine" or "masculine" (default feminine)
            style: Optional "professorial", "podcast" or "bedtime-story"
            description: Optional free-text voice description
            language: Language tag (default "es")

        Returns:
            SpeechResult with audio, fingerprint, cache flag and backend

        Raises:
            ValueError: If text is empty
            SynthesisChainError: If no provider could synthesize the text
            AudioStoreError: If the cache could not read or persist audio
        """
        prepared = prepare_text(text)
        if not prepared:
            raise ValueError("Text cannot be empty")

        voice = resolve_voice(voice_type, style, description, language)
        cache = self._get_cache_manager()
        fingerprint = cache.fingerprint(prepared, voice)

        # === CACHE LOOKUP PHASE ===
        cached_audio = cache.get(fingerprint)
        if cached_audio is not None:
            return SpeechResult(
                audio=cached_audio, fingerprint=fingerprint, cached=True
            )

        # === SYNTHESIS PHASE ===
        result = await self._get_chain().synthesize(prepared, voice)

        # === CACHE WRITE PHASE ===
        cache.put(fingerprint, result.audio)

        return SpeechResult(
            audio=result.audio,
            fingerprint=fingerprint,
            cached=False,
            backend=result.backend,
        )

    async def synthesize(
        self,
        text: str,
        voice_type: str | VoiceType | None = None,
        style: str | VoiceStyle | None = None,
        description: str | None = None,
        language: str | None = None,
    ) -> bytes:
        """Like process(), returning only the audio bytes."""
        result = await self.process(text, voice_type, style, description, language)
        return result.audio

    def invalidate_for_document(self, document_text: str) -> int:
        """Remove cached audio synthesized from a document's text.

        Args:
            document_text: Full text of the document being deleted

        Returns:
            Number of cache entries removed

        Raises:
            AudioStoreError: If an existing entry cannot be removed
        """
        return self._get_cache_manager().invalidate(document_text)

    def cache_stats(self) -> CacheStats:
        return self._get_cache_manager().stats()

"""Ordered provider chain with per-call deadlines."""

import asyncio
import logging

from ..providers.base import TTSProvider
from .errors import SynthesisChainError, TTSError, TTSTimeoutError
from .models import SynthesisResult, VoiceSpec

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ProviderChain:
    """Try synthesis backends in priority order until one succeeds.

    Providers that report themselves unavailable are skipped without being
    called. Any TTSError, including a timeout, moves on to the next provider
    with the same text. Errors that are not TTSError (bugs, bad input)
    propagate unchanged.

    Example:
        chain = ProviderChain([GoogleCloudProvider(), GTTSProvider()], timeout=20)
        result = await chain.synthesize("Hola", voice)
        # result.backend == "google", or "gtts" if Google is unconfigured or failing
    """

    def __init__(
        self, providers: list[TTSProvider], timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """Initialize chain.

        Args:
            providers: Providers in the order they should be attempted
            timeout: Seconds each provider call may take

        Raises:
            ValueError: If timeout is not positive
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.providers = list(providers)
        self.timeout = timeout

    @property
    def names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    async def synthesize(self, text: str, voice: VoiceSpec) -> SynthesisResult:
        """Synthesize with the first provider that succeeds.

        Args:
            text: Prepared text, passed unchanged to every provider
            voice: Resolved voice spec

        Returns:
            SynthesisResult with audio and the name of the provider used

        Raises:
            SynthesisChainError: If no provider is available or all of them fail
        """
        failures: list[tuple[str, TTSError]] = []

        for provider in self.providers:
            if not provider.is_available():
                logger.debug(f"Skipping {provider.name}: not configured")
                continue

            try:
                # wait_for cancels the provider coroutine when the deadline passes
                audio = await asyncio.wait_for(
                    provider.synthesize(text, voice), timeout=self.timeout
                )
            except TimeoutError as e:
                error = TTSTimeoutError(
                    f"{provider.name} did not respond within {self.timeout}s",
                    504,
                    e,
                )
                failures.append((provider.name, error))
                logger.warning(f"{error}, trying next provider")
                continue
            except TTSError as e:
                failures.append((provider.name, e))
                logger.warning(f"{provider.name} failed: {e}, trying next provider")
                continue

            logger.info(f"Synthesized {len(audio)} bytes with {provider.name}")
            return SynthesisResult(audio=audio, backend=provider.name)

        if not failures:
            tried = ", ".join(self.names) or "none"
            raise SynthesisChainError(
                f"No synthesis provider available (tried: {tried})"
            )
        raise SynthesisChainError("All synthesis providers failed", failures)

"""Custom TTS exceptions."""


class TTSError(Exception):
    """Base exception for TTS-related errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class TTSAuthError(TTSError):
    """Exception raised for authentication failures.

    This typically occurs when:
    - Credentials are missing, expired or invalid
    - The service account lacks permission for the API
    - The project has the Text-to-Speech API disabled
    """

    pass


class TTSAPIError(TTSError):
    """Exception raised for API communication errors.

    This typically occurs when:
    - API server is unavailable (5xx errors)
    - Rate limits or quotas are exceeded (429 error)
    - Request format is invalid (4xx errors)
    - Network connectivity issues
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class TTSUnsupportedVoiceError(TTSAPIError):
    """The remote service rejected the requested voice or voice model.

    Backends recover from this locally by retrying with a standard voice.
    """

    pass


class TTSTimeoutError(TTSAPIError):
    """A provider call did not finish before its deadline."""

    pass


class SynthesisChainError(TTSError):
    """Every provider in the chain failed or none was available.

    Attributes:
        failures: (backend name, error) pairs in the order they were attempted
    """

    def __init__(
        self,
        message: str,
        failures: list[tuple[str, TTSError]] | None = None,
    ) -> None:
        self.failures = list(failures or [])
        if self.failures:
            details = "; ".join(f"{name}: {error}" for name, error in self.failures)
            message = f"{message} ({details})"
        last_error = self.failures[-1][1] if self.failures else None
        super().__init__(message, last_error)


class AudioStoreError(TTSError):
    """The audio cache could not persist, read or remove an entry.

    Distinct from provider failures: this points at the disk, not at the
    synthesis backends.
    """

    def __init__(
        self,
        message: str,
        fingerprint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.fingerprint = fingerprint

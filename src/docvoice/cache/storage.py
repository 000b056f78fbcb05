"""Content-addressable audio storage."""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from ..tts.errors import AudioStoreError
from .keys import is_fingerprint

logger = logging.getLogger(__name__)

AUDIO_SUFFIX = ".audio"
TEMP_SUFFIX = ".tmp"


class AudioStore(ABC):
    """Key-to-bytes store addressed by cache fingerprints.

    Implementations must make write() atomic for concurrent readers and
    delete() idempotent. There is no eviction: entries stay until deleted.
    """

    def init(self) -> None:
        """Prepare the store for use. Safe to call more than once."""

    @abstractmethod
    def exists(self, fingerprint: str) -> bool:
        pass

    @abstractmethod
    def read(self, fingerprint: str) -> bytes | None:
        """Return stored bytes, or None if there is no entry."""
        pass

    @abstractmethod
    def write(self, fingerprint: str, audio: bytes) -> None:
        pass

    @abstractmethod
    def delete(self, fingerprint: str) -> bool:
        """Remove an entry. Returns False if there was nothing to remove."""
        pass

    @abstractmethod
    def fingerprints(self) -> list[str]:
        pass

    def size(self, fingerprint: str) -> int:
        """Size in bytes of a stored entry, 0 if absent."""
        return len(self.read(fingerprint) or b"")


class FileAudioStore(AudioStore):
    """Flat directory of {fingerprint}.audio files.

    Writes go to a temporary file in the same directory and are renamed
    into place, so a reader either sees the old entry, the new entry or
    nothing, never a partial file. Concurrent writers of the same
    fingerprint are allowed; the last rename wins.
    """

    def __init__(self, cache_dir: Path | str):
        """Initialize file store.

        Args:
            cache_dir: Directory holding the audio files
        """
        self.cache_dir = Path(cache_dir).expanduser()

    def init(self) -> None:
        """Create the cache directory if needed."""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AudioStoreError(
                f"Failed to create cache directory {self.cache_dir}: {e}",
                original_error=e,
            ) from e
        logger.debug(f"Audio store ready at {self.cache_dir}")

    def path_for(self, fingerprint: str) -> Path:
        """Return the file path for a fingerprint.

        Raises:
            ValueError: If fingerprint is not a 64-character hex digest
        """
        if not is_fingerprint(fingerprint):
            raise ValueError(f"Invalid fingerprint: {fingerprint!r}")
        return self.cache_dir / f"{fingerprint}{AUDIO_SUFFIX}"

    def exists(self, fingerprint: str) -> bool:
        return self.path_for(fingerprint).is_file()

    def read(self, fingerprint: str) -> bytes | None:
        path = self.path_for(fingerprint)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise AudioStoreError(
                f"Failed to read cached audio {path.name}: {e}",
                fingerprint=fingerprint,
                original_error=e,
            ) from e

    def write(self, fingerprint: str, audio: bytes) -> None:
        path = self.path_for(fingerprint)
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.cache_dir, prefix=f".{fingerprint[:8]}-", suffix=TEMP_SUFFIX
            )
            with os.fdopen(fd, "wb") as f:
                f.write(audio)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            raise AudioStoreError(
                f"Failed to write cached audio {path.name}: {e}",
                fingerprint=fingerprint,
                original_error=e,
            ) from e
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

        logger.debug(f"Stored {len(audio)} bytes as {path.name}")

    def delete(self, fingerprint: str) -> bool:
        path = self.path_for(fingerprint)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise AudioStoreError(
                f"Failed to delete cached audio {path.name}: {e}",
                fingerprint=fingerprint,
                original_error=e,
            ) from e
        logger.debug(f"Deleted cached audio {path.name}")
        return True

    def fingerprints(self) -> list[str]:
        """List stored fingerprints by scanning the directory."""
        if not self.cache_dir.is_dir():
            return []
        return sorted(
            path.stem
            for path in self.cache_dir.glob(f"*{AUDIO_SUFFIX}")
            if is_fingerprint(path.stem)
        )

    def size(self, fingerprint: str) -> int:
        try:
            return self.path_for(fingerprint).stat().st_size
        except FileNotFoundError:
            return 0

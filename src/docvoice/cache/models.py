"""Data models for the audio cache."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the audio store contents.

    Attributes:
        location: Human-readable location of the store
        entries: Number of stored fingerprints
        total_bytes: Combined size of stored audio
    """

    location: str
    entries: int
    total_bytes: int

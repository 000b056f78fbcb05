"""Deterministic cache fingerprints for synthesis requests."""

import hashlib
import re

from ..tts.models import VoiceSpec

FINGERPRINT_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def canonical_key_string(text: str, voice: VoiceSpec) -> str:
    """Build the string that gets hashed: text|styleOrType|language|description."""
    return f"{text}|{voice.voice_key}|{voice.language}|{voice.description or ''}"


def derive_fingerprint(text: str, voice: VoiceSpec) -> str:
    """Derive the cache fingerprint for already-prepared text and a voice.

    Pure function with no I/O. Callers must pass text that went through
    prepare_text so synthesis and invalidation agree on the key.

    Args:
        text: Prepared (stripped and truncated) text
        voice: Canonical voice spec

    Returns:
        64-character lowercase SHA-256 hex digest
    """
    payload = canonical_key_string(text, voice).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def is_fingerprint(value: str) -> bool:
    return bool(FINGERPRINT_PATTERN.match(value))

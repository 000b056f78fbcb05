"""Reconstruct and delete the cache entries a document could have produced.

No index from documents to fingerprints is kept, so invalidation derives
every fingerprint that synthesis could plausibly have used for the text and
deletes whichever of them exist. The enumeration is the bound: entries made
with a voice description, or with a style when styles are not enumerated,
are not found.
"""

import logging
from itertools import product

from ..tts.models import VoiceSpec, VoiceStyle, VoiceType
from ..tts.voices import SUPPORTED_LANGUAGES, prepare_text
from .keys import derive_fingerprint
from .storage import AudioStore

logger = logging.getLogger(__name__)


def candidate_voices(include_styles: bool = False) -> list[VoiceSpec]:
    """Enumerate the voice specs invalidation checks.

    Args:
        include_styles: Also enumerate every style for each type/language

    Returns:
        Voice types x supported languages, optionally x styles
    """
    styles: list[VoiceStyle | None] = [None]
    if include_styles:
        styles.extend(VoiceStyle)

    return [
        VoiceSpec(type=voice_type, language=language, style=style)
        for voice_type, language, style in product(
            VoiceType, SUPPORTED_LANGUAGES, styles
        )
    ]


def candidate_fingerprints(
    document_text: str, include_styles: bool = False
) -> list[str]:
    """Fingerprints synthesis could have produced for this document text."""
    text = prepare_text(document_text)
    # Distinct specs can share a key when a style makes the type irrelevant.
    seen: dict[str, None] = {}
    for voice in candidate_voices(include_styles):
        seen.setdefault(derive_fingerprint(text, voice))
    return list(seen)


def invalidate_document(
    store: AudioStore, document_text: str, include_styles: bool = False
) -> int:
    """Delete cached audio that was synthesized from this document's text.

    Args:
        store: Audio store to delete from
        document_text: Raw document text, prepared here with the synthesis rule
        include_styles: Also check style variants

    Returns:
        Number of entries actually removed (0 is a normal outcome)

    Raises:
        AudioStoreError: If an existing entry cannot be removed
    """
    removed = 0
    for fingerprint in candidate_fingerprints(document_text, include_styles):
        if not store.exists(fingerprint):
            continue
        if store.delete(fingerprint):
            removed += 1
            logger.debug(f"Invalidated cached audio {fingerprint[:8]}")

    logger.info(f"Invalidated {removed} cached audio entries for document")
    return removed

"""Voice and text normalization shared by synthesis and cache invalidation.

Everything here degrades to defaults instead of raising so a request with
odd or missing fields still reaches the cache and the providers.
"""

import logging

from .models import VoiceSpec, VoiceStyle, VoiceType

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES: tuple[str, ...] = ("es", "en")
DEFAULT_LANGUAGE = "es"
DEFAULT_VOICE_TYPE = VoiceType.FEMININE

# Cache keys are derived from the truncated text, so changing this
# invalidates every stored entry.
MAX_TEXT_LENGTH = 5000


def prepare_text(text: str) -> str:
    """Truncate raw text to MAX_TEXT_LENGTH code points, then strip it.

    Truncating first means a text and its own first MAX_TEXT_LENGTH
    characters always prepare to the same string. Synthesis and invalidation
    must both go through this function so the fingerprints they compute agree.

    Args:
        text: Raw text from the caller or the document

    Returns:
        Text ready for key derivation and synthesis
    """
    text = text or ""
    if len(text) > MAX_TEXT_LENGTH:
        logger.debug(
            f"Truncating text from {len(text)} to {MAX_TEXT_LENGTH} characters"
        )
        text = text[:MAX_TEXT_LENGTH]
    return text.strip()


def normalize_language(language: str | None) -> str:
    """Reduce a language tag to a supported primary subtag.

    "en-US" and "en_GB" become "en"; anything unsupported becomes the
    default language.
    """
    if not language or not language.strip():
        return DEFAULT_LANGUAGE

    primary = language.strip().replace("_", "-").split("-")[0].lower()
    if primary not in SUPPORTED_LANGUAGES:
        logger.debug(
            f"Unsupported language '{language}', using '{DEFAULT_LANGUAGE}'"
        )
        return DEFAULT_LANGUAGE
    return primary


def _parse_voice_type(voice_type: str | VoiceType | None) -> VoiceType:
    if isinstance(voice_type, VoiceType):
        return voice_type
    if voice_type:
        try:
            return VoiceType(voice_type.strip().lower())
        except ValueError:
            logger.debug(f"Unknown voice type '{voice_type}', using default")
    return DEFAULT_VOICE_TYPE


def _parse_style(style: str | VoiceStyle | None) -> VoiceStyle | None:
    if isinstance(style, VoiceStyle):
        return style
    if not style or not style.strip():
        return None
    try:
        return VoiceStyle(style.strip().lower())
    except ValueError:
        logger.debug(f"Unknown voice style '{style}', ignoring")
        return None


def resolve_voice(
    voice_type: str | VoiceType | None = None,
    style: str | VoiceStyle | None = None,
    description: str | None = None,
    language: str | None = None,
) -> VoiceSpec:
    """Build a fully populated VoiceSpec from raw request fields.

    Args:
        voice_type: "feminine" or "masculine"; anything else means feminine
        style: Optional style name, kept regardless of type/language
        description: Optional free-text voice description
        language: Language tag, region subtags allowed

    Returns:
        Canonical VoiceSpec
    """
    description = description.strip() if description else None

    return VoiceSpec(
        type=_parse_voice_type(voice_type),
        language=normalize_language(language),
        style=_parse_style(style),
        description=description or None,
    )

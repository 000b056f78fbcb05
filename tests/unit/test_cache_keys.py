"""Unit tests for cache fingerprint derivation."""

import hashlib
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from docvoice.cache.keys import canonical_key_string, derive_fingerprint, is_fingerprint
from docvoice.tts.models import VoiceSpec, VoiceStyle, VoiceType
from docvoice.tts.voices import prepare_text, resolve_voice


class TestCanonicalKeyString:
    """Test the string that gets hashed."""

    def test_type_without_style(self) -> None:
        voice = VoiceSpec(type=VoiceType.MASCULINE, language="en")
        assert canonical_key_string("Hello", voice) == "Hello|masculine|en|"

    def test_style_replaces_type(self) -> None:
        voice = VoiceSpec(
            type=VoiceType.FEMININE, language="es", style=VoiceStyle.BEDTIME_STORY
        )
        assert canonical_key_string("Hola", voice) == "Hola|bedtime-story|es|"

    def test_description_included(self) -> None:
        voice = VoiceSpec(type=VoiceType.FEMININE, language="es", description="calm")
        assert canonical_key_string("Hola", voice) == "Hola|feminine|es|calm"


class TestDeriveFingerprint:
    """Test fingerprint properties."""

    def test_is_sha256_of_canonical_string(self) -> None:
        voice = VoiceSpec(type=VoiceType.FEMININE, language="es")
        expected = hashlib.sha256("Hola|feminine|es|".encode()).hexdigest()

        assert derive_fingerprint("Hola", voice) == expected

    def test_format(self) -> None:
        fingerprint = derive_fingerprint("Hola", resolve_voice())

        assert len(fingerprint) == 64
        assert is_fingerprint(fingerprint)

    def test_deterministic(self) -> None:
        voice = resolve_voice("masculine", "podcast", "deep", "en")
        assert derive_fingerprint("Text", voice) == derive_fingerprint("Text", voice)

    def test_differs_by_each_field(self) -> None:
        base = derive_fingerprint("Hola", resolve_voice())
        variants = [
            derive_fingerprint("Hola!", resolve_voice()),
            derive_fingerprint("Hola", resolve_voice("masculine")),
            derive_fingerprint("Hola", resolve_voice(language="en")),
            derive_fingerprint("Hola", resolve_voice(style="podcast")),
            derive_fingerprint("Hola", resolve_voice(description="calm")),
        ]

        assert base not in variants
        assert len(set(variants)) == len(variants)

    def test_style_makes_type_irrelevant(self) -> None:
        """Two types with the same style share a fingerprint."""
        feminine = resolve_voice("feminine", "professorial")
        masculine = resolve_voice("masculine", "professorial")

        assert derive_fingerprint("Hola", feminine) == derive_fingerprint(
            "Hola", masculine
        )

    def test_text_beyond_limit_shares_key_with_its_prefix(self) -> None:
        """6000 characters and their first 5000 map to the same entry."""
        long_text = "x" * 5000 + "y" * 1000
        voice = resolve_voice()

        assert derive_fingerprint(prepare_text(long_text), voice) == derive_fingerprint(
            prepare_text(long_text[:5000]), voice
        )

    def test_whitespace_at_the_boundary_does_not_move_the_cut(self) -> None:
        """A space at position 5000 is truncated away before stripping."""
        long_text = "x" * 4999 + " " + "y" * 1000
        voice = resolve_voice()

        assert prepare_text(long_text) == "x" * 4999
        assert derive_fingerprint(prepare_text(long_text), voice) == derive_fingerprint(
            prepare_text(long_text[:5000]), voice
        )

    def test_leading_newline_counts_toward_the_limit(self) -> None:
        """Texts sharing their first 5000 raw characters share a key."""
        first = "\n" + "x" * 4999 + "a" * 1000
        second = "\n" + "x" * 4999 + "b" * 1000
        voice = resolve_voice(language="en")

        assert derive_fingerprint(prepare_text(first), voice) == derive_fingerprint(
            prepare_text(second), voice
        )
        assert derive_fingerprint(prepare_text(first), voice) == derive_fingerprint(
            prepare_text(first[:5000]), voice
        )


class TestIsFingerprint:
    def test_rejects_non_hex(self) -> None:
        assert not is_fingerprint("z" * 64)
        assert not is_fingerprint("A" * 64)
        assert not is_fingerprint("a" * 63)
        assert not is_fingerprint("../" + "a" * 61)
        assert not is_fingerprint("")

"""Unit tests for the TTSProvider abstract base class."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from docvoice.providers.base import TTSProvider
from docvoice.tts.models import VoiceInfo, VoiceSpec
from docvoice.tts.voices import resolve_voice


class CompleteProvider(TTSProvider):
    """Provider implementing every abstract method."""

    name = "complete"

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        return f"{text}:{voice.voice_key}:{voice.language}".encode()

    async def list_voices(self) -> list[VoiceInfo]:
        return [VoiceInfo(voice_id="v1", name="Voice 1", provider=self.name)]


class IncompleteProvider(TTSProvider):
    """Provider missing list_voices."""

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        return b""


class TestTTSProvider:
    """Test the provider interface."""

    def test_cannot_instantiate_abstract_base(self) -> None:
        with pytest.raises(TypeError):
            TTSProvider()  # type: ignore[abstract]

    def test_incomplete_subclass_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            IncompleteProvider()  # type: ignore[abstract]

    def test_available_by_default(self) -> None:
        assert CompleteProvider().is_available() is True

    @pytest.mark.asyncio
    async def test_synthesize_receives_voice_spec(self) -> None:
        provider = CompleteProvider()
        audio = await provider.synthesize("Hola", resolve_voice(style="podcast"))
        assert audio == b"Hola:podcast:es"

    @pytest.mark.asyncio
    async def test_list_voices(self) -> None:
        voices = await CompleteProvider().list_voices()
        assert [v.voice_id for v in voices] == ["v1"]

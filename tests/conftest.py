"""Pytest configuration and fixtures for docvoice tests."""

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docvoice import config as config_module
from docvoice import core
from docvoice.cache.storage import AudioStore
from docvoice.providers.base import TTSProvider
from docvoice.tts.models import VoiceInfo, VoiceSpec

CREDENTIAL_ENV_VARS = (
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GOOGLE_CLOUD_PROJECT",
    "GCLOUD_PROJECT",
    "ELEVENLABS_API_KEY",
    "DOCVOICE_CACHE_DIR",
    "DOCVOICE_TEMP_DIR",
    "DOCVOICE_TIMEOUT",
    "DOCVOICE_PROVIDERS",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from real credentials, config files and caches."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    # Points the default-credentials lookup at an empty directory
    monkeypatch.setenv("CLOUDSDK_CONFIG", str(tmp_path / "gcloud"))
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "config.toml")
    monkeypatch.setenv("DOCVOICE_CACHE_DIR", str(tmp_path / "audio-cache"))
    monkeypatch.setenv("DOCVOICE_TEMP_DIR", str(tmp_path / "gtts-tmp"))

    config_module.reset_config_cache()
    core.set_pipeline(None)
    yield
    config_module.reset_config_cache()
    core.set_pipeline(None)


class InMemoryAudioStore(AudioStore):
    """Dict-backed store double."""

    def __init__(self) -> None:
        self.entries: dict[str, bytes] = {}
        self.init_calls = 0
        self.writes = 0

    def init(self) -> None:
        self.init_calls += 1

    def exists(self, fingerprint: str) -> bool:
        return fingerprint in self.entries

    def read(self, fingerprint: str) -> bytes | None:
        return self.entries.get(fingerprint)

    def write(self, fingerprint: str, audio: bytes) -> None:
        self.writes += 1
        self.entries[fingerprint] = audio

    def delete(self, fingerprint: str) -> bool:
        return self.entries.pop(fingerprint, None) is not None

    def fingerprints(self) -> list[str]:
        return sorted(self.entries)


class FakeProvider(TTSProvider):
    """Provider double that records calls.

    Args:
        name: Provider name reported to the chain
        audio: Bytes returned on success
        available: Value returned by is_available()
        errors: Exceptions raised by successive calls before succeeding
        delay: Seconds to sleep before answering
    """

    def __init__(
        self,
        name: str = "fake",
        audio: bytes = b"fake-audio",
        available: bool = True,
        errors: list[Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        self.audio = audio
        self.available = available
        self.errors = list(errors or [])
        self.delay = delay
        self.calls: list[tuple[str, VoiceSpec]] = []

    def is_available(self) -> bool:
        return self.available

    async def synthesize(self, text: str, voice: VoiceSpec) -> bytes:
        self.calls.append((text, voice))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.errors:
            raise self.errors.pop(0)
        return self.audio

    async def list_voices(self) -> list[VoiceInfo]:
        return [VoiceInfo(voice_id=self.name, name=self.name, provider=self.name)]


@pytest.fixture
def memory_store() -> InMemoryAudioStore:
    return InMemoryAudioStore()


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Factory for FakeProvider instances."""
    return FakeProvider

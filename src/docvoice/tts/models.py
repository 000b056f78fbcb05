"""TTS data models with validation."""

from dataclasses import dataclass
from enum import Enum


class VoiceType(str, Enum):
    """Base voice character requested by the caller."""

    FEMININE = "feminine"
    MASCULINE = "masculine"


class VoiceStyle(str, Enum):
    """Optional delivery style layered over the voice type."""

    PROFESSORIAL = "professorial"
    PODCAST = "podcast"
    BEDTIME_STORY = "bedtime-story"


@dataclass(frozen=True)
class VoiceSpec:
    """Canonical description of the voice a request wants.

    Args:
        type: Voice type, always concrete (defaults to feminine upstream)
        language: Primary language subtag from the supported set (e.g. "es")
        style: Optional style; wins over type when a backend picks a voice
        description: Optional free-text description of the voice
    """

    type: VoiceType
    language: str
    style: VoiceStyle | None = None
    description: str | None = None

    @property
    def voice_key(self) -> str:
        """Style value if a style is set, otherwise the type value."""
        return self.style.value if self.style else self.type.value


@dataclass
class VoiceInfo:
    """Information about a voice a backend can use.

    Args:
        voice_id: Unique identifier for the voice
        name: Human-readable name of the voice
        language: Language code the voice speaks
        provider: Name of the backend that owns the voice
    """

    voice_id: str
    name: str
    language: str | None = None
    provider: str | None = None

    def __post_init__(self) -> None:
        """Validate voice information."""
        if not self.voice_id or not self.voice_id.strip():
            raise ValueError("voice_id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")


@dataclass(frozen=True)
class AudioParams:
    """Cloud synthesis audio parameters.

    Args:
        speaking_rate: Speaking rate (0.25-4.0, 1.0 is normal)
        pitch: Pitch shift in semitones (-20.0 to 20.0)
        volume_gain_db: Volume gain in dB (-96.0 to 16.0)
    """

    speaking_rate: float = 1.0
    pitch: float = 0.0
    volume_gain_db: float = 0.0

    def __post_init__(self) -> None:
        """Validate audio parameters."""
        if not 0.25 <= self.speaking_rate <= 4.0:
            raise ValueError("speaking_rate must be between 0.25 and 4.0")
        if not -20.0 <= self.pitch <= 20.0:
            raise ValueError("pitch must be between -20.0 and 20.0")
        if not -96.0 <= self.volume_gain_db <= 16.0:
            raise ValueError("volume_gain_db must be between -96.0 and 16.0")


@dataclass
class VoiceSettings:
    """ElevenLabs voice generation settings.

    Args:
        stability: Voice stability (0.0-1.0)
        similarity_boost: Voice similarity boost (0.0-1.0)
        style: Voice style exaggeration (0.0-1.0)
        use_speaker_boost: Whether to use speaker boost
        speaking_rate: Speaking rate (0.7-1.2)
    """

    stability: float = 0.65
    similarity_boost: float = 0.75
    style: float = 0.25
    use_speaker_boost: bool = True
    speaking_rate: float = 1.0

    def __post_init__(self) -> None:
        """Validate voice settings."""
        if not 0.0 <= self.stability <= 1.0:
            raise ValueError("stability must be between 0.0 and 1.0")
        if not 0.0 <= self.similarity_boost <= 1.0:
            raise ValueError("similarity_boost must be between 0.0 and 1.0")
        if not 0.0 <= self.style <= 1.0:
            raise ValueError("style must be between 0.0 and 1.0")
        if not 0.7 <= self.speaking_rate <= 1.2:
            raise ValueError("speaking_rate must be between 0.7 and 1.2")

    def to_dict(self) -> dict:
        return {
            "stability": self.stability,
            "similarity_boost": self.similarity_boost,
            "style": self.style,
            "use_speaker_boost": self.use_speaker_boost,
            "speed": self.speaking_rate,
        }


@dataclass(frozen=True)
class SynthesisResult:
    """Audio produced by one backend. Never stored, only passed along."""

    audio: bytes
    backend: str


@dataclass(frozen=True)
class SpeechResult:
    """Outcome of a pipeline request.

    Args:
        audio: Encoded audio bytes
        fingerprint: Cache key the audio is stored under
        cached: True if the audio came from the store
        backend: Backend that synthesized the audio (None on cache hits)
    """

    audio: bytes
    fingerprint: str
    cached: bool
    backend: str | None = None

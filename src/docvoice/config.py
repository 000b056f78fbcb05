"""Configuration management for docvoice.

Loads configuration from ~/.config/docvoice/config.toml, falling back to the
built-in defaults when the file does not exist.
Priority chain: CLI flags > env vars > config file > defaults.
"""

import os
import tempfile
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "docvoice"
CONFIG_PATH = CONFIG_DIR / "config.toml"

AUDIO_ENCODINGS = ("MP3", "LINEAR16", "OGG_OPUS")

DEFAULT_CONFIG = """\
# docvoice configuration

[cache]
# Directory holding {fingerprint}.audio files
dir = "~/.cache/docvoice/audio"

# Also check style variants (professorial, podcast, bedtime-story)
# when invalidating a document's cached audio
invalidate_styles = false

[synthesis]
# Backends tried in order: "google", "elevenlabs", "gtts"
providers = ["google", "gtts"]

# Seconds before a backend call is abandoned and the next one is tried
timeout = 30.0

[google]
# Service account JSON file; GOOGLE_APPLICATION_CREDENTIALS overrides
credentials = ""

# Project id; GOOGLE_CLOUD_PROJECT overrides
project = ""

# "MP3", "LINEAR16" or "OGG_OPUS"
audio_encoding = "MP3"

[gtts]
# Scratch directory for gTTS output files (system temp dir if empty)
temp_dir = ""

# Google Translate host suffix used by gTTS
tld = "com"

[elevenlabs]
model = "eleven_multilingual_v2"

# API keys are read from environment variables, not this file:
#   ELEVENLABS_API_KEY  - ElevenLabs provider
"""


@dataclass(frozen=True)
class CacheConfig:
    """Audio cache configuration."""

    dir: Path
    invalidate_styles: bool


@dataclass(frozen=True)
class SynthesisConfig:
    """Provider chain configuration."""

    providers: tuple[str, ...]
    timeout: float


@dataclass(frozen=True)
class GoogleConfig:
    """Google Cloud Text-to-Speech configuration."""

    credentials: str | None
    project: str | None
    audio_encoding: str


@dataclass(frozen=True)
class GTTSConfig:
    """gTTS fallback configuration."""

    temp_dir: Path
    tld: str


@dataclass(frozen=True)
class ElevenLabsConfig:
    """ElevenLabs configuration."""

    model: str


@dataclass(frozen=True)
class DocvoiceConfig:
    """Top-level docvoice configuration."""

    cache: CacheConfig
    synthesis: SynthesisConfig
    google: GoogleConfig
    gtts: GTTSConfig
    elevenlabs: ElevenLabsConfig


_cached_config: DocvoiceConfig | None = None


def generate_config(path: Path | None = None) -> Path:
    """Write the default config file, creating parent directories."""
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG)
    return path


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_providers(raw: object) -> tuple[str, ...]:
    if isinstance(raw, str):
        names = [part.strip() for part in raw.split(",")]
    elif isinstance(raw, list | tuple):
        names = [str(part).strip() for part in raw]
    else:
        raise ValueError("synthesis.providers must be a list of provider names")

    providers = tuple(name.lower() for name in names if name)
    if not providers:
        raise ValueError("synthesis.providers must name at least one provider")
    return providers


def _parse_timeout(raw: object) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"synthesis.timeout must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"synthesis.timeout must be positive, got {timeout}")
    return timeout


def parse_config(data: dict) -> DocvoiceConfig:
    """Build a validated config from parsed TOML, applying env var overrides.

    Raises:
        ValueError: If a value is invalid
    """
    defaults = tomllib.loads(DEFAULT_CONFIG)

    def section(name: str) -> dict:
        return {**defaults[name], **data.get(name, {})}

    cache = section("cache")
    synthesis = section("synthesis")
    google = section("google")
    gtts = section("gtts")
    elevenlabs = section("elevenlabs")

    audio_encoding = str(google["audio_encoding"]).upper()
    if audio_encoding not in AUDIO_ENCODINGS:
        raise ValueError(
            f"google.audio_encoding must be one of {', '.join(AUDIO_ENCODINGS)}, "
            f"got {google['audio_encoding']!r}"
        )

    cache_dir = os.getenv("DOCVOICE_CACHE_DIR") or cache["dir"]
    temp_dir = os.getenv("DOCVOICE_TEMP_DIR") or gtts["temp_dir"]

    return DocvoiceConfig(
        cache=CacheConfig(
            dir=Path(cache_dir).expanduser(),
            invalidate_styles=bool(cache["invalidate_styles"]),
        ),
        synthesis=SynthesisConfig(
            providers=_parse_providers(
                os.getenv("DOCVOICE_PROVIDERS") or synthesis["providers"]
            ),
            timeout=_parse_timeout(
                os.getenv("DOCVOICE_TIMEOUT") or synthesis["timeout"]
            ),
        ),
        google=GoogleConfig(
            credentials=_optional(
                os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or google["credentials"]
            ),
            project=_optional(
                os.getenv("GOOGLE_CLOUD_PROJECT")
                or os.getenv("GCLOUD_PROJECT")
                or google["project"]
            ),
            audio_encoding=audio_encoding,
        ),
        gtts=GTTSConfig(
            temp_dir=(
                Path(temp_dir).expanduser()
                if _optional(temp_dir)
                else Path(tempfile.gettempdir()) / "docvoice"
            ),
            tld=_optional(gtts["tld"]) or "com",
        ),
        elevenlabs=ElevenLabsConfig(
            model=_optional(elevenlabs["model"]) or "eleven_multilingual_v2",
        ),
    )


def load_config(path: Path | None = None) -> DocvoiceConfig:
    """Load configuration from a config file with env var overrides.

    Without an explicit path the result is cached for the process.

    Args:
        path: Config file to read instead of ~/.config/docvoice/config.toml

    Returns:
        Loaded and validated DocvoiceConfig.

    Raises:
        ValueError: If the config file contains invalid values.
    """
    global _cached_config
    if path is None and _cached_config is not None:
        return _cached_config

    config_path = path or CONFIG_PATH
    data: dict = {}
    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

    config = parse_config(data)
    if path is None:
        _cached_config = config
    return config


def reset_config_cache() -> None:
    global _cached_config
    _cached_config = None

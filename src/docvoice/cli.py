"""Typer CLI definition for docvoice."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from . import config
from .core import get_pipeline, list_available_voices
from .tts.errors import AudioStoreError, SynthesisChainError

app = typer.Typer(help="Synthesize and cache speech for document text")


def configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def read_text(text: str | None, file: Path | None, debug: bool) -> str:
    """Get text from argument, file, or stdin (in priority order)."""
    if text is None:
        if file:
            try:
                text = file.read_text()
            except FileNotFoundError as e:
                if debug:
                    typer.echo(f"Debug - File not found: {file} ({e!r})", err=True)
                else:
                    typer.echo(f"Error: File not found: {file}", err=True)
                raise typer.Exit(1) from None
            except PermissionError as e:
                if debug:
                    typer.echo(f"Debug - Permission denied: {file} ({e!r})", err=True)
                else:
                    typer.echo(
                        f"Error: Permission denied reading file: {file}", err=True
                    )
                raise typer.Exit(1) from None
            except UnicodeDecodeError as e:
                if debug:
                    typer.echo(f"Debug - Decode error: {file} ({e!r})", err=True)
                else:
                    typer.echo(
                        f"Error: Unable to decode file as text: {file}", err=True
                    )
                raise typer.Exit(1) from None
        elif not sys.stdin.isatty():
            text = sys.stdin.read()

    if text is None:
        typer.echo("Error: No text provided", err=True)
        raise typer.Exit(1)

    return text


@app.command()
def speak(
    text: str | None = typer.Argument(None, help="Text to convert to speech"),
    file: Path | None = typer.Option(None, "-f", "--file", help="Read text from file"),
    output: Path = typer.Option(
        Path("speech.mp3"), "-o", "--output", help="File to write the audio to"
    ),
    voice_type: str | None = typer.Option(
        None, "-t", "--voice-type", help="feminine (default) or masculine"
    ),
    style: str | None = typer.Option(
        None, "-s", "--style", help="professorial, podcast or bedtime-story"
    ),
    description: str | None = typer.Option(
        None, "--description", help="Free-text voice description"
    ),
    language: str | None = typer.Option(
        None, "-l", "--language", help="Language code, e.g. es or en-US (default es)"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and cache activity"
    ),
) -> None:
    """Convert text to speech, reusing cached audio when possible."""
    configure_logging(debug)
    source_text = read_text(text, file, debug)

    try:
        result = asyncio.run(
            get_pipeline().process(
                source_text,
                voice_type=voice_type,
                style=style,
                description=description,
                language=language,
            )
        )
        output.write_bytes(result.audio)
    except SynthesisChainError as e:
        if debug:
            typer.echo(f"Debug - Synthesis error: {e!r}", err=True)
        else:
            typer.echo(f"Error: No provider could synthesize the text: {e}", err=True)
        raise typer.Exit(1) from None
    except AudioStoreError as e:
        if debug:
            typer.echo(f"Debug - Audio cache error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Audio cache failure: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        if debug:
            typer.echo(f"Debug - File system error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to save audio file: {e}", err=True)
        raise typer.Exit(1) from None
    except ValueError as e:
        if debug:
            typer.echo(f"Debug - Text processing error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    source = "cache" if result.cached else result.backend
    typer.echo(f"Audio saved to {output} ({source}, {result.fingerprint[:8]})")


@app.command()
def invalidate(
    text: str | None = typer.Argument(None, help="Document text"),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read document text from file"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show verbose error messages"),
) -> None:
    """Remove cached audio synthesized from a document's text."""
    configure_logging(debug)
    document_text = read_text(text, file, debug)

    try:
        removed = get_pipeline().invalidate_for_document(document_text)
    except AudioStoreError as e:
        if debug:
            typer.echo(f"Debug - Audio cache error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Audio cache failure: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Removed {removed} cached audio entries")


@app.command()
def voices(
    provider: str = typer.Option("google", "-p", "--provider", help="TTS provider"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose error messages"),
) -> None:
    """List the voices a provider maps voice types and styles onto."""
    configure_logging(debug)
    try:
        voice_list = asyncio.run(list_available_voices(provider))
    except Exception as e:
        if debug:
            typer.echo(f"Debug - Failed to list voices: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to list voices: {e}", err=True)
        raise typer.Exit(1) from None

    for voice in voice_list:
        language = f" [{voice.language}]" if voice.language else ""
        typer.echo(f"{voice.name}: {voice.voice_id}{language}")


@app.command("cache-info")
def cache_info() -> None:
    """Show cache location, entry count and size."""
    try:
        stats = get_pipeline().cache_stats()
    except AudioStoreError as e:
        typer.echo(f"Error: Audio cache failure: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Location: {stats.location}")
    typer.echo(f"Entries: {stats.entries}")
    typer.echo(f"Size: {stats.total_bytes} bytes")


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default config file to ~/.config/docvoice/config.toml."""
    if config.CONFIG_PATH.exists() and not force:
        typer.echo(
            f"Config already exists at {config.CONFIG_PATH} "
            "(use --force to overwrite)"
        )
        raise typer.Exit(1)
    path = config.generate_config()
    typer.echo(f"Wrote {path}")

"""docvoice - cached, multi-provider speech synthesis for documents."""

__version__ = "0.1.0"
__all__ = ["invalidate_for_document", "synthesize_speech"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in ("synthesize_speech", "invalidate_for_document"):
        from . import core

        return getattr(core, name)
    raise AttributeError(f"module 'docvoice' has no attribute {name!r}")

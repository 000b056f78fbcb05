"""Entry point for running docvoice as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the docvoice CLI application."""
    app()


if __name__ == "__main__":
    main()

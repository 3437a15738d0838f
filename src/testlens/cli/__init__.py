"""CLI package for testlens."""

from testlens.cli.app import app


def main() -> None:
    """Main entry point for the CLI."""
    app(prog_name="testlens")


__all__ = ["app", "main"]

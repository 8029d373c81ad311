"""Command line interface."""

from hindsight_memory.cli.app import app

__all__ = ["app"]

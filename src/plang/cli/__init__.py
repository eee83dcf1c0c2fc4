"""Command line interface."""

from plang.cli.app import app, main

__all__ = ["app", "main"]

"""Command line interface for jsonmodel."""

from jsonmodel.cli.main import app, main

__all__ = ["app", "main"]

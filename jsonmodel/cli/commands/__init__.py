"""CLI commands for jsonmodel."""

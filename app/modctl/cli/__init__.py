"""Command-line interface for modctl."""

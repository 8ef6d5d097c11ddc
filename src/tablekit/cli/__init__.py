"""Command-line interface for tablekit."""

"""Command-line interface for typedconf."""

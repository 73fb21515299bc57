"""Command-line interface for mirrorfs."""

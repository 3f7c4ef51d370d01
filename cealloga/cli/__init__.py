"""Command-line interface for cealloga."""

"""Command-line interface for fileserver-governance."""

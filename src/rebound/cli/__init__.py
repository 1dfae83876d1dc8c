"""Command-line interface for rebound."""

"""Command-line interface for the commit bot."""

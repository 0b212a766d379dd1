"""Command-line interface for shellguard."""

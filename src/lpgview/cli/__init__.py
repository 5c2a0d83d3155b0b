"""Command line interface for lpgview."""

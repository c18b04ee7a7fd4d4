"""Command line interface for Black Magic."""

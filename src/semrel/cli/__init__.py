"""Command line interface for semrel."""

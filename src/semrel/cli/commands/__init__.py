"""semrel CLI commands."""

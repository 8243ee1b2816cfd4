"""semrel: semantic version releases from GitHub Actions."""

from __future__ import annotations

__version__ = "0.1.0"

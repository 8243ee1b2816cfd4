"""Configuration management for semrel."""

from __future__ import annotations

from semrel.config.loader import ActionInputs, WorkflowContext, load_config
from semrel.config.models import (
    GitHubConfig,
    LabelsConfig,
    ReleaseMode,
    SemrelConfig,
    VersionBump,
    VersionSelection,
)

__all__ = [
    "ActionInputs",
    "GitHubConfig",
    "LabelsConfig",
    "ReleaseMode",
    "SemrelConfig",
    "VersionBump",
    "VersionSelection",
    "load_config",
    "WorkflowContext",
]

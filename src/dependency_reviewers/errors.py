"""Error hierarchy shared by every external-call boundary."""

from __future__ import annotations


class ActionError(RuntimeError):
    """Base error for failures that abort the run."""


class ConfigError(ActionError):
    """Raised when the action inputs or event payload are missing or invalid."""


class LoaderError(ConfigError):
    """Raised when a loader identifier cannot be resolved to an implementation."""


class LoadError(ActionError):
    """Raised when a loader cannot parse a dependency file."""


class GitError(ActionError):
    """Raised when git cannot fetch the base branch or show a file from it."""


class ResolverError(ActionError):
    """Raised when dependency owners cannot be resolved."""


class GitHubError(ActionError):
    """Raised when a GitHub REST API call fails."""

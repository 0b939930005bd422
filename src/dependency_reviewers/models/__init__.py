"""Data models for the dependency reviewer action."""

from __future__ import annotations

from .dependency import Dependency
from .event import Event, PullRequest, Repository
from .result import RunResult, RunStatus

__all__ = [
    "Dependency",
    "Event",
    "PullRequest",
    "Repository",
    "RunResult",
    "RunStatus",
]

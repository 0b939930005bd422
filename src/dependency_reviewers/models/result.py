"""Outcome of a single action run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RunStatus(str, Enum):
    NOT_A_PULL_REQUEST = "not-a-pull-request"
    NO_CHANGES = "no-changes"
    NO_REVIEWERS = "no-reviewers"
    REQUESTED = "requested"
    FAILED = "failed"


@dataclass(slots=True)
class RunResult:
    """What the run did, and the reviewers to report as the action output."""

    status: RunStatus
    changed: list[str] = field(default_factory=list)
    reviewers: list[str] = field(default_factory=list)
    owners: dict[str, list[str]] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not RunStatus.FAILED

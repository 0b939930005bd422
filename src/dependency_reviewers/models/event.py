"""Typed views of the GitHub event payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _login(data: Any) -> str:
    if isinstance(data, dict):
        login = data.get("login")
        if isinstance(login, str):
            return login
    return ""


@dataclass(frozen=True)
class Repository:
    """Repository the event was raised for."""

    owner: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Repository:
        return cls(owner=_login(data.get("owner")), name=str(data.get("name") or ""))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequest:
    """The subset of a pull request payload needed to request reviewers."""

    number: int
    base_ref: str
    author: str
    requested_reviewers: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PullRequest:
        base = data.get("base") or {}
        requested = tuple(
            login
            for login in (_login(item) for item in data.get("requested_reviewers") or [])
            if login
        )
        return cls(
            number=int(data.get("number") or 0),
            base_ref=str(base.get("ref") or ""),
            author=_login(data.get("user")),
            requested_reviewers=requested,
        )

    @property
    def excluded_reviewers(self) -> set[str]:
        """Identities that must not be requested again."""
        excluded = set(self.requested_reviewers)
        if self.author:
            excluded.add(self.author)
        return excluded


@dataclass(frozen=True)
class Event:
    """Triggering event; ``pull_request`` is None for non pull request events."""

    pull_request: PullRequest | None = None
    repository: Repository | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Event:
        pr_data = payload.get("pull_request")
        repo_data = payload.get("repository")
        return cls(
            pull_request=PullRequest.from_dict(pr_data) if isinstance(pr_data, dict) else None,
            repository=Repository.from_dict(repo_data) if isinstance(repo_data, dict) else None,
        )

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

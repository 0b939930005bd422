"""Minimal GitHub REST client for requesting pull request reviewers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import requests

from .config import DEFAULT_API_URL
from .errors import GitHubError

logger = logging.getLogger(__name__)


def split_reviewers(identities: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split identities into (users, team slugs).

    Teams are written ``org/team-slug`` (optionally with a leading ``@``); the
    API wants only the slug.
    """
    users: list[str] = []
    teams: list[str] = []
    for identity in identities:
        identity = identity.lstrip("@")
        if "/" in identity:
            teams.append(identity.split("/", 1)[1])
        else:
            users.append(identity)
    return users, teams


class GitHubClient:
    """Wraps the one REST call the action makes."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
        timeout: float = 10,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github+json",
        }

    def request_reviewers(
        self,
        owner: str,
        repo: str,
        number: int,
        reviewers: Iterable[str],
    ) -> dict[str, Any]:
        """Request ``reviewers`` on pull request ``owner/repo#number``.

        Raises:
            GitHubError: On transport failure or a non-2xx response.
        """
        users, teams = split_reviewers(reviewers)
        url = f"{self.api_url}/repos/{owner}/{repo}/pulls/{number}/requested_reviewers"
        payload: dict[str, list[str]] = {"reviewers": users}
        if teams:
            payload["team_reviewers"] = teams

        logger.debug("POST %s %s", url, payload)
        target = f"{owner}/{repo}#{number}"
        try:
            response = self.session.post(
                url, json=payload, headers=self.headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise GitHubError(f"Failed to request reviewers on {target}: {exc}") from exc

        if not response.ok:
            raise GitHubError(
                f"Unexpected status code {response.status_code} requesting reviewers "
                f"on {target}: {response.text.strip()}"
            )

        try:
            return response.json()
        except ValueError:
            return {}

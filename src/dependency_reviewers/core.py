"""Core orchestration entrypoint.

This module MUST NOT read the process environment or resolve collaborators
itself: the caller builds the ``ActionConfig`` and passes in the loader,
resolver, revision fetcher and GitHub client, so the same flow runs in the
Action wrapper, the local CLI and tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol
from collections.abc import Iterable

from .config import ActionConfig
from .diff import diff_dependencies
from .errors import ActionError, ConfigError, GitError, GitHubError, LoadError, ResolverError
from .loaders import Loader
from .models import Dependency, Event, RunResult, RunStatus
from .owners import Resolver, flatten_owners

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, ref: str, path: str) -> Path: ...


class ReviewRequester(Protocol):
    def request_reviewers(
        self, owner: str, repo: str, number: int, reviewers: Iterable[str]
    ) -> dict[str, Any]: ...


def normalise_identity(identity: str) -> str:
    """Return ``identity`` without surrounding whitespace or a leading ``@``."""
    return identity.strip().lstrip("@")


def select_reviewers(candidates: Iterable[str], excluded: Iterable[str]) -> list[str]:
    """Return ``candidates - excluded`` as a sorted list of normalised identities."""
    wanted = {normalise_identity(name) for name in candidates}
    skip = {normalise_identity(name) for name in excluded}
    return sorted(name for name in wanted - skip if name)


def _fetch_base(fetcher: Fetcher, ref: str, path: str) -> Path:
    try:
        return fetcher.fetch(ref, path)
    except ActionError:
        raise
    except Exception as exc:
        raise GitError(f"Fetching {path} from origin/{ref} failed: {exc}") from exc


def _load(loader: Loader, path: Path) -> list[Dependency]:
    try:
        return list(loader.load(path))
    except ActionError:
        raise
    except Exception as exc:
        raise LoadError(f"Loading {path} failed: {exc}") from exc


def _request(
    client: ReviewRequester, owner: str, repo: str, number: int, reviewers: list[str]
) -> None:
    try:
        client.request_reviewers(owner, repo, number, reviewers)
    except ActionError:
        raise
    except Exception as exc:
        target = f"{owner}/{repo}#{number}"
        raise GitHubError(f"Requesting reviewers on {target} failed: {exc}") from exc


def _resolve_owners(
    resolver: Resolver,
    config: ActionConfig,
    changed: list[str],
    loader: Loader,
) -> dict[str, list[str]]:
    try:
        owners = resolver.resolve(
            config_file=config.owners_file,
            dependencies=changed,
            dependency_file=config.dependency_file,
            loader=loader,
        )
    except ActionError:
        raise
    except Exception as exc:
        raise ResolverError(f"Owner resolution failed: {exc}") from exc
    return {str(group): list(reviewers) for group, reviewers in (owners or {}).items()}


def run(
    config: ActionConfig,
    event: Event,
    *,
    loader: Loader,
    resolver: Resolver,
    fetcher: Fetcher,
    client: ReviewRequester,
    dry_run: bool = False,
) -> RunResult:
    """Request reviewers for dependencies changed by the pull request in ``event``.

    Every failure at an external boundary (git, loader, resolver, REST call)
    ends the run: it is returned as a ``failed`` result rather than raised,
    and nothing is retried.
    """
    pr = event.pull_request
    if pr is None:
        logger.info("Event is not a pull request; nothing to do")
        return RunResult(status=RunStatus.NOT_A_PULL_REQUEST)

    changed: list[str] = []
    owners: dict[str, list[str]] = {}
    try:
        if event.repository is None or not event.repository.owner or not event.repository.name:
            raise ConfigError("Event payload has no repository owner/name")
        if not pr.base_ref:
            raise ConfigError("Pull request payload has no base ref")
        if not pr.number:
            raise ConfigError("Pull request payload has no number")

        base_path = _fetch_base(fetcher, pr.base_ref, config.dependency_file)
        current = _load(loader, Path(config.dependency_file))
        base = _load(loader, base_path)

        changed = diff_dependencies(base, current)
        if not changed:
            logger.info("No dependency changes in %s", config.dependency_file)
            return RunResult(status=RunStatus.NO_CHANGES)
        logger.info("Changed dependencies: %s", ", ".join(changed))

        owners = _resolve_owners(resolver, config, changed, loader)
        reviewers = select_reviewers(flatten_owners(owners), pr.excluded_reviewers)
        if not reviewers:
            logger.info("No reviewers left to request")
            return RunResult(status=RunStatus.NO_REVIEWERS, changed=changed, owners=owners)

        if dry_run:
            logger.info("Dry run; would request %s", ", ".join(reviewers))
        else:
            _request(client, event.repository.owner, event.repository.name, pr.number, reviewers)
            logger.info("Requested reviewers: %s", ", ".join(reviewers))
    except ActionError as exc:
        return RunResult(status=RunStatus.FAILED, changed=changed, owners=owners, error=str(exc))

    return RunResult(
        status=RunStatus.REQUESTED, changed=changed, reviewers=reviewers, owners=owners
    )

"""GitHub Action entrypoint: request reviewers for changed dependencies.

Reads action inputs from ``INPUT_*`` variables; the flags below override them
so the step can also be run by hand outside of Actions.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from collections.abc import Mapping

from .config import ActionConfig, load_config, read_event
from .core import run
from .errors import ActionError
from .git import RevisionFetcher
from .github import GitHubClient
from .loaders import resolve_loader
from .models import RunStatus
from .outputs import write_reviewers_output, write_summary
from .owners import ConfigOwnerResolver


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--event", type=Path, default=None, help="Path to the event JSON payload")
    parser.add_argument("--dependency-file", default=None, help="Dependency file to diff")
    parser.add_argument("--loader", default=None, help="Built-in loader ID or loader module path")
    parser.add_argument("--config-file", default=None, help="Owners file (YAML)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve reviewers but do not call the GitHub API",
    )
    return parser.parse_args(argv)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _seed_inputs(args: argparse.Namespace, environ: Mapping[str, str]) -> dict[str, str]:
    env = dict(environ)
    for name, value in (
        ("INPUT_DEPENDENCY-FILE", args.dependency_file),
        ("INPUT_LOADER", args.loader),
        ("INPUT_CONFIG-FILE", args.config_file),
    ):
        if value:
            env[name] = value
    return env


def _build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> ActionConfig:
    config = load_config(_seed_inputs(args, environ), require_token=not args.dry_run)
    return config.with_overrides(event_path=args.event)


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = parse_args(argv)
    environ = os.environ if environ is None else environ

    try:
        config = _build_config(args, environ)
        _configure_logging(config.debug)
        event = read_event(config.event_path)

        if not event.is_pull_request:
            print("Not a pull request event; no reviewers requested.")
            write_reviewers_output(config.output_path, [])
            return 0

        cwd = Path.cwd()
        loader = resolve_loader(config.loader, config.loader_search_paths(cwd))
    except ActionError as exc:
        print(f"::error::{exc}", file=sys.stderr)
        return 1

    result = run(
        config,
        event,
        loader=loader,
        resolver=ConfigOwnerResolver(root=cwd),
        fetcher=RevisionFetcher(repo_root=cwd, staging_root=config.staging_root),
        client=GitHubClient(config.github_token, api_url=config.api_url),
        dry_run=args.dry_run,
    )

    if result.status is RunStatus.FAILED:
        print(f"::error::{result.error}", file=sys.stderr)
        return 1

    write_reviewers_output(config.output_path, result.reviewers)
    write_summary(config.summary_path, result, config.dependency_file)

    if result.reviewers:
        verb = "Would request" if args.dry_run else "Requested"
        print(f"{verb} reviewers: {', '.join(result.reviewers)}")
    else:
        print(f"No reviewers requested ({result.status.value}).")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

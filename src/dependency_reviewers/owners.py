"""Map changed dependencies to the reviewers that own them.

The owners file is YAML::

    owners:
      frontend:
        reviewers: [alice, my-org/web-team]
        dependencies: ["react", "react-*", "@types/*"]
        files: ["web/package.json"]

A group matches when one of its ``dependencies`` glob patterns matches a
changed dependency name and, if ``files`` is given, one of those globs matches
the dependency file being diffed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Any, Protocol
from collections.abc import Iterable, Sequence

import yaml
from jsonschema import Draft202012Validator

from .errors import ResolverError
from .loaders import Loader

logger = logging.getLogger(__name__)

OWNERS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["owners"],
    "properties": {
        "owners": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["reviewers", "dependencies"],
                "properties": {
                    "reviewers": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                    },
                    "dependencies": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                    },
                    "files": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                    },
                },
                "additionalProperties": False,
            },
        }
    },
}


class Resolver(Protocol):
    """Structural protocol for owner resolution."""

    def resolve(
        self,
        *,
        config_file: str,
        dependencies: Sequence[str],
        dependency_file: str,
        loader: Loader,
    ) -> dict[str, list[str]]: ...


@dataclass(slots=True, frozen=True)
class OwnerRule:
    """One owner group from the owners file."""

    group: str
    reviewers: tuple[str, ...]
    patterns: tuple[str, ...]
    files: tuple[str, ...] = ()

    def applies_to_file(self, dependency_file: str) -> bool:
        if not self.files:
            return True
        path = PurePosixPath(Path(dependency_file).as_posix())
        return any(path.match(pattern) or fnmatchcase(str(path), pattern) for pattern in self.files)

    def matches(self, name: str) -> bool:
        return any(fnmatchcase(name, pattern) for pattern in self.patterns)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def parse_owner_rules(data: Any) -> list[OwnerRule]:
    """Validate a decoded owners document and return its rules.

    Raises:
        ResolverError: If the document does not match the owners schema.
    """
    validator = Draft202012Validator(OWNERS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ResolverError("Invalid owners file:\n" + _format_errors(errors))

    return [
        OwnerRule(
            group=str(group),
            reviewers=tuple(entry["reviewers"]),
            patterns=tuple(entry["dependencies"]),
            files=tuple(entry.get("files", ())),
        )
        for group, entry in data["owners"].items()
    ]


def load_owner_rules(path: Path) -> list[OwnerRule]:
    """Read and validate the owners file at ``path``."""
    if not path.exists():
        raise ResolverError(f"Owners file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResolverError(f"Failed to read owners file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ResolverError(f"Invalid YAML in owners file: {exc}") from exc

    return parse_owner_rules(data)


class ConfigOwnerResolver:
    """Resolve owners from a YAML owners file relative to ``root``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root

    def resolve(
        self,
        *,
        config_file: str,
        dependencies: Sequence[str],
        dependency_file: str,
        loader: Loader,
    ) -> dict[str, list[str]]:
        # ``loader`` is part of the resolver contract; rules here match on names only.
        path = Path(config_file)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        rules = load_owner_rules(path)

        owners: dict[str, list[str]] = {}
        for rule in rules:
            if not rule.applies_to_file(dependency_file):
                continue
            matched = [name for name in dependencies if rule.matches(name)]
            if matched:
                logger.info("%s owns %s", rule.group, ", ".join(matched))
                owners[rule.group] = list(rule.reviewers)
        return owners


def flatten_owners(owners: dict[str, list[str]]) -> set[str]:
    """Collapse a group -> reviewers mapping into one set of identities."""
    return {reviewer for reviewers in owners.values() for reviewer in reviewers}

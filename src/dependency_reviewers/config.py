"""Action inputs and event payload loading.

GitHub Actions exposes ``with:`` inputs as ``INPUT_<NAME>`` environment
variables, upper-cased with hyphens preserved (``INPUT_DEPENDENCY-FILE``).
Everything the run needs is read here once and passed around as an
``ActionConfig`` so the core never touches ``os.environ`` itself.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from collections.abc import Mapping
from typing import Any

from .errors import ConfigError
from .models import Event

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_OWNERS_FILE = ".github/dependency-owners.yml"


@dataclass(frozen=True)
class ActionConfig:
    """Explicit configuration for one run."""

    dependency_file: str
    github_token: str
    loader: str
    config_file: str | None = None
    event_path: Path | None = None
    workspace: Path | None = None
    temp_dir: Path | None = None
    output_path: Path | None = None
    summary_path: Path | None = None
    api_url: str = DEFAULT_API_URL
    debug: bool = False

    @property
    def owners_file(self) -> str:
        return self.config_file or DEFAULT_OWNERS_FILE

    @property
    def staging_root(self) -> Path:
        """Directory used to stage files fetched from the base branch."""
        return self.temp_dir or Path(tempfile.gettempdir())

    def loader_search_paths(self, cwd: Path | None = None) -> list[Path]:
        """Return the directories a loader module is looked up in, in order."""
        paths = [cwd or Path.cwd()]
        if self.workspace is not None and self.workspace not in paths:
            paths.append(self.workspace)
        return paths

    def with_overrides(self, **changes: Any) -> ActionConfig:
        """Return a copy with non-None ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _get_input(environ: Mapping[str, str], name: str) -> str:
    """Return the value of an action input, trimmed.

    Both the runner's hyphenated spelling and an underscore spelling are
    accepted.
    """
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    for candidate in (key, key.replace("-", "_")):
        value = environ.get(candidate)
        if value is not None and value.strip():
            return value.strip()
    return ""


def _optional_path(environ: Mapping[str, str], name: str) -> Path | None:
    value = environ.get(name, "").strip()
    return Path(value) if value else None


def load_config(environ: Mapping[str, str], *, require_token: bool = True) -> ActionConfig:
    """Build an ``ActionConfig`` from action inputs and runner variables.

    Raises:
        ConfigError: If a required input is missing.
    """
    dependency_file = _get_input(environ, "dependency-file")
    github_token = _get_input(environ, "github-token")
    loader = _get_input(environ, "loader")

    missing = [
        name
        for name, value in (
            ("dependency-file", dependency_file),
            ("github-token", github_token if require_token else "-"),
            ("loader", loader),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required input(s): {', '.join(missing)}")

    return ActionConfig(
        dependency_file=dependency_file,
        github_token=github_token,
        loader=loader,
        config_file=_get_input(environ, "config-file") or None,
        event_path=_optional_path(environ, "GITHUB_EVENT_PATH"),
        workspace=_optional_path(environ, "GITHUB_WORKSPACE"),
        temp_dir=_optional_path(environ, "RUNNER_TEMP"),
        output_path=_optional_path(environ, "GITHUB_OUTPUT"),
        summary_path=_optional_path(environ, "GITHUB_STEP_SUMMARY"),
        api_url=(environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        debug=environ.get("RUNNER_DEBUG", "").strip() == "1",
    )


def read_event(path: Path | None) -> Event:
    """Load the triggering event payload.

    Raises:
        ConfigError: If the path is unset, unreadable or not a JSON object.
    """
    if path is None:
        raise ConfigError("GITHUB_EVENT_PATH is not set")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read event payload: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in event payload: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Event payload must be a JSON object")

    return Event.from_payload(data)

"""Action outputs: the ``reviewers`` value and the $GITHUB_STEP_SUMMARY page."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from collections.abc import Sequence

from .models import RunResult


def format_output(name: str, value: str) -> str:
    """Return a $GITHUB_OUTPUT entry, using a heredoc delimiter for multi-line values."""
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_reviewers_output(output_path: Path | None, reviewers: Sequence[str]) -> str:
    """Record ``reviewers`` as a JSON list; return the serialised value.

    When no output file is configured (local runs) the value is printed.
    """
    value = json.dumps(list(reviewers))
    if output_path is None:
        print(f"reviewers={value}")
        return value
    with output_path.open("a", encoding="utf-8") as fh:
        fh.write(format_output("reviewers", value))
    return value


def render_summary(result: RunResult, dependency_file: str) -> str:
    """Return a Markdown summary of changed dependencies and requested reviewers."""
    lines = []
    lines.append("# Dependency reviewers")
    lines.append("")
    lines.append(
        f"Dependency file: `{dependency_file}` | Changed: {len(result.changed)} | "
        f"Reviewers requested: {len(result.reviewers)}"
    )
    lines.append("")

    if not result.changed:
        lines.append("No dependency changes detected.")
        return "\n".join(lines) + "\n"

    lines.append("| Owner group | Reviewers |")
    lines.append("| --- | --- |")
    if result.owners:
        for group, reviewers in sorted(result.owners.items()):
            lines.append(f"| {group} | {', '.join(reviewers) or 'n/a'} |")
    else:
        lines.append("| (no owners matched) | n/a |")

    lines.append("")
    lines.append("Changed dependencies: " + ", ".join(f"`{name}`" for name in result.changed))
    return "\n".join(lines) + "\n"


def write_summary(summary_path: Path | None, result: RunResult, dependency_file: str) -> None:
    if summary_path is None:
        return
    with summary_path.open("a", encoding="utf-8") as fh:
        fh.write(render_summary(result, dependency_file))

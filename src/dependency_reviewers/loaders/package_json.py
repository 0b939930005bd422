"""Load dependencies declared in package.json across sections."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import Dependency

SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def load(path: Path) -> list[Dependency]:
    """Return one Dependency per declared name with its version expression.

    When a name appears in several sections the first section wins.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")

    found: dict[str, str] = {}
    for section in SECTIONS:
        deps = data.get(section) or {}
        for name, version in deps.items():
            found.setdefault(name, str(version))

    return Dependency.from_pairs(found.items())

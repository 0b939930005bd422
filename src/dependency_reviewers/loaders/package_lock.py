"""Load resolved dependencies from npm package-lock.json."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import Dependency

_NODE_MODULES = "node_modules/"


def load(path: Path) -> list[Dependency]:
    """Return (name, version) for every locked package.

    Supports npm v2+ ("packages" map) and falls back to the npm v1
    "dependencies" tree. When a package is installed at several depths the
    shallowest copy wins, so a top-level ``node_modules/<name>`` entry always
    takes precedence over nested copies regardless of key order.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))

    packages = data.get("packages")
    if isinstance(packages, dict):
        found: dict[str, tuple[int, str]] = {}
        for key, meta in packages.items():
            if not isinstance(meta, dict) or _NODE_MODULES not in key:
                continue
            name = key.rsplit(_NODE_MODULES, 1)[1]
            version = meta.get("version")
            if not name or not version:
                continue
            depth = key.count(_NODE_MODULES)
            if name not in found or depth < found[name][0]:
                found[name] = (depth, str(version))
        return Dependency.from_pairs((name, version) for name, (_, version) in found.items())

    top_level: dict[str, str] = {}
    deps = data.get("dependencies")
    if isinstance(deps, dict):
        for name, meta in deps.items():
            if isinstance(meta, dict) and "version" in meta:
                top_level.setdefault(name, str(meta["version"]))

    return Dependency.from_pairs(top_level.items())

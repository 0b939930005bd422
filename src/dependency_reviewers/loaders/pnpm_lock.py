"""Load resolved dependencies from pnpm-lock.yaml."""

from __future__ import annotations

from pathlib import Path

import yaml

from ..models import Dependency


def _split_key(key: str) -> tuple[str, str] | None:
    # Keys look like "/name@1.2.3", "/@scope/name@1.2.3" (v6) or
    # "name@1.2.3(peer@1.0.0)" (v9)
    ref = key.lstrip("/").split("(", 1)[0]
    if "@" not in ref[1:]:
        return None
    name, version = ref.rsplit("@", 1)
    if not name or not version:
        return None
    return name, version


def load(path: Path) -> list[Dependency]:
    """Return (name, version) from the pnpm lock "packages" map."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    pkgs = data.get("packages") or {}

    found: dict[str, str] = {}
    for key in pkgs.keys():
        if not isinstance(key, str):
            continue
        pair = _split_key(key)
        if pair is not None:
            found.setdefault(*pair)

    return Dependency.from_pairs(found.items())

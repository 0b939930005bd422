"""Load resolved dependencies from yarn.lock."""

from __future__ import annotations

from pathlib import Path

from ..models import Dependency


def _entry_name(header: str) -> str:
    first = header.split(",", 1)[0].strip().strip('"')
    if first.startswith("@"):
        idx = first.find("@", 1)
        return first[:idx] if idx != -1 else first
    return first.split("@", 1)[0]


def load(path: Path) -> list[Dependency]:
    """Return (name, version) for each lock entry; the first entry per name wins."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    found: dict[str, str] = {}

    current_name: str | None = None
    for raw in lines:
        line = raw.rstrip()
        if not line or line.startswith("#"):
            current_name = None
            continue
        if not line.startswith(" ") and line.endswith(":"):
            name = _entry_name(line[:-1])
            current_name = None if name == "__metadata" else name
            continue

        stripped = line.strip()
        if current_name and stripped.startswith("version"):
            part = stripped[len("version"):].lstrip(" :").strip()
            found.setdefault(current_name, part.strip('"'))

    return Dependency.from_pairs(found.items())

"""Load dependencies from a pip requirements file."""

from __future__ import annotations

from pathlib import Path

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from ..models import Dependency


def _strip_comment(line: str) -> str:
    # pip only treats "#" as a comment at line start or after whitespace
    if line.lstrip().startswith("#"):
        return ""
    return line.split(" #", 1)[0].strip()


def load(path: Path) -> list[Dependency]:
    """Return one Dependency per requirement; version is the specifier set.

    Option lines (``-r``, ``--index-url``) and editable installs are skipped.
    Names are canonicalised so ``Foo_Bar`` and ``foo-bar`` compare equal.
    """
    found: dict[str, str] = {}
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = _strip_comment(raw)
        if not line or line.startswith("-"):
            continue
        try:
            req = Requirement(line)
        except InvalidRequirement as exc:
            raise ValueError(f"Invalid requirement {line!r}: {exc}") from exc
        version = str(req.specifier) if req.specifier else (req.url or "")
        found.setdefault(canonicalize_name(req.name), version)

    return Dependency.from_pairs(found.items())

"""Compare two dependency lists."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Dependency


def diff_dependencies(base: Sequence[Dependency], current: Sequence[Dependency]) -> list[str]:
    """Return names added, removed or changed between ``base`` and ``current``.

    Added names come first (in ``current`` order), then removed names (in
    ``base`` order), then names whose version changed (in ``current`` order).
    Names are assumed unique within each list; no deduplication is done.
    """

    base_by_name = {dep.name: dep for dep in base}
    current_by_name = {dep.name: dep for dep in current}

    added = [dep.name for dep in current if dep.name not in base_by_name]
    removed = [dep.name for dep in base if dep.name not in current_by_name]
    changed = [
        dep.name
        for dep in current
        if dep.name in base_by_name and base_by_name[dep.name].version != dep.version
    ]

    return added + removed + changed

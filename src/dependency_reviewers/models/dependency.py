"""Dependency declaration model."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable


@dataclass(frozen=True)
class Dependency:
    """A named, versioned item declared in a dependency manifest."""

    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> list[Dependency]:
        return [cls(name=name, version=str(version)) for name, version in pairs]

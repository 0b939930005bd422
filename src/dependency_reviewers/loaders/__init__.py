"""Dependency file loaders and the registry used to resolve them by name.

A loader is anything with ``load(path) -> list[Dependency]``. Built-in
loaders are registered in ``LOADERS``; any other identifier is treated as a
path to a Python module exposing a ``load`` callable, looked up relative to
each search path in turn.
"""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from collections.abc import Callable, Sequence

from ..errors import LoadError, LoaderError
from ..models import Dependency
from . import package_json, package_lock, pnpm_lock, requirements, yarn_lock

logger = logging.getLogger(__name__)

LoadFunction = Callable[[Path], Sequence[Dependency]]


class Loader(Protocol):
    """Structural protocol for dependency file loaders."""

    def load(self, path: Path) -> list[Dependency]: ...


@dataclass(slots=True, frozen=True)
class FunctionLoader:
    """Bind a loader ID to its load function, wrapping failures as LoadError."""

    loader_id: str
    load_function: LoadFunction

    def load(self, path: Path) -> list[Dependency]:
        try:
            dependencies = list(self.load_function(Path(path)))
        except LoadError:
            raise
        except Exception as exc:
            raise LoadError(f"Loader '{self.loader_id}' failed to load {path}: {exc}") from exc
        logger.debug(
            "Loader %s read %d dependencies from %s", self.loader_id, len(dependencies), path
        )
        return dependencies


# Registry of built-in loaders, keyed by loader ID.
LOADERS: dict[str, FunctionLoader] = {
    "package-json": FunctionLoader("package-json", package_json.load),
    "package-lock": FunctionLoader("package-lock", package_lock.load),
    "pnpm-lock": FunctionLoader("pnpm-lock", pnpm_lock.load),
    "yarn-lock": FunctionLoader("yarn-lock", yarn_lock.load),
    "requirements": FunctionLoader("requirements", requirements.load),
}


def get_known_loader_ids() -> list[str]:
    """Return a sorted list of all built-in loader IDs."""
    return sorted(LOADERS.keys())


def _candidate_files(identifier: str, search_paths: Sequence[Path]) -> list[Path]:
    names = [identifier] if identifier.endswith(".py") else [f"{identifier}.py", identifier]
    candidates: list[Path] = []
    for root in search_paths:
        for name in names:
            path = Path(name)
            candidate = path if path.is_absolute() else root / path
            if candidate.is_dir():
                candidate = candidate / "__init__.py"
            candidates.append(candidate)
    return candidates


def _load_module_loader(identifier: str, path: Path) -> FunctionLoader:
    module_name = f"_dependency_reviewers_loader_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise LoaderError(f"Cannot import loader module from {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise LoaderError(f"Failed to import loader '{identifier}' from {path}: {exc}") from exc

    load_function = getattr(module, "load", None)
    if not callable(load_function):
        raise LoaderError(f"Loader module {path} does not define a callable 'load'")
    return FunctionLoader(identifier, load_function)


def resolve_loader(identifier: str, search_paths: Sequence[Path]) -> FunctionLoader:
    """Return the loader for ``identifier``.

    Raises:
        LoaderError: If the identifier is neither a built-in loader nor a
            module found under any of ``search_paths``.
    """
    builtin = LOADERS.get(identifier)
    if builtin is not None:
        return builtin

    for candidate in _candidate_files(identifier, search_paths):
        if candidate.is_file():
            logger.debug("Resolved loader %s to %s", identifier, candidate)
            return _load_module_loader(identifier, candidate)

    known = ", ".join(get_known_loader_ids())
    searched = ", ".join(str(p) for p in search_paths)
    raise LoaderError(
        f"Unable to resolve loader '{identifier}' (searched: {searched}). "
        f"Built-in loaders: {known}"
    )


__all__ = [
    "LOADERS",
    "FunctionLoader",
    "Loader",
    "get_known_loader_ids",
    "resolve_loader",
]

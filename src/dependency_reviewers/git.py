"""Fetch a dependency file as it exists on the base branch."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path, PurePosixPath

from .errors import GitError

logger = logging.getLogger(__name__)


def _repo_relative(path: str, repo_root: Path) -> str:
    """Return ``path`` in the ``<rev>:<path>`` form git show expects."""
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(repo_root.resolve())
        except ValueError as exc:
            raise GitError(f"{path} is outside the repository at {repo_root}") from exc
    return PurePosixPath(*candidate.parts).as_posix()


class RevisionFetcher:
    """Runs git in ``repo_root`` and stages base revisions under ``staging_root``."""

    def __init__(self, repo_root: Path, staging_root: Path, git: str = "git") -> None:
        self.repo_root = repo_root
        self.staging_root = staging_root
        self.git = git

    def _run(self, *args: str) -> str:
        cmd = [self.git, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_root,
                capture_output=True,
                encoding="utf-8",
                check=True,
            )
        except FileNotFoundError as exc:
            raise GitError(f"{self.git} executable not found") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitError(
                f"`{' '.join(cmd)}` failed with exit code {exc.returncode}: {stderr}"
            ) from exc
        return result.stdout

    def show(self, ref: str, path: str) -> str:
        """Return the content of ``path`` at the tip of ``origin/<ref>``."""
        relative = _repo_relative(path, self.repo_root)
        return self._run("show", f"origin/{ref}:{relative}")

    def fetch(self, ref: str, path: str) -> Path:
        """Fetch ``ref`` from origin and write its version of ``path`` to a temp file.

        The file keeps the original basename (loaders may dispatch on it) but
        lives in a fresh directory, so it never overwrites the working copy.
        """
        self._run("fetch", "origin", ref)
        content = self.show(ref, path)

        self.staging_root.mkdir(parents=True, exist_ok=True)
        staging_dir = Path(tempfile.mkdtemp(prefix="base-", dir=self.staging_root))
        target = staging_dir / Path(path).name
        target.write_text(content, encoding="utf-8")
        logger.debug("Staged origin/%s:%s at %s", ref, path, target)
        return target

#!/usr/bin/env python3
"""Local CLI entrypoint to run the reviewer request step outside of GitHub Actions.

Usage:
  python scripts/request_reviewers.py --event event.json \
      --dependency-file package.json --loader package-json [--dry-run]

This calls the same core ``run`` used by the Action wrapper. The GitHub token
is read from INPUT_GITHUB-TOKEN (or INPUT_GITHUB_TOKEN) unless --dry-run.
"""

from __future__ import annotations

from dependency_reviewers.action import main


if __name__ == "__main__":
    raise SystemExit(main())

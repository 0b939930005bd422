"""dependency-reviewers core package.

Requests pull request reviewers for changed dependency declarations. The
orchestration in ``core`` is callable from both the GitHub Action wrapper and
the local CLI script.
"""

__all__ = [
    "core",
]

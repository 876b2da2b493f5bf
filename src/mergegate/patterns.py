"""Glob matching for hotfix and feature branch patterns."""

from __future__ import annotations

from fnmatch import fnmatchcase

DEFAULT_HOTFIX_PATTERN = "hotfix/*"
DEFAULT_FEATURE_PATTERN = "feature/*"


def matches(pattern: str, branch_name: str) -> bool:
    """Return True when the whole branch name matches the glob pattern.

    Matching is case-sensitive and anchored at both ends, so ``feature/*``
    does not match ``my-feature/x``. An empty pattern matches nothing.
    """
    if not pattern or not pattern.strip():
        return False
    return fnmatchcase(branch_name, pattern)

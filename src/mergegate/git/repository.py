"""Repository access used by the blockage check."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from mergegate.git.exec import ExecError, run_git

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


class RepositoryError(RuntimeError):
    """Raised when the version-control backend cannot answer a query."""


class RefNotFoundError(RepositoryError):
    """Raised when a branch name does not resolve to a commit."""

    def __init__(self, ref: str):
        super().__init__(f"unable to resolve ref `{ref}` to a commit")
        self.ref = ref


class RepositoryPort(Protocol):
    """Read-only view of branch tips, ancestry and commit authors."""

    def resolve_ref(self, branch: str) -> str:
        """Return the commit id at the tip of ``branch``."""
        ...

    def is_ancestor(self, commit_a: str, commit_b: str) -> bool:
        """Return True when ``commit_a`` is reachable walking back from ``commit_b``."""
        ...

    def author_of(self, commit: str) -> str:
        """Return the author name of ``commit``."""
        ...


class GitRepository:
    """RepositoryPort backed by the local git binary.

    Branches resolve as remote-tracking refs (``origin/<branch>``) since CI
    checkouts rarely carry local copies of every workflow branch. Pass
    ``remote=None`` to resolve local branches instead.
    """

    def __init__(self, repo_root: Path, remote: str | None = DEFAULT_REMOTE):
        self.repo_root = repo_root.resolve()
        self.remote = remote or None

    def _qualify(self, branch: str) -> str:
        if self.remote is None:
            return f"refs/heads/{branch}"
        return f"refs/remotes/{self.remote}/{branch}"

    def resolve_ref(self, branch: str) -> str:
        ref = self._qualify(branch)
        try:
            result = run_git(
                ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
                repo_root=self.repo_root,
                check=False,
            )
        except ExecError as exc:
            raise RepositoryError(f"git unavailable while resolving `{ref}`: {exc}") from exc

        sha = result.stdout.strip()
        if result.returncode == 1 or (result.returncode == 0 and not sha):
            raise RefNotFoundError(ref)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            raise RepositoryError(f"git rev-parse {ref} failed ({result.returncode}): {detail}")

        logger.debug("resolved %s -> %s", ref, sha)
        return sha

    def is_ancestor(self, commit_a: str, commit_b: str) -> bool:
        try:
            result = run_git(
                ["merge-base", "--is-ancestor", commit_a, commit_b],
                repo_root=self.repo_root,
                check=False,
            )
        except ExecError as exc:
            raise RepositoryError(f"git unavailable while testing ancestry: {exc}") from exc

        # merge-base --is-ancestor: 0 = ancestor, 1 = not ancestor, anything else = error
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        detail = (result.stderr or result.stdout).strip()
        raise RepositoryError(
            f"git merge-base --is-ancestor {commit_a} {commit_b} failed ({result.returncode}): {detail}"
        )

    def author_of(self, commit: str) -> str:
        try:
            result = run_git(["show", "-s", "--format=%an", commit], repo_root=self.repo_root)
        except ExecError as exc:
            raise RepositoryError(f"unable to read author of {commit}: {exc}") from exc
        return result.stdout.strip()

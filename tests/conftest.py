"""Pytest configuration and fixtures for mergegate tests."""
import subprocess
from pathlib import Path

import pytest

_ACTION_ENV_VARS = (
    "GITHUB_HEAD_REF",
    "GITHUB_BASE_REF",
    "GITHUB_OUTPUT",
    "GITHUB_WORKSPACE",
    "INPUT_WORKFLOW",
    "INPUT_HOTFIX_PATTERN",
    "INPUT_FEATURE_PATTERN",
)


def pytest_sessionfinish(session, exitstatus):
    """Check that coverage data was collected if --cov was requested.

    This prevents silent "no data collected" scenarios that produce 0% coverage
    without failing the test run.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)
    if not cov_enabled:
        return

    coverage_files = list(Path.cwd().glob(".coverage*"))
    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'mergegate' (the package) not 'src/mergegate' (filesystem path).",
            returncode=1,
        )


@pytest.fixture(autouse=True)
def _clean_action_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a surrounding GitHub Actions run from leaking inputs into tests."""
    for name in _ACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _git(repo: Path, *args: str) -> str:
    completed = subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)
    return completed.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a repo with ``testing`` one commit (by Alice) ahead of ``production``.

    Both branches are also published as ``origin/*`` remote-tracking refs.
    """
    repo = tmp_path / "test_repo"
    repo.mkdir()

    _git(repo, "init")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# Test Repo\n")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-m", "Initial commit")
    _git(repo, "branch", "-M", "testing")
    _git(repo, "branch", "production")

    (repo / "change.txt").write_text("pending release\n")
    _git(repo, "add", "change.txt")
    _git(repo, "-c", "user.name=Alice", "-c", "user.email=alice@example.com", "commit", "-m", "Pending change")

    for branch in ("testing", "production"):
        sha = _git(repo, "rev-parse", f"refs/heads/{branch}")
        _git(repo, "update-ref", f"refs/remotes/origin/{branch}", sha)

    return repo


@pytest.fixture
def release_repo(git_repo: Path) -> Path:
    """Same repo after ``testing`` has been released into ``production``."""
    _git(git_repo, "checkout", "-q", "production")
    _git(git_repo, "merge", "--ff-only", "testing")
    _git(git_repo, "checkout", "-q", "testing")
    sha = _git(git_repo, "rev-parse", "refs/heads/production")
    _git(git_repo, "update-ref", "refs/remotes/origin/production", sha)
    return git_repo

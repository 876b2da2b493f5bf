"""Shared value types and errors for merge policy evaluation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ConfigurationError(ValueError):
    """Raised when workflow or policy configuration is invalid."""


class EvaluationError(RuntimeError):
    """Raised when repository state needed for a decision cannot be determined."""


class BranchClass(str, Enum):
    """Role a branch name plays under the configured policy."""

    HOTFIX = "hotfix"
    FEATURE = "feature"
    WORKFLOW_STAGE = "workflow_stage"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BranchClassification:
    """Computed class of a branch plus its workflow position, if any."""

    branch: str
    branch_class: BranchClass
    position: int | None = None


@dataclass(frozen=True)
class MergeRequest:
    """Source and target branch of a proposed merge."""

    source: str
    target: str


@dataclass(frozen=True)
class Decision:
    """Final allow/deny outcome of a single evaluation."""

    allowed: bool
    reason: str
    rule: str
    blocking_author: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

"""Merge policy evaluation."""

from mergegate.policy.blockage import BlockageResult, is_blocked
from mergegate.policy.engine import PolicyEngine, evaluate
from mergegate.policy.permission import PermissionResult, classify_branch, evaluate_permission

__all__ = [
    "BlockageResult",
    "PermissionResult",
    "PolicyEngine",
    "classify_branch",
    "evaluate",
    "evaluate_permission",
    "is_blocked",
]

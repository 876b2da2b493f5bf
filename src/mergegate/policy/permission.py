"""Structural merge permission rules.

Rules are applied in a fixed precedence:

1. Hotfix source: any target is allowed.
2. Feature source: only stage 0 of the workflow, or another feature branch.
3. Otherwise source and target must both be workflow stages and the target
   must be exactly the next stage.

Feature-likeness of the target is only ever checked under rule 2.
"""

from __future__ import annotations

from dataclasses import dataclass

from mergegate.patterns import matches
from mergegate.types import BranchClass, BranchClassification, MergeRequest
from mergegate.workflow import Workflow

RULE_HOTFIX = "hotfix"
RULE_FEATURE = "feature"
RULE_WORKFLOW = "workflow"

REASON_FEATURE_TARGET_INVALID = "source is feature, but target is not valid"
REASON_UNKNOWN_BRANCH = "either source or target branch is unknown"
REASON_MERGE_NOT_ALLOWED = "merge not allowed"


@dataclass(frozen=True)
class PermissionResult:
    """Outcome of the structural check, before any blockage query."""

    allowed: bool
    reason: str
    rule: str


def classify_branch(
    branch: str,
    workflow: Workflow,
    hotfix_pattern: str,
    feature_pattern: str,
) -> BranchClassification:
    """Classify a branch in source role: hotfix, then feature, then stage."""
    position = workflow.index_of(branch)
    stage_position = position if position != -1 else None

    if matches(hotfix_pattern, branch):
        return BranchClassification(branch, BranchClass.HOTFIX, stage_position)
    if matches(feature_pattern, branch):
        return BranchClassification(branch, BranchClass.FEATURE, stage_position)
    if stage_position is not None:
        return BranchClassification(branch, BranchClass.WORKFLOW_STAGE, stage_position)
    return BranchClassification(branch, BranchClass.UNKNOWN)


def evaluate_permission(
    request: MergeRequest,
    workflow: Workflow,
    hotfix_pattern: str,
    feature_pattern: str,
) -> PermissionResult:
    """Decide whether ``request.source`` may structurally reach ``request.target``."""
    source = classify_branch(request.source, workflow, hotfix_pattern, feature_pattern)

    if source.branch_class is BranchClass.HOTFIX:
        return PermissionResult(True, f"{request.source} is a hotfix branch", RULE_HOTFIX)

    target_position = workflow.index_of(request.target)

    if source.branch_class is BranchClass.FEATURE:
        if target_position == 0 or matches(feature_pattern, request.target):
            return PermissionResult(
                True,
                "source is feature branch and target either another feature or start of workflow",
                RULE_FEATURE,
            )
        return PermissionResult(False, REASON_FEATURE_TARGET_INVALID, RULE_FEATURE)

    if source.position is None or target_position == -1:
        return PermissionResult(False, REASON_UNKNOWN_BRANCH, RULE_WORKFLOW)

    if target_position == source.position + 1:
        return PermissionResult(
            True,
            f"{request.target} is the next stage after {request.source}",
            RULE_WORKFLOW,
        )
    return PermissionResult(False, REASON_MERGE_NOT_ALLOWED, RULE_WORKFLOW)

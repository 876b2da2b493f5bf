"""Merge policy evaluation entry point."""

from __future__ import annotations

import logging

from mergegate.config import PolicyConfig
from mergegate.git.repository import RepositoryPort
from mergegate.patterns import matches
from mergegate.policy.blockage import is_blocked
from mergegate.policy.permission import RULE_HOTFIX, evaluate_permission
from mergegate.types import Decision, MergeRequest

logger = logging.getLogger(__name__)

RULE_BLOCKED = "blocked"
RULE_ALLOWED = "allowed"


def evaluate(request: MergeRequest, config: PolicyConfig, repository: RepositoryPort) -> Decision:
    """Render a single allow/deny decision for ``request``.

    Checks run hotfix, structural permission, then blockage; the first
    failing check decides. Repository failures propagate as
    ``EvaluationError`` instead of becoming a decision.
    """
    source, target = request.source, request.target
    workflow = config.workflow

    logger.debug("checking if %s is a hotfix", source)
    if matches(config.hotfix_pattern, source):
        decision = Decision(True, f"{source} is a hotfix branch", RULE_HOTFIX)
        logger.info("allowed: %s", decision.reason)
        return decision

    logger.debug("checking if merge is allowed in the workflow rules")
    permission = evaluate_permission(request, workflow, config.hotfix_pattern, config.feature_pattern)
    if not permission.allowed:
        decision = Decision(
            False,
            f"Workflow does not allow {source} to be merged into {target}: {permission.reason}",
            permission.rule,
        )
        logger.info("denied: %s", decision.reason)
        return decision

    if target in workflow:
        logger.debug("checking if %s is blocked", target)
        blockage = is_blocked(workflow, target, repository)
        if blockage.blocked:
            decision = Decision(
                False,
                f"{target} is currently blocked: {target} is awaiting merge into "
                f"{blockage.next_stage}, please check with {blockage.blocking_author}",
                RULE_BLOCKED,
                blocking_author=blockage.blocking_author,
            )
            logger.info("denied: %s", decision.reason)
            return decision

    decision = Decision(True, f"{source} is allowed to merge into {target}", RULE_ALLOWED)
    logger.info("allowed: %s", decision.reason)
    return decision


class PolicyEngine:
    """Evaluator bound to one configuration and repository."""

    def __init__(self, config: PolicyConfig, repository: RepositoryPort):
        self.config = config
        self.repository = repository

    def evaluate(self, source: str, target: str) -> Decision:
        return evaluate(MergeRequest(source=source, target=target), self.config, self.repository)

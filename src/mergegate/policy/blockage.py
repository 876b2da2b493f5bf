"""Blocked-stage detection based on branch ancestry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mergegate.git.repository import RepositoryError, RepositoryPort
from mergegate.types import EvaluationError
from mergegate.workflow import Workflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockageResult:
    """Whether a stage is blocked, and by whose unpropagated commit."""

    blocked: bool
    blocking_author: str | None = None
    next_stage: str | None = None


def is_blocked(workflow: Workflow, target: str, repository: RepositoryPort) -> BlockageResult:
    """Return whether ``target`` still holds commits its next stage lacks.

    A stage is blocked when its tip is not an ancestor of the next stage's
    tip. The last stage is never blocked. Only the immediately following stage
    is inspected, so a backlog further down the workflow is not detected.

    Raises:
        EvaluationError: If the repository cannot resolve a tip or answer
            the ancestry query
    """
    position = workflow.index_of(target)
    if position == -1:
        raise EvaluationError(f"`{target}` is not a workflow stage; blockage is undefined")

    if workflow.is_last_stage(target):
        logger.debug("%s is the last workflow stage, not blockable", target)
        return BlockageResult(blocked=False)

    next_stage = workflow.stage_at(position + 1)
    try:
        target_tip = repository.resolve_ref(target)
        next_tip = repository.resolve_ref(next_stage)
        if repository.is_ancestor(target_tip, next_tip):
            logger.debug("%s (%s) is contained in %s (%s)", target, target_tip, next_stage, next_tip)
            return BlockageResult(blocked=False, next_stage=next_stage)
        author = repository.author_of(target_tip)
    except RepositoryError as exc:
        raise EvaluationError(f"unable to determine whether {target} is blocked: {exc}") from exc

    logger.info("%s is awaiting merge into %s (last commit by %s)", target, next_stage, author)
    return BlockageResult(blocked=True, blocking_author=author, next_stage=next_stage)

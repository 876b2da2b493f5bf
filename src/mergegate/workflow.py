"""Ordered release workflow of branch stages."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mergegate.types import ConfigurationError

MIN_STAGES = 2


@dataclass(frozen=True)
class Workflow:
    """Ordered, duplicate-free sequence of stage branch names.

    Stage ``n`` may only be merged into stage ``n + 1``. The stage list is
    validated once at construction and never changes afterwards.
    """

    stages: tuple[str, ...]

    def __post_init__(self) -> None:
        stages = tuple(self.stages)
        object.__setattr__(self, "stages", stages)

        empty = [s for s in stages if not isinstance(s, str) or not s.strip()]
        if empty:
            raise ConfigurationError("Workflow stage names must be non-empty strings")

        seen: set[str] = set()
        duplicates: list[str] = []
        for stage in stages:
            if stage in seen and stage not in duplicates:
                duplicates.append(stage)
            seen.add(stage)
        if duplicates:
            raise ConfigurationError(f"Workflow contains duplicate stages: {', '.join(duplicates)}")

        if len(stages) < MIN_STAGES:
            raise ConfigurationError(
                f"Workflow needs at least {MIN_STAGES} distinct stages, got {len(stages)}: {list(stages)}"
            )

    @classmethod
    def of(cls, stages: Iterable[str]) -> Workflow:
        return cls(tuple(stages))

    @classmethod
    def parse(cls, text: str) -> Workflow:
        """Build a workflow from a whitespace-separated list such as ``"a b c"``."""
        return cls(tuple(text.split()))

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[str]:
        return iter(self.stages)

    def __contains__(self, name: object) -> bool:
        return name in self.stages

    def index_of(self, name: str) -> int:
        """Return the position of ``name``, or -1 when it is not a stage."""
        for position, stage in enumerate(self.stages):
            if stage == name:
                return position
        return -1

    def stage_at(self, index: int) -> str:
        if not 0 <= index < len(self.stages):
            raise IndexError(f"stage index {index} out of range for workflow of {len(self.stages)} stages")
        return self.stages[index]

    def is_last_stage(self, name: str) -> bool:
        return self.index_of(name) == len(self.stages) - 1

    def next_stage(self, name: str) -> str | None:
        """Return the stage after ``name``, or None for the last or an unknown stage."""
        position = self.index_of(name)
        if position == -1 or position == len(self.stages) - 1:
            return None
        return self.stages[position + 1]

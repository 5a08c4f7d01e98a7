"""Roadmap derivation: milestone nodes and the path fill offset.

Everything here is a pure function of the selected path, its progress record
and the selected milestone. Nothing is cached between renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from vazhi.core.paths import CareerPath, Milestone
from vazhi.core.progress import (
    ProgressRecord,
    completed_count,
    completed_days,
    completion_percent,
    total_days,
)

BASE_LENGTH = 1000
SCALE_FACTOR = 10
CHECK_MARK = "✓"


@dataclass(frozen=True)
class MilestoneNode:
    milestone: Milestone
    index: int  # 1-based
    completed: bool
    active: bool

    @property
    def label(self) -> str:
        return CHECK_MARK if self.completed else str(self.index)


@dataclass(frozen=True)
class RoadmapView:
    nodes: Tuple[MilestoneNode, ...]
    percent: int
    fill_offset: int
    completed_days: int
    total_days: int
    completed_milestones: int
    total_milestones: int


def path_fill_offset(percent: int) -> int:
    """Dash offset of the connecting curve: full length at 0%, zero at 100%."""
    return BASE_LENGTH - percent * SCALE_FACTOR


def render_roadmap(
    path: Optional[CareerPath],
    record: Optional[ProgressRecord],
    selected_milestone_id: Optional[str] = None,
) -> RoadmapView:
    if path is None:
        return RoadmapView(
            nodes=(),
            percent=0,
            fill_offset=path_fill_offset(0),
            completed_days=0,
            total_days=0,
            completed_milestones=0,
            total_milestones=0,
        )
    if record is not None and record.path_id != path.id:
        record = None
    done = record.completed if record is not None else frozenset()
    nodes = tuple(
        MilestoneNode(
            milestone=m,
            index=i,
            completed=m.id in done,
            active=m.id == selected_milestone_id,
        )
        for i, m in enumerate(path.milestones, start=1)
    )
    percent = completion_percent(path, record)
    return RoadmapView(
        nodes=nodes,
        percent=percent,
        fill_offset=path_fill_offset(percent),
        completed_days=completed_days(path, record),
        total_days=total_days(path),
        completed_milestones=completed_count(path, record),
        total_milestones=path.milestone_count,
    )

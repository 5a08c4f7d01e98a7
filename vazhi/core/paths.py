from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from vazhi.core.api import Backend, FetchFailure

logger = logging.getLogger(__name__)

RESOURCE_TYPES = ("video", "article", "course")


@dataclass(frozen=True)
class Resource:
    index: int
    title: str
    url: str
    type: str


@dataclass(frozen=True)
class Milestone:
    id: str
    title: str
    description: str
    estimated_days: int
    resources: Tuple[Resource, ...] = ()


@dataclass(frozen=True)
class CareerPath:
    id: str
    name: str
    description: str
    color: str
    icon: str
    milestones: Tuple[Milestone, ...] = ()

    @property
    def milestone_count(self) -> int:
        return len(self.milestones)

    @property
    def total_days(self) -> int:
        return sum(m.estimated_days for m in self.milestones)

    def has_milestone(self, milestone_id: str) -> bool:
        return any(m.id == milestone_id for m in self.milestones)

    def milestone(self, milestone_id: str) -> Milestone:
        for m in self.milestones:
            if m.id == milestone_id:
                return m
        raise KeyError(milestone_id)


def _require_str(raw: dict, key: str, where: str) -> str:
    value = raw.get(key)
    if value is None or not isinstance(value, (str, int)):
        raise ValueError(f"{where}: missing or invalid '{key}'")
    return str(value)


def _optional_str(raw: dict, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _parse_days(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}: invalid 'estimated_days'")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{where}: 'estimated_days' must be a whole number")
    return int(value)


def _parse_resource(index: int, raw: Any, where: str) -> Resource:
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: resource {index} is not an object")
    kind = _require_str(raw, "type", f"{where} resource {index}").strip().lower()
    if kind not in RESOURCE_TYPES:
        raise ValueError(f"{where} resource {index}: unknown type {kind!r}")
    return Resource(
        index=index,
        title=_require_str(raw, "title", f"{where} resource {index}"),
        url=_require_str(raw, "url", f"{where} resource {index}"),
        type=kind,
    )


def _parse_milestone(raw: Any, where: str) -> Milestone:
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: milestone is not an object")
    milestone_id = _require_str(raw, "id", where)
    where = f"{where} milestone {milestone_id}"
    days = _parse_days(raw.get("estimated_days", 0), where)
    if days < 0:
        raise ValueError(f"{where}: 'estimated_days' must not be negative")
    resources = raw.get("resources") or []
    if not isinstance(resources, list):
        raise ValueError(f"{where}: 'resources' must be a list")
    return Milestone(
        id=milestone_id,
        title=_require_str(raw, "title", where),
        description=_optional_str(raw, "description"),
        estimated_days=days,
        resources=tuple(_parse_resource(i, r, where) for i, r in enumerate(resources)),
    )


def parse_career_path(raw: Any) -> CareerPath:
    """Build a CareerPath snapshot from backend JSON, keeping milestone order."""
    if not isinstance(raw, dict):
        raise ValueError("career path: expected an object")
    path_id = _require_str(raw, "id", "career path")
    where = f"career path {path_id}"
    milestones = raw.get("milestones") or []
    if not isinstance(milestones, list):
        raise ValueError(f"{where}: 'milestones' must be a list")
    parsed = tuple(_parse_milestone(m, where) for m in milestones)
    ids = [m.id for m in parsed]
    if len(set(ids)) != len(ids):
        raise ValueError(f"{where}: duplicate milestone ids")
    return CareerPath(
        id=path_id,
        name=_require_str(raw, "name", where),
        description=_optional_str(raw, "description"),
        color=_optional_str(raw, "color"),
        icon=_optional_str(raw, "icon"),
        milestones=parsed,
    )


def parse_career_paths(payload: Any) -> List[CareerPath]:
    """Parse every path in the list; invalid entries are logged and skipped."""
    if not isinstance(payload, list):
        raise ValueError("career paths: expected a list")
    paths: List[CareerPath] = []
    for item in payload:
        try:
            paths.append(parse_career_path(item))
        except ValueError as e:
            logger.warning("Skipping career path: %s", e)
    return paths


def filter_paths(paths: Sequence[CareerPath], query: str) -> List[CareerPath]:
    """Case-insensitive substring match on name or description, order kept."""
    if not query:
        return list(paths)
    needle = query.lower()
    return [p for p in paths if needle in p.name.lower() or needle in p.description.lower()]


class PathCatalog:
    """Career paths fetched from the backend. Keeps the last good list on failure."""

    def __init__(self, backend: Backend) -> None:
        self._backend = backend
        self._paths: List[CareerPath] = []
        self._listeners: List[Callable[[], None]] = []

    @property
    def paths(self) -> List[CareerPath]:
        return list(self._paths)

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def get(self, path_id: str) -> Optional[CareerPath]:
        for p in self._paths:
            if p.id == path_id:
                return p
        return None

    def filter(self, query: str) -> List[CareerPath]:
        return filter_paths(self._paths, query)

    def load(self) -> None:
        self._backend.fetch_career_paths(self._on_loaded, self._on_failed)

    def _on_loaded(self, payload: Any) -> None:
        try:
            paths = parse_career_paths(payload)
        except ValueError as e:
            self._on_failed(FetchFailure(f"invalid career paths payload: {e}"))
            return
        self._paths = paths
        logger.info("Loaded %d career paths", len(paths))
        self._notify()

    def _on_failed(self, error: Exception) -> None:
        logger.warning("Could not load career paths: %s", error)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

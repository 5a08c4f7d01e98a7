from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, List, Optional, Tuple

from vazhi.core.api import Backend, FetchFailure, decode_progress, encode_toggle
from vazhi.core.paths import CareerPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressRecord:
    path_id: str
    completed: FrozenSet[str] = field(default_factory=frozenset)

    def is_completed(self, milestone_id: str) -> bool:
        return milestone_id in self.completed

    @classmethod
    def from_payload(cls, path: CareerPath, payload: Any) -> "ProgressRecord":
        """Build a record for ``path``; ids that are not milestones of the path are dropped."""
        ids = decode_progress(payload)
        known = {m.id for m in path.milestones}
        unknown = [i for i in ids if i not in known]
        if unknown:
            logger.debug("Ignoring unknown milestone ids for %s: %s", path.id, unknown)
        return cls(path_id=path.id, completed=frozenset(i for i in ids if i in known))


def _matching(path: Optional[CareerPath], record: Optional[ProgressRecord]) -> bool:
    return path is not None and record is not None and record.path_id == path.id


def completed_count(path: Optional[CareerPath], record: Optional[ProgressRecord]) -> int:
    if not _matching(path, record):
        return 0
    return sum(1 for m in path.milestones if m.id in record.completed)


def completion_percent(path: Optional[CareerPath], record: Optional[ProgressRecord]) -> int:
    """Share of completed milestones, 0-100, rounded half up."""
    if not _matching(path, record) or not path.milestones:
        return 0
    done = completed_count(path, record)
    total = len(path.milestones)
    return (200 * done + total) // (2 * total)


def completed_days(path: Optional[CareerPath], record: Optional[ProgressRecord]) -> int:
    if not _matching(path, record):
        return 0
    return sum(m.estimated_days for m in path.milestones if m.id in record.completed)


def total_days(path: Optional[CareerPath]) -> int:
    if path is None:
        return 0
    return path.total_days


class ProgressTracker:
    """Mirrors the backend's progress record for the selected path only.

    Each refresh is tagged with the path id and the selection generation it
    was issued for. A result arriving after the selection moved on is
    dropped, so the held record always belongs to the latest selection no
    matter in which order responses come back.

    Toggles never mutate the local record: the write is followed by a fresh
    read so the display matches the backend's copy.
    """

    def __init__(self, backend: Backend, user_id: str) -> None:
        self._backend = backend
        self._user_id = user_id
        self._path: Optional[CareerPath] = None
        self._record: Optional[ProgressRecord] = None
        self._generation = 0
        self._listeners: List[Callable[[], None]] = []

    @property
    def current_path(self) -> Optional[CareerPath]:
        return self._path

    @property
    def record(self) -> Optional[ProgressRecord]:
        return self._record

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def is_completed(self, milestone_id: str) -> bool:
        return self._record is not None and self._record.is_completed(milestone_id)

    def select(self, path: CareerPath) -> None:
        """Switch to ``path``: forget the previous record and fetch the new one."""
        self._path = path
        self._record = None
        self._generation += 1
        self._notify()
        self.refresh(path.id)

    def clear(self) -> None:
        self._path = None
        self._record = None
        self._generation += 1
        self._notify()

    def refresh(self, path_id: str) -> None:
        if self._path is None or self._path.id != path_id:
            logger.debug("Not refreshing %s: it is not the selected path", path_id)
            return
        tag = self._tag()
        self._backend.fetch_progress(
            self._user_id,
            path_id,
            lambda payload: self._on_progress(tag, payload),
            lambda error: self._on_progress_failed(tag, error),
        )

    def toggle(self, milestone_id: str) -> None:
        path = self._path
        if path is None:
            logger.warning("Ignoring toggle of %s: no path selected", milestone_id)
            return
        if not path.has_milestone(milestone_id):
            logger.warning("Ignoring toggle of %s: not a milestone of %s", milestone_id, path.id)
            return
        completed = not self.is_completed(milestone_id)
        self._backend.post_progress(
            self._user_id,
            path.id,
            encode_toggle(milestone_id, completed),
            lambda _ack: self._on_written(),
            lambda error: logger.warning(
                "Could not update progress of %s/%s: %s", path.id, milestone_id, error
            ),
        )

    def _tag(self) -> Tuple[str, int]:
        return (self._path.id, self._generation)

    def _is_current(self, tag: Tuple[str, int]) -> bool:
        return self._path is not None and tag == self._tag()

    def _on_progress(self, tag: Tuple[str, int], payload: Any) -> None:
        if not self._is_current(tag):
            logger.debug("Discarding stale progress for %s", tag[0])
            return
        try:
            record = ProgressRecord.from_payload(self._path, payload)
        except ValueError as e:
            self._on_progress_failed(tag, FetchFailure(str(e)))
            return
        self._record = record
        self._notify()

    def _on_progress_failed(self, tag: Tuple[str, int], error: Exception) -> None:
        logger.warning("Could not load progress for %s: %s", tag[0], error)

    def _on_written(self) -> None:
        if self._path is not None:
            self.refresh(self._path.id)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

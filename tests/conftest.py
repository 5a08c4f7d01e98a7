"""Shared fixtures: a scripted backend whose requests stay pending until resolved."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pytest

from vazhi.core.api import FetchFailure, WriteFailure
from vazhi.core.paths import CareerPath, parse_career_path


@dataclass
class PendingCall:
    kind: str
    path_id: Optional[str]
    body: Optional[Dict[str, Any]]
    on_success: Callable[[Any], None]
    on_failure: Callable[[Exception], None]
    done: bool = False

    def succeed(self, payload: Any = None) -> None:
        assert not self.done, "request already settled"
        self.done = True
        self.on_success(payload)

    def fail(self, error: Optional[Exception] = None) -> None:
        assert not self.done, "request already settled"
        self.done = True
        if error is None:
            error = WriteFailure("boom") if self.kind == "post" else FetchFailure("boom")
        self.on_failure(error)


@dataclass
class FakeBackend:
    """Records every request; tests settle them in whatever order they like."""

    calls: List[PendingCall] = field(default_factory=list)
    user_ids: List[str] = field(default_factory=list)

    def fetch_career_paths(self, on_success, on_failure) -> None:
        self.calls.append(PendingCall("paths", None, None, on_success, on_failure))

    def fetch_progress(self, user_id, path_id, on_success, on_failure) -> None:
        self.user_ids.append(user_id)
        self.calls.append(PendingCall("progress", path_id, None, on_success, on_failure))

    def post_progress(self, user_id, path_id, body, on_success, on_failure) -> None:
        self.user_ids.append(user_id)
        self.calls.append(PendingCall("post", path_id, body, on_success, on_failure))

    def pending(self, kind: Optional[str] = None) -> List[PendingCall]:
        return [c for c in self.calls if not c.done and (kind is None or c.kind == kind)]

    def last(self, kind: str) -> PendingCall:
        return [c for c in self.calls if c.kind == kind][-1]


class ProgressServer:
    """Keeps per-path completed sets and answers the fake backend's requests."""

    def __init__(self, backend: FakeBackend) -> None:
        self._backend = backend
        self.completed: Dict[str, List[str]] = {}

    def settle_all(self) -> None:
        while self._backend.pending():
            call = self._backend.pending()[0]
            if call.kind == "post":
                ids = self.completed.setdefault(call.path_id, [])
                milestone_id = call.body["milestone_id"]
                if call.body["completed"] and milestone_id not in ids:
                    ids.append(milestone_id)
                if not call.body["completed"] and milestone_id in ids:
                    ids.remove(milestone_id)
                call.succeed({"ok": True})
            elif call.kind == "progress":
                call.succeed({"completed_milestones": list(self.completed.get(call.path_id, []))})
            else:
                call.succeed([])


def path_payload(path_id: str = "p1", days=(3, 7), **extra) -> Dict[str, Any]:
    raw = {
        "id": path_id,
        "name": extra.pop("name", f"Path {path_id}"),
        "description": extra.pop("description", f"Description of {path_id}"),
        "color": extra.pop("color", "#3b82f6"),
        "icon": extra.pop("icon", "code"),
        "milestones": [
            {
                "id": f"m{i}",
                "title": f"Milestone {i}",
                "description": f"Step {i}",
                "estimated_days": d,
                "resources": [
                    {"title": f"Intro {i}", "url": f"https://example.com/{i}", "type": "video"},
                    {"title": f"Guide {i}", "url": f"https://example.com/{i}/guide", "type": "article"},
                ],
            }
            for i, d in enumerate(days, start=1)
        ],
    }
    raw.update(extra)
    return raw


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def server(backend: FakeBackend) -> ProgressServer:
    return ProgressServer(backend)


@pytest.fixture()
def path_p1() -> CareerPath:
    return parse_career_path(path_payload("p1", days=(3, 7)))


@pytest.fixture()
def path_p2() -> CareerPath:
    return parse_career_path(path_payload("p2", days=(5, 5, 10)))

"""Backend contract: endpoint URLs, payload codecs and the error taxonomy."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Protocol
from urllib.parse import quote

Payload = Any
OnSuccess = Callable[[Payload], None]
OnFailure = Callable[[Exception], None]


class BackendError(Exception):
    """Base class for failures talking to the backend service."""


class FetchFailure(BackendError):
    """A GET request failed (network error, HTTP error or bad payload)."""


class WriteFailure(BackendError):
    """The progress POST failed."""


def _join(base_url: str, *parts: str) -> str:
    base = base_url.rstrip("/")
    return "/".join([base, *(quote(str(p), safe="") for p in parts)])


def career_paths_url(base_url: str) -> str:
    return _join(base_url, "career-paths")


def progress_url(base_url: str, user_id: str, path_id: str) -> str:
    return _join(base_url, "progress", user_id, path_id)


def encode_toggle(milestone_id: str, completed: bool) -> Dict[str, Any]:
    """Body of the progress POST."""
    return {"milestone_id": milestone_id, "completed": bool(completed)}


def decode_progress(payload: Payload) -> List[str]:
    """Return the completed milestone ids from a progress payload, deduplicated, in order."""
    if payload is None:
        return []
    if not isinstance(payload, dict):
        raise ValueError("progress payload: expected an object")
    raw = payload.get("completed_milestones", [])
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("progress payload: 'completed_milestones' must be a list")
    seen: Dict[str, None] = {}
    for item in raw:
        seen.setdefault(str(item), None)
    return list(seen)


class Backend(Protocol):
    """Asynchronous access to career paths and per-user progress.

    Every method returns immediately. Exactly one of the callbacks is invoked
    later, from the event loop, with the decoded JSON body or the failure.
    """

    def fetch_career_paths(self, on_success: OnSuccess, on_failure: OnFailure) -> None:
        ...

    def fetch_progress(
        self,
        user_id: str,
        path_id: str,
        on_success: OnSuccess,
        on_failure: OnFailure,
    ) -> None:
        ...

    def post_progress(
        self,
        user_id: str,
        path_id: str,
        body: Dict[str, Any],
        on_success: OnSuccess,
        on_failure: OnFailure,
    ) -> None:
        ...

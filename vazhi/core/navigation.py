from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, FrozenSet, List, Optional

from vazhi.core.paths import CareerPath, Milestone, PathCatalog
from vazhi.core.progress import ProgressTracker
from vazhi.core.roadmap import RoadmapView, render_roadmap

logger = logging.getLogger(__name__)


class Screen(Enum):
    WELCOME = "welcome"
    CATALOG = "catalog"
    ROADMAP = "roadmap"


class InvalidTransition(Exception):
    """Raised when an action is not available from the current screen."""


EXPLORE = "explore"
SEARCH = "search"
SELECT_PATH = "select_path"
BACK = "back"
SELECT_MILESTONE = "select_milestone"
CLOSE_DETAIL = "close_detail"
TOGGLE_MILESTONE = "toggle_milestone"

THEMES = ("dark", "light")


@dataclass(frozen=True)
class ViewState:
    """Visible screen plus the current selections.

    ``selected_milestone`` is only ever set while ``selected_path`` is set and
    always belongs to it.
    """

    screen: Screen = Screen.WELCOME
    selected_path: Optional[CareerPath] = None
    selected_milestone: Optional[Milestone] = None
    search: str = ""
    theme: str = "dark"

    @property
    def detail_open(self) -> bool:
        return self.selected_milestone is not None


class Navigator:
    """Owns the view state, the path catalog and the progress tracker.

    Widgets call the action methods and redraw from ``state``,
    ``visible_paths()`` and ``roadmap()`` whenever a listener fires.
    """

    def __init__(self, catalog: PathCatalog, tracker: ProgressTracker, theme: str = "dark") -> None:
        self._catalog = catalog
        self._tracker = tracker
        self._state = ViewState(theme=theme if theme in THEMES else "dark")
        self._listeners: List[Callable[[], None]] = []
        catalog.add_listener(self._notify)
        tracker.add_listener(self._notify)

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def catalog(self) -> PathCatalog:
        return self._catalog

    @property
    def tracker(self) -> ProgressTracker:
        return self._tracker

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def available_actions(self) -> FrozenSet[str]:
        screen = self._state.screen
        if screen is Screen.WELCOME:
            return frozenset({EXPLORE})
        if screen is Screen.CATALOG:
            return frozenset({SEARCH, SELECT_PATH})
        actions = {BACK, SELECT_MILESTONE}
        if self._state.detail_open:
            actions |= {CLOSE_DETAIL, TOGGLE_MILESTONE}
        return frozenset(actions)

    def _require(self, action: str) -> None:
        if action not in self.available_actions():
            raise InvalidTransition(f"{action} is not available on {self._state.screen.value}")

    def explore(self) -> None:
        self._require(EXPLORE)
        self._set(screen=Screen.CATALOG)

    def set_search(self, text: str) -> None:
        self._require(SEARCH)
        self._set(search=text)

    def select_path(self, path: CareerPath) -> None:
        self._require(SELECT_PATH)
        self._set(screen=Screen.ROADMAP, selected_path=path, selected_milestone=None)
        logger.info("Selected career path %s", path.id)
        self._tracker.select(path)

    def back(self) -> None:
        self._require(BACK)
        self._set(screen=Screen.CATALOG, selected_path=None, selected_milestone=None)
        self._tracker.clear()

    def select_milestone(self, milestone_id: str) -> None:
        self._require(SELECT_MILESTONE)
        path = self._state.selected_path
        try:
            milestone = path.milestone(milestone_id)
        except KeyError:
            raise InvalidTransition(f"{milestone_id} is not a milestone of {path.id}") from None
        self._set(selected_milestone=milestone)

    def close_detail(self) -> None:
        self._require(CLOSE_DETAIL)
        self._set(selected_milestone=None)

    def toggle_selected(self) -> None:
        """Flip completion of the milestone shown in the detail panel."""
        self._require(TOGGLE_MILESTONE)
        self._tracker.toggle(self._state.selected_milestone.id)

    def toggle_theme(self) -> None:
        self._set(theme="light" if self._state.theme == "dark" else "dark")

    def visible_paths(self) -> List[CareerPath]:
        return self._catalog.filter(self._state.search)

    def roadmap(self) -> RoadmapView:
        milestone = self._state.selected_milestone
        return render_roadmap(
            self._state.selected_path,
            self._tracker.record,
            milestone.id if milestone is not None else None,
        )

    def selected_milestone_completed(self) -> bool:
        milestone = self._state.selected_milestone
        return milestone is not None and self._tracker.is_completed(milestone.id)

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

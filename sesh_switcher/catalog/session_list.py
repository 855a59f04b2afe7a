"""Live session list with search and hierarchical selection.

Without a search term the list is a tree: sessions, their tabs, and the
tabs' panes. Up/down move among siblings, expand/shrink move one level
down/up. With a search term the list is a flat list of matches and the
selection is an index into it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sesh_switcher.models import PaneId, PaneInfo, SessionInfo, TabInfo

logger = logging.getLogger(__name__)


@dataclass
class SelectedIndex:
    """Tree selection: session, then optionally a tab, then optionally a pane."""

    session: int | None = None
    tab: int | None = None
    pane: int | None = None

    def reset(self) -> None:
        self.session = None
        self.tab = None
        self.pane = None


@dataclass
class SearchResult:
    """One match in the flat search list."""

    session_name: str
    is_current_session: bool = False
    tab_position: int | None = None
    tab_name: str | None = None
    pane: PaneId | None = None
    pane_title: str | None = None

    @property
    def label(self) -> str:
        if self.pane_title is not None:
            return f"{self.session_name} > {self.tab_name} > {self.pane_title}"
        if self.tab_name is not None:
            return f"{self.session_name} > {self.tab_name}"
        return self.session_name


def _matches(term: str, text: str) -> bool:
    return term.lower() in text.lower()


def _step(index: int | None, count: int, delta: int) -> int | None:
    if count == 0:
        return None
    if index is None:
        return 0 if delta > 0 else count - 1
    return (index + delta) % count


class SessionCatalog:
    """Sessions the user may attach to, plus forbidden ones kept for validation."""

    def __init__(self) -> None:
        self.sessions: list[SessionInfo] = []
        self.forbidden_sessions: list[SessionInfo] = []
        self.search_term = ""
        self.search_results: list[SearchResult] = []
        self.selected_index = SelectedIndex()
        self.selected_search_index: int | None = None
        self._expanded = False

    # -------------------------------------------------------------------------
    # Topology
    # -------------------------------------------------------------------------

    def set_sessions(
        self, sessions: list[SessionInfo], forbidden_sessions: list[SessionInfo]
    ) -> None:
        """Replace the session list, keeping the search and a valid selection."""
        self.sessions = sessions
        self.forbidden_sessions = forbidden_sessions
        self._clamp_selection()
        if self.search_term:
            self._run_search()
            if not self.search_results:
                self.selected_search_index = None
            elif self.selected_search_index is not None:
                self.selected_search_index = min(
                    self.selected_search_index, len(self.search_results) - 1
                )

    def update_session_name(self, old_name: str, new_name: str) -> None:
        for session in self.sessions:
            if session.name == old_name:
                session.name = new_name
        for result in self.search_results:
            if result.session_name == old_name:
                result.session_name = new_name

    def has_session(self, name: str) -> bool:
        return any(s.name == name for s in self.sessions) or self.has_forbidden_session(name)

    def has_forbidden_session(self, name: str) -> bool:
        return any(s.name == name for s in self.forbidden_sessions)

    def all_other_sessions(self) -> list[str]:
        return [s.name for s in self.sessions if not s.is_current_session]

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    @property
    def is_searching(self) -> bool:
        return bool(self.search_term)

    def is_expanded(self) -> bool:
        return self._expanded

    def toggle_expansion(self) -> None:
        """Toggle whether tabs and panes are listed (and searched)."""
        self._expanded = not self._expanded

    def update_search_term(self, search_term: str) -> None:
        self.search_term = search_term
        if not search_term:
            self.search_results = []
            self.selected_search_index = None
            return
        self._run_search()
        self.selected_search_index = 0 if self.search_results else None

    def _run_search(self) -> None:
        results: list[SearchResult] = []
        for session in self.sessions:
            if _matches(self.search_term, session.name):
                results.append(
                    SearchResult(session.name, is_current_session=session.is_current_session)
                )
            if not self._expanded:
                continue
            for tab in session.tabs:
                if _matches(self.search_term, tab.name):
                    results.append(self._tab_result(session, tab))
                for pane in tab.panes:
                    if _matches(self.search_term, pane.title):
                        results.append(self._pane_result(session, tab, pane))
        self.search_results = results
        logger.debug("Search %r matched %d entries", self.search_term, len(results))

    @staticmethod
    def _tab_result(session: SessionInfo, tab: TabInfo) -> SearchResult:
        return SearchResult(
            session.name,
            is_current_session=session.is_current_session,
            tab_position=tab.position,
            tab_name=tab.name,
        )

    @staticmethod
    def _pane_result(session: SessionInfo, tab: TabInfo, pane: PaneInfo) -> SearchResult:
        return SearchResult(
            session.name,
            is_current_session=session.is_current_session,
            tab_position=tab.position,
            tab_name=tab.name,
            pane=pane.pane_id,
            pane_title=pane.title,
        )

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def reset_selected_index(self) -> None:
        self.selected_index.reset()
        self.selected_search_index = None

    def move_selection_down(self) -> None:
        self._move(1)

    def move_selection_up(self) -> None:
        self._move(-1)

    def _move(self, delta: int) -> None:
        if self.is_searching:
            self.selected_search_index = _step(
                self.selected_search_index, len(self.search_results), delta
            )
            return
        selected = self.selected_index
        if selected.session is None:
            selected.session = _step(None, len(self.sessions), delta)
        elif selected.tab is None:
            selected.session = _step(selected.session, len(self.sessions), delta)
        elif selected.pane is None:
            tabs = self.sessions[selected.session].tabs
            selected.tab = _step(selected.tab, len(tabs), delta)
        else:
            panes = self.sessions[selected.session].tabs[selected.tab].panes
            selected.pane = _step(selected.pane, len(panes), delta)

    def result_expand(self) -> None:
        """Move the selection one level deeper (session -> tab -> pane)."""
        if self.is_searching:
            return
        selected = self.selected_index
        if selected.session is None:
            return
        session = self.sessions[selected.session]
        if selected.tab is None:
            if session.tabs:
                selected.tab = 0
        elif selected.pane is None:
            if session.tabs[selected.tab].panes:
                selected.pane = 0

    def result_shrink(self) -> None:
        """Move the selection one level up (pane -> tab -> session)."""
        if self.is_searching:
            return
        if self.selected_index.pane is not None:
            self.selected_index.pane = None
        elif self.selected_index.tab is not None:
            self.selected_index.tab = None

    def _clamp_selection(self) -> None:
        selected = self.selected_index
        if selected.session is None:
            return
        if selected.session >= len(self.sessions):
            selected.reset()
            return
        tabs = self.sessions[selected.session].tabs
        if selected.tab is not None and selected.tab >= len(tabs):
            selected.tab = None
            selected.pane = None
        elif selected.tab is not None and selected.pane is not None:
            if selected.pane >= len(tabs[selected.tab].panes):
                selected.pane = None

    def _selected_result(self) -> SearchResult | None:
        if self.selected_search_index is None:
            return None
        if self.selected_search_index >= len(self.search_results):
            return None
        return self.search_results[self.selected_search_index]

    def _selected_session(self) -> SessionInfo | None:
        if self.selected_index.session is None:
            return None
        return self.sessions[self.selected_index.session]

    def _selected_tab(self) -> TabInfo | None:
        session = self._selected_session()
        if session is None or self.selected_index.tab is None:
            return None
        return session.tabs[self.selected_index.tab]

    def get_selected_session_name(self) -> str | None:
        if self.is_searching:
            result = self._selected_result()
            return result.session_name if result else None
        session = self._selected_session()
        return session.name if session else None

    def get_selected_tab_position(self) -> int | None:
        if self.is_searching:
            result = self._selected_result()
            return result.tab_position if result else None
        tab = self._selected_tab()
        return tab.position if tab else None

    def get_selected_pane_id(self) -> PaneId | None:
        if self.is_searching:
            result = self._selected_result()
            return result.pane if result else None
        tab = self._selected_tab()
        if tab is None or self.selected_index.pane is None:
            return None
        return tab.panes[self.selected_index.pane].pane_id

    def selected_is_current_session(self) -> bool:
        if self.is_searching:
            result = self._selected_result()
            return bool(result and result.is_current_session)
        session = self._selected_session()
        return bool(session and session.is_current_session)

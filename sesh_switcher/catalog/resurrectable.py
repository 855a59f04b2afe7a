"""Resurrectable session list with its own search and delete confirmation."""

from __future__ import annotations

import logging

from sesh_switcher.actions import Action, DeleteResurrectable
from sesh_switcher.models import ResurrectableSession

logger = logging.getLogger(__name__)


class ResurrectionCatalog:
    """Sessions the host can recreate.

    The search term here is edited with plain append/pop; there is no cursor.
    Deletions are optimistic: the entry disappears locally as soon as the
    delete action is issued.
    """

    def __init__(self) -> None:
        self.sessions: list[ResurrectableSession] = []
        self.search_term = ""
        self.filtered: list[ResurrectableSession] = []
        self.selected_index: int | None = None
        self.delete_all_warning = False

    def update(self, sessions: list[ResurrectableSession]) -> None:
        """Replace the list from a topology update, most recently closed first."""
        selected_name = self.get_selected_session_name()
        self.sessions = sorted(
            sessions,
            key=lambda s: s.closed_at.timestamp() if s.closed_at else 0.0,
            reverse=True,
        )
        self._refilter()
        if selected_name is not None:
            names = [s.name for s in self.filtered]
            self.selected_index = names.index(selected_name) if selected_name in names else None
        self._clamp()

    def has_session(self, name: str) -> bool:
        return any(s.name == name for s in self.sessions)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def handle_character(self, character: str) -> None:
        self.search_term += character
        self._refilter()
        self.selected_index = 0 if self.filtered else None

    def handle_backspace(self) -> None:
        if not self.search_term:
            return
        self.search_term = self.search_term[:-1]
        self._refilter()
        self.selected_index = 0 if self.filtered else None

    def _refilter(self) -> None:
        term = self.search_term.lower()
        self.filtered = [s for s in self.sessions if term in s.name.lower()]

    def _clamp(self) -> None:
        if self.selected_index is not None and self.selected_index >= len(self.filtered):
            self.selected_index = len(self.filtered) - 1 if self.filtered else None

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def move_selection_down(self) -> None:
        if not self.filtered:
            self.selected_index = None
        elif self.selected_index is None:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + 1) % len(self.filtered)

    def move_selection_up(self) -> None:
        if not self.filtered:
            self.selected_index = None
        elif self.selected_index is None:
            self.selected_index = len(self.filtered) - 1
        else:
            self.selected_index = (self.selected_index - 1) % len(self.filtered)

    def get_selected_session_name(self) -> str | None:
        if self.selected_index is None or self.selected_index >= len(self.filtered):
            return None
        return self.filtered[self.selected_index].name

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def delete_selected_session(self) -> list[Action]:
        name = self.get_selected_session_name()
        if name is None:
            return []
        self._forget([name])
        return [DeleteResurrectable((name,))]

    def show_delete_all_sessions_warning(self) -> None:
        self.delete_all_warning = True

    def cancel_delete_all(self) -> None:
        self.delete_all_warning = False

    def delete_all_sessions(self) -> list[Action]:
        self.delete_all_warning = False
        names = [s.name for s in self.sessions]
        if not names:
            return []
        logger.info("Deleting %d resurrectable sessions", len(names))
        self._forget(names)
        return [DeleteResurrectable(tuple(names))]

    def _forget(self, names: list[str]) -> None:
        self.sessions = [s for s in self.sessions if s.name not in names]
        self._refilter()
        self._clamp()

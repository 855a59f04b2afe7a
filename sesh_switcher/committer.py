"""Commit logic for Enter on each screen.

``SessionCommitter.handle_selection`` turns the current selection into host
actions. It raises ``SwitcherValidationError`` when a name check fails, in
which case nothing is committed; the dispatcher shows the banner.
"""

from __future__ import annotations

import logging

from sesh_switcher.actions import (
    Action,
    FocusPane,
    GoToTab,
    HideOverlay,
    RenameSession,
    SwitchSession,
)
from sesh_switcher.exceptions import AlreadyAttachedError
from sesh_switcher.models import ScreenMode
from sesh_switcher.state import SwitcherState
from sesh_switcher.validation import SelectionValidator

logger = logging.getLogger(__name__)


class SessionCommitter:
    """Executes the commit for whichever screen is active."""

    def handle_selection(self, state: SwitcherState) -> list[Action]:
        if state.mode == ScreenMode.NEW_SESSION:
            return self._commit_new_session(state)
        if state.mode == ScreenMode.ATTACH:
            if state.is_renaming:
                return self._commit_rename(state)
            return self._commit_attach(state)
        return self._commit_resurrect(state)

    def _validator(self, state: SwitcherState) -> SelectionValidator:
        return SelectionValidator(state.sessions, state.resurrectable)

    def _commit_new_session(self, state: SwitcherState) -> list[Action]:
        self._validator(state).validate_new_session_name(state.new_session.name())
        return state.new_session.handle_selection(state.current_session_name)

    def _commit_rename(self, state: SwitcherState) -> list[Action]:
        new_name = state.rename_field or ""
        # On failure the rename prompt stays open with its text intact.
        should_rename = self._validator(state).validate_rename(
            new_name, state.current_session_name
        )
        state.rename_field = None
        if not should_rename:
            return []

        if state.current_session_name is not None:
            state.sessions.update_session_name(state.current_session_name, new_name)
        logger.info("Renaming session %r to %r", state.current_session_name, new_name)
        state.current_session_name = new_name
        # Renaming keeps the overlay open.
        return [RenameSession(new_name)]

    def _commit_attach(self, state: SwitcherState) -> list[Action]:
        actions: list[Action] = []
        catalog = state.sessions
        selected_name = catalog.get_selected_session_name()
        if selected_name is not None:
            tab_position = catalog.get_selected_tab_position()
            pane = catalog.get_selected_pane_id()
            if catalog.selected_is_current_session():
                if pane is not None:
                    actions.append(FocusPane(pane))
                elif tab_position is not None:
                    actions.append(GoToTab(tab_position))
                else:
                    state.show_error(AlreadyAttachedError().banner)
            else:
                logger.info("Switching to session %r", selected_name)
                actions.append(SwitchSession(selected_name, tab_position, pane))

        state.reset_selected_index()
        state.clear_search()
        # In standalone mode this is the last selectable pane; hiding it
        # would close the session.
        if not state.standalone:
            actions.append(HideOverlay())
        return actions

    def _commit_resurrect(self, state: SwitcherState) -> list[Action]:
        name = state.resurrectable.get_selected_session_name()
        if name is None:
            return []
        logger.info("Resurrecting session %r", name)
        return [SwitchSession(name)]

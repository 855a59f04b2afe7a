"""Key dispatch state machine.

``KeyDispatcher.dispatch(state, key)`` mutates the state aggregate and returns
the host actions to run plus whether the screen needs a redraw. It never
talks to a host itself, so it can be driven directly in tests.

Every key goes through two pre-filters before the per-screen tables:

1. An error banner swallows the key and is cleared.
2. Escape and Ctrl+C hide the overlay (unless standalone). Escape inside a
   sub-dialog closes only the sub-dialog.

The per-screen tables map a ``KeyChord`` to a handler name. Printable
characters that are not in a table go to the table's fallback handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from sesh_switcher.actions import (
    Action,
    DisconnectOtherClients,
    HideOverlay,
    KillSessions,
    OpenFolderPicker,
)
from sesh_switcher.committer import SessionCommitter
from sesh_switcher.exceptions import (
    NoOtherSessionsError,
    NoSessionSelectedError,
    SwitcherValidationError,
)
from sesh_switcher.keys import (
    BACKSPACE,
    CTRL_C,
    DELETE,
    DOWN,
    ENTER,
    ESCAPE,
    LEFT,
    NEWLINE,
    RIGHT,
    SHIFT_TAB,
    TAB,
    UP,
    KeyChord,
)
from sesh_switcher.models import ScreenMode
from sesh_switcher.state import AttachSubState, SwitcherState

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one key press."""

    actions: list[Action] = field(default_factory=list)
    redraw: bool = False


Handler = Callable[[SwitcherState, KeyChord], DispatchResult]

ctrl = KeyChord.ctrl
alt = KeyChord.alt
plain = KeyChord.plain

# =============================================================================
# Key tables
# =============================================================================

NEW_SESSION_KEYS: dict[KeyChord, str] = {
    UP: "layout_up",
    ctrl("p"): "layout_up",
    ctrl("k"): "layout_up",
    DOWN: "layout_down",
    ctrl("n"): "layout_down",
    ctrl("j"): "layout_down",
    ENTER: "commit",
    NEWLINE: "commit",
    BACKSPACE: "builder_key",
    ESCAPE: "builder_key",
    TAB: "toggle_forward",
    SHIFT_TAB: "toggle_backward",
    ctrl("/"): "pick_folder",
    CTRL_C: "clear_folder",
}

ATTACH_KEYS: dict[KeyChord, str] = {
    RIGHT: "result_expand",
    ctrl("."): "result_expand",
    ctrl("l"): "result_expand",
    LEFT: "result_shrink",
    ctrl(","): "result_shrink",
    ctrl("h"): "result_shrink",
    DOWN: "select_down",
    ctrl("n"): "select_down",
    ctrl("j"): "select_down",
    UP: "select_up",
    ctrl("p"): "select_up",
    ctrl("k"): "kill_to_end_or_select_up",
    ctrl("t"): "toggle_expansion",
    ENTER: "commit",
    NEWLINE: "commit",
    BACKSPACE: "search_backspace",
    DELETE: "kill_selected_session",
    ctrl("d"): "confirm_kill_all",
    ctrl("x"): "disconnect_other_clients",
    ctrl("r"): "start_rename",
    ctrl("f"): "search_right",
    ctrl("b"): "search_left",
    ctrl("a"): "search_start",
    ctrl("e"): "search_end",
    ctrl("u"): "search_kill_line",
    KeyChord.alt_shift("x"): "search_kill_line",
    ctrl("w"): "search_delete_word_backward",
    alt("d"): "search_delete_word_forward",
    alt("x"): "search_delete_forward",
    CTRL_C: "clear_search",
    TAB: "toggle_forward",
    SHIFT_TAB: "toggle_backward",
}

RENAME_KEYS: dict[KeyChord, str] = {
    ENTER: "commit",
    NEWLINE: "commit",
    BACKSPACE: "rename_backspace",
    ESCAPE: "cancel_rename",
}

KILL_ALL_CONFIRM_KEYS: dict[KeyChord, str] = {
    plain("y"): "kill_all_sessions",
    plain("n"): "cancel_kill_all",
    ESCAPE: "cancel_kill_all",
    CTRL_C: "cancel_kill_all",
}

RESURRECT_KEYS: dict[KeyChord, str] = {
    UP: "resurrect_up",
    ctrl("p"): "resurrect_up",
    ctrl("k"): "resurrect_up",
    DOWN: "resurrect_down",
    ctrl("n"): "resurrect_down",
    ctrl("j"): "resurrect_down",
    ENTER: "commit",
    NEWLINE: "commit",
    BACKSPACE: "resurrect_backspace",
    DELETE: "delete_resurrectable",
    ctrl("d"): "confirm_delete_all_resurrectable",
    TAB: "toggle_forward",
    SHIFT_TAB: "toggle_backward",
}

DELETE_ALL_CONFIRM_KEYS: dict[KeyChord, str] = {
    plain("y"): "delete_all_resurrectable",
    plain("n"): "cancel_delete_all",
    ESCAPE: "cancel_delete_all",
    CTRL_C: "cancel_delete_all",
}


def _redraw(*actions: Action) -> DispatchResult:
    return DispatchResult(list(actions), redraw=True)


class KeyDispatcher:
    """Routes a key to a handler for the current screen and sub-state."""

    def __init__(self, committer: SessionCommitter | None = None) -> None:
        self.committer = committer or SessionCommitter()

    def dispatch(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        if state.error is not None:
            state.error = None
            return DispatchResult(redraw=True)

        quit_result = self._universal_quit(state, key)
        if quit_result is not None:
            return quit_result

        table, fallback = self._table_for(state)
        handler_name = table.get(key)
        if handler_name is None and key.printable_char is not None:
            handler_name = fallback
        if handler_name is None:
            return DispatchResult()

        logger.debug("Key %s on %s -> %s", key, state.mode.value, handler_name)
        handler: Handler = getattr(self, f"_{handler_name}")
        try:
            return handler(state, key)
        except SwitcherValidationError as e:
            logger.debug("Validation failed: %s", e)
            state.show_error(e.banner)
            return DispatchResult(redraw=True)

    def _universal_quit(self, state: SwitcherState, key: KeyChord) -> DispatchResult | None:
        if state.standalone or key not in (ESCAPE, CTRL_C):
            return None
        if key == ESCAPE and state.in_sub_dialog:
            self._close_sub_dialog(state)
            return DispatchResult(redraw=True)
        return DispatchResult([HideOverlay()], redraw=False)

    @staticmethod
    def _close_sub_dialog(state: SwitcherState) -> None:
        if state.mode == ScreenMode.ATTACH:
            if state.kill_all_confirm:
                state.kill_all_confirm = False
            else:
                state.rename_field = None
        elif state.mode == ScreenMode.RESURRECT:
            state.resurrectable.cancel_delete_all()

    @staticmethod
    def _table_for(state: SwitcherState) -> tuple[dict[KeyChord, str], str | None]:
        if state.mode == ScreenMode.NEW_SESSION:
            return NEW_SESSION_KEYS, "builder_key"
        if state.mode == ScreenMode.RESURRECT:
            if state.resurrectable.delete_all_warning:
                return DELETE_ALL_CONFIRM_KEYS, None
            return RESURRECT_KEYS, "resurrect_character"
        sub_state = state.attach_sub_state
        if sub_state == AttachSubState.KILL_ALL_CONFIRM:
            return KILL_ALL_CONFIRM_KEYS, None
        if sub_state == AttachSubState.RENAMING:
            return RENAME_KEYS, "rename_insert"
        return ATTACH_KEYS, "search_insert"

    # =========================================================================
    # Shared handlers
    # =========================================================================

    def _commit(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return _redraw(*self.committer.handle_selection(state))

    def _toggle_forward(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.mode = state.mode.toggle_forward()
        return _redraw()

    def _toggle_backward(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.mode = state.mode.toggle_backward()
        return _redraw()

    # =========================================================================
    # New Session screen
    # =========================================================================

    def _layout_up(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.new_session.handle_key(UP)
        return _redraw()

    def _layout_down(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.new_session.handle_key(DOWN)
        return _redraw()

    def _builder_key(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.new_session.handle_key(key)
        return _redraw()

    def _pick_folder(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        request_id = state.requests.issue()
        return _redraw(OpenFolderPicker.for_request(request_id))

    def _clear_folder(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.new_session.new_session_folder = None
        return _redraw()

    # =========================================================================
    # Attach screen: list
    # =========================================================================

    def _result_expand(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.sessions.result_expand()
        return _redraw()

    def _result_shrink(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.sessions.result_shrink()
        return _redraw()

    def _select_down(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.sessions.move_selection_down()
        return _redraw()

    def _select_up(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.sessions.move_selection_up()
        return _redraw()

    def _toggle_expansion(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.sessions.toggle_expansion()
        # Expansion changes which tabs and panes can match.
        state.refilter()
        return _redraw()

    def _kill_selected_session(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        name = state.sessions.get_selected_session_name()
        if name is None:
            raise NoSessionSelectedError()
        logger.info("Killing session %r", name)
        state.reset_selected_index()
        state.clear_search()
        return _redraw(KillSessions((name,)))

    def _confirm_kill_all(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        if not state.sessions.all_other_sessions():
            raise NoOtherSessionsError()
        state.kill_all_confirm = True
        return _redraw()

    def _disconnect_other_clients(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return DispatchResult([DisconnectOtherClients()])

    def _start_rename(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.rename_field = ""
        return _redraw()

    # =========================================================================
    # Attach screen: search field
    # =========================================================================

    def _edit_search(self, state: SwitcherState, changed: bool) -> DispatchResult:
        if changed:
            state.refilter()
        return _redraw()

    def _search_insert(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.insert(key.printable_char or ""))

    def _search_backspace(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.backspace())

    def _search_right(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.move_right())

    def _search_left(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.move_left())

    def _search_start(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.move_to_start())

    def _search_end(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.move_to_end())

    def _search_delete_word_backward(
        self, state: SwitcherState, key: KeyChord
    ) -> DispatchResult:
        return self._edit_search(state, state.search.delete_word_backward())

    def _search_delete_word_forward(
        self, state: SwitcherState, key: KeyChord
    ) -> DispatchResult:
        return self._edit_search(state, state.search.delete_word_forward())

    def _search_delete_forward(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return self._edit_search(state, state.search.delete_forward())

    def _search_kill_line(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        if state.search.is_empty:
            return DispatchResult()
        state.clear_search()
        state.reset_selected_index()
        return _redraw()

    # Dual purpose keys: editable content wins over navigation or hiding.

    def _kill_to_end_or_select_up(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        if not state.search.is_empty:
            return self._edit_search(state, state.search.kill_to_end())
        return self._select_up(state, key)

    def _clear_search(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        # Standalone only: otherwise _universal_quit takes Ctrl+C first.
        if state.search.is_empty:
            return DispatchResult()
        state.clear_search()
        state.reset_selected_index()
        return _redraw()

    # =========================================================================
    # Attach screen: sub-dialogs
    # =========================================================================

    def _rename_insert(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.rename_field = (state.rename_field or "") + (key.printable_char or "")
        return _redraw()

    def _rename_backspace(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        if not state.rename_field:
            state.rename_field = None
        else:
            state.rename_field = state.rename_field[:-1]
        return _redraw()

    def _cancel_rename(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.rename_field = None
        return _redraw()

    def _kill_all_sessions(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        others = state.sessions.all_other_sessions()
        logger.info("Killing %d other sessions", len(others))
        state.reset_selected_index()
        state.clear_search()
        state.kill_all_confirm = False
        return _redraw(KillSessions(tuple(others)))

    def _cancel_kill_all(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.kill_all_confirm = False
        return _redraw()

    # =========================================================================
    # Resurrect screen
    # =========================================================================

    def _resurrect_up(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.resurrectable.move_selection_up()
        return _redraw()

    def _resurrect_down(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.resurrectable.move_selection_down()
        return _redraw()

    def _resurrect_character(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.resurrectable.handle_character(key.printable_char or "")
        return _redraw()

    def _resurrect_backspace(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.resurrectable.handle_backspace()
        return _redraw()

    def _delete_resurrectable(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return _redraw(*state.resurrectable.delete_selected_session())

    def _confirm_delete_all_resurrectable(
        self, state: SwitcherState, key: KeyChord
    ) -> DispatchResult:
        state.resurrectable.show_delete_all_sessions_warning()
        return _redraw()

    def _delete_all_resurrectable(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        return _redraw(*state.resurrectable.delete_all_sessions())

    def _cancel_delete_all(self, state: SwitcherState, key: KeyChord) -> DispatchResult:
        state.resurrectable.cancel_delete_all()
        return _redraw()

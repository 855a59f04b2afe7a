"""Switcher overlay widget.

Renders a ``SwitcherState`` as rich Text. The widget holds no state of its
own and never handles keys; the app redraws it whenever the switcher asks.

Example display (Attach screen):
     New Session  [Attach to Session]  Resurrect Session
    > dev_
      api [current]
    > dev (2 clients)
      notes
    <Enter> switch  <Ctrl+r> rename  <Del> kill  <Ctrl+d> kill all
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.widgets import Static

from sesh_switcher.catalog.new_session import NewSessionPhase
from sesh_switcher.models import ScreenMode
from sesh_switcher.state import AttachSubState, SwitcherState

SELECTED_STYLE = "bold reverse"
CURRENT_STYLE = "green"
ERROR_STYLE = "bold red"
HINT_STYLE = "dim"

ATTACH_CONTROLS = (
    "<Enter> switch  <Tab> screens  <Ctrl+r> rename  <Del> kill  "
    "<Ctrl+d> kill all  <Ctrl+t> tabs  <Ctrl+x> disconnect others"
)
RENAME_CONTROLS = "<Enter> rename  <Esc> cancel"
KILL_ALL_CONTROLS = "<y> kill all  <n> cancel"
NEW_SESSION_CONTROLS = "<Enter> next  <Ctrl+/> folder  <Ctrl+c> clear folder  <Tab> screens"
RESURRECT_CONTROLS = "<Enter> resurrect  <Del> delete  <Ctrl+d> delete all  <Tab> screens"
DELETE_ALL_CONTROLS = "<y> delete all  <n> cancel"


def _screen_toggle(mode: ScreenMode) -> Text:
    text = Text(" ")
    for screen in ScreenMode:
        if screen == mode:
            text.append(f"[{screen.title}]", style="bold")
        else:
            text.append(f" {screen.title} ", style=HINT_STYLE)
        text.append(" ")
    return text


def _prompt(content: str, cursor: int | None = None) -> Text:
    """A '> ' prompt; the cursor is drawn as a reversed cell."""
    text = Text("> ", style="bold")
    if cursor is None:
        cursor = len(content)
    text.append(content[:cursor])
    text.append(content[cursor : cursor + 1] or " ", style="reverse")
    text.append(content[cursor + 1 :])
    return text


def _list_line(label: str, selected: bool, style: str = "") -> Text:
    prefix = "> " if selected else "  "
    return Text(prefix + label, style=SELECTED_STYLE if selected else style)


def render_attach(state: SwitcherState) -> list[Text]:
    catalog = state.sessions
    sub_state = state.attach_sub_state
    lines: list[Text] = []

    if sub_state == AttachSubState.RENAMING:
        lines.append(Text("Rename session:", style="bold"))
        lines.append(_prompt(state.rename_field or ""))
    else:
        lines.append(_prompt(state.search.content, state.search.cursor))

    if catalog.is_searching:
        if not catalog.search_results:
            lines.append(Text("  No matches", style=HINT_STYLE))
        for i, result in enumerate(catalog.search_results):
            style = CURRENT_STYLE if result.is_current_session else ""
            lines.append(_list_line(result.label, i == catalog.selected_search_index, style))
    else:
        selected = catalog.selected_index
        for s_idx, session in enumerate(catalog.sessions):
            label = session.name
            if session.is_current_session:
                label += " [current]"
            if session.connected_clients > 1:
                label += f" ({session.connected_clients} clients)"
            on_session = selected.session == s_idx
            lines.append(
                _list_line(
                    label,
                    on_session and selected.tab is None,
                    CURRENT_STYLE if session.is_current_session else "",
                )
            )
            if not (catalog.is_expanded() or (on_session and selected.tab is not None)):
                continue
            for t_idx, tab in enumerate(session.tabs):
                on_tab = on_session and selected.tab == t_idx
                lines.append(_list_line(f"  {tab.name}", on_tab and selected.pane is None))
                if not on_tab or selected.pane is None:
                    continue
                for p_idx, pane in enumerate(tab.panes):
                    lines.append(_list_line(f"    {pane.title}", selected.pane == p_idx))

    if sub_state == AttachSubState.KILL_ALL_CONFIRM:
        count = len(catalog.all_other_sessions())
        lines.append(Text(f"Kill {count} other sessions? (y/n)", style="bold yellow"))
        lines.append(Text(KILL_ALL_CONTROLS, style=HINT_STYLE))
    elif sub_state == AttachSubState.RENAMING:
        lines.append(Text(RENAME_CONTROLS, style=HINT_STYLE))
    else:
        lines.append(Text(ATTACH_CONTROLS, style=HINT_STYLE))
    return lines


def render_new_session(state: SwitcherState) -> list[Text]:
    builder = state.new_session
    lines: list[Text] = []
    if builder.phase == NewSessionPhase.ENTERING_NAME:
        lines.append(Text("Session name (Enter for a generated one):", style="bold"))
        lines.append(_prompt(builder.name()))
    else:
        lines.append(Text(f"Session name: {builder.name() or '<generated>'}"))
        lines.append(Text("Layout:", style="bold"))
        lines.append(_prompt(builder.layout_search))
        for i, layout in enumerate(builder.visible_layouts()):
            lines.append(_list_line(layout, i == builder.selected_layout))

    folder = builder.new_session_folder
    lines.append(Text(f"Folder: {folder if folder else '<current directory>'}", style=HINT_STYLE))
    lines.append(Text(NEW_SESSION_CONTROLS, style=HINT_STYLE))
    return lines


def render_resurrect(state: SwitcherState) -> list[Text]:
    catalog = state.resurrectable
    lines = [_prompt(catalog.search_term)]
    if not catalog.filtered:
        lines.append(Text("  No resurrectable sessions", style=HINT_STYLE))
    for i, session in enumerate(catalog.filtered):
        label = session.name
        if session.age_label:
            label += f"  ({session.age_label})"
        lines.append(_list_line(label, i == catalog.selected_index))

    if catalog.delete_all_warning:
        lines.append(
            Text(f"Delete {len(catalog.sessions)} resurrectable sessions? (y/n)", style="bold yellow")
        )
        lines.append(Text(DELETE_ALL_CONTROLS, style=HINT_STYLE))
    else:
        lines.append(Text(RESURRECT_CONTROLS, style=HINT_STYLE))
    return lines


SCREEN_RENDERERS = {
    ScreenMode.NEW_SESSION: render_new_session,
    ScreenMode.ATTACH: render_attach,
    ScreenMode.RESURRECT: render_resurrect,
}


def render_state(state: SwitcherState) -> Text:
    """Render the whole overlay for ``state``."""
    lines = [_screen_toggle(state.mode), Text("")]
    lines.extend(SCREEN_RENDERERS[state.mode](state))
    if state.error:
        lines.append(Text(""))
        lines.append(Text(f"ERROR: {state.error}", style=ERROR_STYLE))
        lines.append(Text("(Press any key to dismiss)", style=HINT_STYLE))
    return Text("\n").join(lines)


class SwitcherView(Static):
    """Displays the switcher overlay."""

    DEFAULT_CSS = """
    SwitcherView {
        height: 1fr;
        padding: 1 2;
        border: round $accent;
    }
    """

    def __init__(self, state: SwitcherState, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._state = state

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        self.update(render_state(self._state))

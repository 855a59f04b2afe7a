"""Bookkeeping for the New Session screen.

Creating a session is a two step form: type a name, press Enter, pick a
layout, press Enter again. A folder chosen through the folder picker is used
as the new session's working directory.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from sesh_switcher.actions import Action, SwitchSession
from sesh_switcher.keys import BareKey, KeyChord

logger = logging.getLogger(__name__)


class NewSessionPhase(Enum):
    ENTERING_NAME = "entering_name"
    CHOOSING_LAYOUT = "choosing_layout"


class NewSessionBuilder:
    """Name, layout and folder for a session about to be created."""

    def __init__(self, default_layout: str = "default") -> None:
        self.phase = NewSessionPhase.ENTERING_NAME
        self.new_session_name = ""
        self.layouts: list[str] = [default_layout]
        self.layout_search = ""
        self.selected_layout: int | None = 0
        self.new_session_folder: Path | None = None

    def name(self) -> str:
        return self.new_session_name

    def update_layout_list(self, layouts: list[str]) -> None:
        if not layouts:
            return
        current = self.selected_layout_name()
        self.layouts = list(layouts)
        visible = self.visible_layouts()
        if current in visible:
            self.selected_layout = visible.index(current)
        else:
            self.selected_layout = 0 if visible else None

    def visible_layouts(self) -> list[str]:
        term = self.layout_search.lower()
        return [layout for layout in self.layouts if term in layout.lower()]

    def selected_layout_name(self) -> str | None:
        visible = self.visible_layouts()
        if self.selected_layout is None or self.selected_layout >= len(visible):
            return None
        return visible[self.selected_layout]

    def handle_key(self, key: KeyChord) -> None:
        """Apply an editing or navigation key to the form."""
        if key.key == BareKey.DOWN:
            self._move_layout(1)
        elif key.key == BareKey.UP:
            self._move_layout(-1)
        elif key.key == BareKey.BACKSPACE:
            self._backspace()
        elif key.key == BareKey.ESC:
            self._escape()
        elif key.printable_char is not None:
            self._type(key.printable_char)

    def _move_layout(self, delta: int) -> None:
        visible = self.visible_layouts()
        if not visible:
            self.selected_layout = None
        elif self.selected_layout is None:
            self.selected_layout = 0
        else:
            self.selected_layout = (self.selected_layout + delta) % len(visible)

    def _type(self, character: str) -> None:
        if self.phase == NewSessionPhase.ENTERING_NAME:
            self.new_session_name += character
        else:
            self.layout_search += character
            self.selected_layout = 0 if self.visible_layouts() else None

    def _backspace(self) -> None:
        if self.phase == NewSessionPhase.ENTERING_NAME:
            self.new_session_name = self.new_session_name[:-1]
        elif self.layout_search:
            self.layout_search = self.layout_search[:-1]
            self.selected_layout = 0 if self.visible_layouts() else None
        else:
            self.phase = NewSessionPhase.ENTERING_NAME

    def _escape(self) -> None:
        if self.phase == NewSessionPhase.CHOOSING_LAYOUT:
            self.phase = NewSessionPhase.ENTERING_NAME
            self.layout_search = ""
            self.selected_layout = 0
        else:
            self.new_session_name = ""

    def handle_selection(self, current_session_name: str | None) -> list[Action]:
        """Advance the form, or create the session once a layout is chosen."""
        if self.phase == NewSessionPhase.ENTERING_NAME:
            self.phase = NewSessionPhase.CHOOSING_LAYOUT
            return []

        name = self.new_session_name or None
        layout = self.selected_layout_name()
        cwd = str(self.new_session_folder) if self.new_session_folder else None
        self._reset()
        if name is not None and name == current_session_name:
            logger.debug("New session name %r is the current session, ignoring", name)
            return []
        logger.info("Creating session %r with layout %r in %s", name, layout, cwd)
        return [SwitchSession(name, layout=layout, cwd=cwd)]

    def _reset(self) -> None:
        self.phase = NewSessionPhase.ENTERING_NAME
        self.new_session_name = ""
        self.layout_search = ""
        self.selected_layout = 0

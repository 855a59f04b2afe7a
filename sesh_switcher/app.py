"""Main Textual app class.

This module provides the session switcher TUI: a ``Switcher`` driven by
Textual key events, talking to a ``SessionHost`` (tmux by default).
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message

from sesh_switcher.actions import Action, HideOverlay, OpenFolderPicker
from sesh_switcher.events import FILEPICKER_RESULT, ModeUpdate, PipeMessage
from sesh_switcher.host.base import SessionHost
from sesh_switcher.host.resurrect_store import ResurrectStore
from sesh_switcher.host.tmux import RESURRECT_STORE_PATH, TmuxHost
from sesh_switcher.keys import chord_from_key
from sesh_switcher.models import SwitcherConfig
from sesh_switcher.screens.modals.folder_picker import FolderPickerModal
from sesh_switcher.switcher import Switcher
from sesh_switcher.widgets.switcher_view import SwitcherView

logger = logging.getLogger(__name__)


class KeyCapture(SwitcherView, can_focus=True):
    """The switcher view, taking every key that reaches it."""

    class Pressed(Message):
        """Posted for each key the view captures."""

        def __init__(self, key: str, character: str | None) -> None:
            super().__init__()
            self.key = key
            self.character = character

    def on_key(self, event: events.Key) -> None:
        # Stopping here keeps Tab, Ctrl+C and friends away from app bindings.
        event.stop()
        event.prevent_default()
        self.post_message(self.Pressed(event.key, event.character))


class SessionSwitcherApp(App):
    """Session switcher TUI application."""

    TITLE = "Session Switcher"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        config: SwitcherConfig | None = None,
        host: SessionHost | None = None,
    ) -> None:
        """Initialize the application.

        Args:
            config: Switcher configuration (defaults if omitted).
            host: Session host to run actions on (tmux if omitted).
        """
        super().__init__()
        self.config = config or SwitcherConfig()
        self.host = host or TmuxHost(
            binary=self.config.tmux_binary,
            store=ResurrectStore(RESURRECT_STORE_PATH, limit=self.config.resurrect_limit),
        )
        self._outbox: list[Action] = []
        self.switcher = Switcher(self.config, action_sink=self._outbox.append)
        # Held directly: while a modal is open the view is not on the active screen.
        self.switcher_view = KeyCapture(self.switcher.state, id="switcher")

    def compose(self) -> ComposeResult:
        yield self.switcher_view

    async def on_mount(self) -> None:
        self.switcher.load()
        self.switcher.update(ModeUpdate(palette=self.theme, is_web_client=False))
        await self.refresh_topology()
        self._run_outbox()
        self.switcher_view.focus()
        self.set_interval(self.config.poll_interval_ms / 1000, self.refresh_topology)

    async def refresh_topology(self) -> None:
        update = await self.host.query_topology()
        if self.switcher.update(update):
            self.switcher_view.refresh_view()

    def on_key_capture_pressed(self, message: KeyCapture.Pressed) -> None:
        chord = chord_from_key(message.key, message.character)
        if chord is None:
            logger.debug("Ignoring key %s", message.key)
            return
        if self.switcher.handle_key(chord):
            self.switcher_view.refresh_view()
        self._run_outbox()

    def _run_outbox(self) -> None:
        if not self._outbox:
            return
        actions = list(self._outbox)
        self._outbox.clear()
        self.run_worker(self._run_actions(actions), group="host", exclusive=False)

    async def _run_actions(self, actions: list[Action]) -> None:
        """Run actions in order; hiding the overlay ends the app."""
        for action in actions:
            if isinstance(action, HideOverlay):
                self.exit()
                return
            if isinstance(action, OpenFolderPicker):
                self.open_folder_picker(action)
                continue
            await self.host.execute(action)
        await self.refresh_topology()

    def open_folder_picker(self, action: OpenFolderPicker) -> None:
        def on_dismiss(folder: Path | None) -> None:
            # A cancelled picker sends no payload; the request stays pending.
            payload = str(folder) if folder is not None else None
            message = PipeMessage(FILEPICKER_RESULT, payload, dict(action.args))
            if self.switcher.pipe(message):
                self.switcher_view.refresh_view()

        self.push_screen(FolderPickerModal(title=action.title), on_dismiss)

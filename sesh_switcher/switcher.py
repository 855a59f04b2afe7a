"""The switcher instance: event handling around the key dispatcher.

``Switcher`` owns the state aggregate, feeds host events into it, and hands
every action the dispatcher decides on to an action sink. The sink is
fire-and-forget; nothing here waits for a host call to finish.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from sesh_switcher.actions import Action, RequestPermissions, Subscribe
from sesh_switcher.dispatcher import KeyDispatcher
from sesh_switcher.events import (
    FILEPICKER_RESULT,
    Event,
    KeyEvent,
    ModeUpdate,
    PermissionRequestResult,
    PipeMessage,
    RunCommandResult,
    SessionUpdate,
)
from sesh_switcher.keys import KeyChord
from sesh_switcher.models import SessionInfo, SwitcherConfig
from sesh_switcher.state import SwitcherState

logger = logging.getLogger(__name__)

ActionSink = Callable[[Action], None]


class Switcher:
    """A running switcher: state, dispatcher, and an action sink."""

    def __init__(
        self,
        config: SwitcherConfig | None = None,
        action_sink: ActionSink | None = None,
        dispatcher: KeyDispatcher | None = None,
    ) -> None:
        self.state = SwitcherState.from_config(config or SwitcherConfig())
        self.dispatcher = dispatcher or KeyDispatcher()
        self._sink = action_sink

    def set_action_sink(self, action_sink: ActionSink) -> None:
        self._sink = action_sink

    def _emit(self, actions: list[Action]) -> None:
        for action in actions:
            logger.debug("Emitting %s", action)
            if self._sink is not None:
                self._sink(action)

    def load(self) -> None:
        """Ask for permissions and subscribe to the events we handle."""
        self._emit([RequestPermissions(), Subscribe()])

    # -------------------------------------------------------------------------
    # Inbound events
    # -------------------------------------------------------------------------

    def update(self, event: Event) -> bool:
        """Handle a host event.

        Returns:
            True if the overlay should be redrawn.
        """
        if isinstance(event, KeyEvent):
            return self.handle_key(event.key)
        if isinstance(event, ModeUpdate):
            self.state.palette = event.palette
            self.state.is_web_client = bool(event.is_web_client)
            return True
        if isinstance(event, SessionUpdate):
            self.handle_session_update(event)
            return True
        if isinstance(event, PermissionRequestResult):
            if not event.granted:
                logger.warning("Host denied permissions, session actions will fail")
            return True
        if isinstance(event, RunCommandResult):
            logger.debug("Command result %s: %s", event.exit_code, event.stderr.strip())
            return False
        return False

    def handle_key(self, key: KeyChord) -> bool:
        result = self.dispatcher.dispatch(self.state, key)
        self._emit(result.actions)
        return result.redraw

    def pipe(self, message: PipeMessage) -> bool:
        """Handle a pipe message; only folder picker results are understood."""
        if message.name != FILEPICKER_RESULT:
            return False
        request_id = message.args.get("request_id")
        if message.payload is not None and request_id is not None:
            if self.state.requests.resolve(request_id):
                self.state.new_session.new_session_folder = Path(message.payload)
                logger.info("New session folder set to %s", message.payload)
        return True

    def handle_session_update(self, event: SessionUpdate) -> None:
        for session in event.sessions:
            if session.is_current_session:
                self.state.new_session.update_layout_list(session.available_layouts)
        self.state.resurrectable.update(event.resurrectable)
        self.update_session_infos(event.sessions)

    def update_session_infos(self, sessions: list[SessionInfo]) -> None:
        """Split sessions into attachable and forbidden ones for this client.

        In standalone mode the current session is not listed: attaching to it
        from itself is meaningless.
        """
        state = self.state
        visible: list[SessionInfo] = []
        forbidden: list[SessionInfo] = []
        for session in sessions:
            if state.is_web_client and not session.web_clients_allowed:
                forbidden.append(session)
            elif state.standalone and session.is_current_session:
                continue
            else:
                visible.append(session)

        current = next((s.name for s in sessions if s.is_current_session), None)
        if current is not None:
            state.current_session_name = current
        state.sessions.set_sessions(visible, forbidden)

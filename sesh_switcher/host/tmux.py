"""tmux session host.

Maps switcher actions onto tmux commands and reads the session topology
(sessions, windows as tabs, panes) from tmux format strings. Sessions this
host kills are remembered in a ``ResurrectStore`` so they can be recreated
from the Resurrect screen.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from datetime import datetime

from sesh_switcher.actions import (
    Action,
    DeleteResurrectable,
    DisconnectOtherClients,
    FocusPane,
    GoToTab,
    KillSessions,
    RenameSession,
    RequestPermissions,
    Subscribe,
    SwitchSession,
)
from sesh_switcher.config import CONFIG_DIR
from sesh_switcher.events import SessionUpdate
from sesh_switcher.exceptions import (
    HostError,
    TmuxCommandError,
    TmuxNotAvailableError,
    record_error,
)
from sesh_switcher.host.resurrect_store import ResurrectStore
from sesh_switcher.logging_config import log_exception
from sesh_switcher.models import (
    PaneId,
    PaneInfo,
    ResurrectableSession,
    SessionInfo,
    TabInfo,
)

logger = logging.getLogger(__name__)

RESURRECT_STORE_PATH = CONFIG_DIR / "resurrectable.json"

# tmux's built-in layouts, offered on the New Session screen.
TMUX_LAYOUTS = [
    "default",
    "even-horizontal",
    "even-vertical",
    "main-horizontal",
    "main-vertical",
    "tiled",
]

_SEP = "\t"
SESSION_FORMAT = _SEP.join(["#{session_name}", "#{session_attached}"])
WINDOW_FORMAT = _SEP.join(
    ["#{session_name}", "#{window_index}", "#{window_name}", "#{window_active}"]
)
PANE_FORMAT = _SEP.join(
    ["#{session_name}", "#{window_index}", "#{pane_id}", "#{pane_title}", "#{pane_active}"]
)


class TmuxHost:
    """Runs switcher actions against a tmux server."""

    def __init__(
        self,
        binary: str = "tmux",
        store: ResurrectStore | None = None,
    ) -> None:
        self.binary = binary
        self.store = store or ResurrectStore(RESURRECT_STORE_PATH)

    async def _run_tmux(self, *args: str) -> str:
        """Run a tmux command.

        Returns:
            Command stdout.

        Raises:
            TmuxNotAvailableError: If the tmux binary cannot be started.
            TmuxCommandError: If tmux exits non-zero.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise TmuxNotAvailableError(binary=self.binary, cause=e) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise TmuxCommandError(
                args=[self.binary, *args],
                returncode=process.returncode,
                stderr=stderr.decode(errors="replace"),
            )
        return stdout.decode(errors="replace")

    async def _lines(self, *args: str) -> list[list[str]]:
        output = await self._run_tmux(*args)
        return [line.split(_SEP) for line in output.splitlines() if line]

    async def _has_session(self, name: str) -> bool:
        try:
            await self._run_tmux("has-session", "-t", f"={name}")
        except TmuxCommandError:
            return False
        return True

    async def _current_session_name(self) -> str | None:
        try:
            output = await self._run_tmux("display-message", "-p", "#{session_name}")
        except TmuxCommandError:
            # Not running inside a tmux client.
            return None
        return output.strip() or None

    # -------------------------------------------------------------------------
    # Topology
    # -------------------------------------------------------------------------

    async def query_topology(self) -> SessionUpdate:
        """Read live sessions from tmux; tmux failures yield no live sessions."""
        try:
            current = await self._current_session_name()
            session_rows = await self._lines("list-sessions", "-F", SESSION_FORMAT)
            window_rows = await self._lines("list-windows", "-a", "-F", WINDOW_FORMAT)
            pane_rows = await self._lines("list-panes", "-a", "-F", PANE_FORMAT)
        except TmuxCommandError as e:
            # No server running means no sessions.
            logger.debug("tmux topology unavailable: %s", e)
            current, session_rows, window_rows, pane_rows = None, [], [], []
        except HostError as e:
            record_error(e)
            log_exception(logger, e, "tmux topology query failed")
            current, session_rows, window_rows, pane_rows = None, [], [], []

        sessions = parse_topology(session_rows, window_rows, pane_rows, current)
        live_names = {s.name for s in sessions}
        resurrectable = [s for s in self.store.load() if s.name not in live_names]
        return SessionUpdate(sessions=sessions, resurrectable=resurrectable)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def execute(self, action: Action) -> None:
        """Run an action; tmux failures are logged and recorded, not raised."""
        try:
            await self._execute(action)
        except HostError as e:
            record_error(e)
            log_exception(logger, e, f"tmux action {type(action).__name__} failed")

    async def _execute(self, action: Action) -> None:
        if isinstance(action, SwitchSession):
            await self.switch_session(action)
        elif isinstance(action, KillSessions):
            for name in action.names:
                await self.kill_session(name)
        elif isinstance(action, RenameSession):
            await self._run_tmux("rename-session", action.new_name)
        elif isinstance(action, FocusPane):
            await self._run_tmux("select-window", "-t", action.pane.id)
            await self._run_tmux("select-pane", "-t", action.pane.id)
        elif isinstance(action, GoToTab):
            await self._run_tmux("select-window", "-t", f":{action.position}")
        elif isinstance(action, DisconnectOtherClients):
            await self._run_tmux("detach-client", "-a")
        elif isinstance(action, DeleteResurrectable):
            self.store.remove(action.names)
        elif isinstance(action, (RequestPermissions, Subscribe)):
            logger.debug("tmux needs no %s", type(action).__name__)
        else:
            logger.warning("tmux host cannot run %s", action)

    async def switch_session(self, action: SwitchSession) -> None:
        name = action.name
        if name is None or not await self._has_session(name):
            name = await self.create_session(action)

        if action.pane is not None:
            target = action.pane.id
        elif action.tab_position is not None:
            target = f"={name}:{action.tab_position}"
        else:
            target = f"={name}"
        await self._run_tmux("switch-client", "-t", target)

    async def create_session(self, action: SwitchSession) -> str:
        """Create a detached session, resurrecting its tabs if it was killed here."""
        saved = self.store.get(action.name) if action.name else None
        cwd = action.cwd or (saved.working_dir if saved else None)

        args = ["new-session", "-d", "-P", "-F", "#{session_name}"]
        if action.name:
            args += ["-s", action.name]
        if cwd:
            args += ["-c", cwd]
        if saved and saved.tab_names:
            args += ["-n", saved.tab_names[0]]
        name = (await self._run_tmux(*args)).strip()

        if saved:
            for tab_name in saved.tab_names[1:]:
                window_args = ["new-window", "-d", "-t", f"={name}:", "-n", tab_name]
                if cwd:
                    window_args += ["-c", cwd]
                await self._run_tmux(*window_args)
            self.store.remove([saved.name])
            logger.info("Resurrected session %r", name)

        if action.layout and action.layout != "default":
            await self._run_tmux("select-layout", "-t", f"={name}:", action.layout)
        logger.info("Created session %r", name)
        return name

    async def kill_session(self, name: str) -> None:
        working_dir: str | None = None
        tab_names: list[str] = []
        try:
            working_dir = (
                await self._run_tmux(
                    "display-message", "-p", "-t", f"={name}:", "#{pane_current_path}"
                )
            ).strip() or None
            tab_names = [
                row[0] for row in await self._lines("list-windows", "-t", f"={name}", "-F", "#{window_name}")
            ]
        except TmuxCommandError as e:
            logger.debug("Could not snapshot session %r before kill: %s", name, e)

        await self._run_tmux("kill-session", "-t", f"={name}")
        self.store.add(
            ResurrectableSession(
                name=name,
                closed_at=datetime.now(),
                working_dir=working_dir,
                tab_names=tab_names,
            )
        )
        logger.info("Killed session %r", name)


def parse_topology(
    session_rows: list[list[str]],
    window_rows: list[list[str]],
    pane_rows: list[list[str]],
    current_session: str | None,
) -> list[SessionInfo]:
    """Build SessionInfo trees from tab-separated tmux format rows."""
    sessions: dict[str, SessionInfo] = {}
    for row in session_rows:
        if len(row) < 2:
            continue
        name, attached = row[0], row[1]
        sessions[name] = SessionInfo(
            name=name,
            is_current_session=name == current_session,
            connected_clients=int(attached) if attached.isdigit() else 0,
            available_layouts=list(TMUX_LAYOUTS),
        )

    tabs: dict[tuple[str, str], TabInfo] = {}
    for row in window_rows:
        if len(row) < 4 or row[0] not in sessions:
            continue
        session_name, index, window_name, active = row[:4]
        tab = TabInfo(
            position=int(index) if index.isdigit() else len(sessions[session_name].tabs),
            name=window_name,
            is_active=active == "1",
        )
        tabs[(session_name, index)] = tab
        sessions[session_name].tabs.append(tab)

    for row in pane_rows:
        if len(row) < 5:
            continue
        session_name, index, pane_id, title, active = row[:5]
        tab = tabs.get((session_name, index))
        if tab is None:
            continue
        tab.panes.append(
            PaneInfo(pane_id=PaneId(pane_id), title=title, is_focused=active == "1")
        )

    return list(sessions.values())

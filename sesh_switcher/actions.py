"""Host actions decided by the key dispatcher.

Actions are small frozen dataclasses. The dispatcher and committer only
produce them; a ``SessionHost`` executes them. None of them expect a reply.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sesh_switcher.models import PaneId

FOLDER_PICKER_PLUGIN = "filepicker"
FOLDER_PICKER_TITLE = "Select folder for the new session..."


class Action:
    """Marker base class for everything a host can be asked to do."""

    __slots__ = ()


@dataclass(frozen=True)
class HideOverlay(Action):
    """Hide the switcher overlay."""


@dataclass(frozen=True)
class KillSessions(Action):
    names: tuple[str, ...]


@dataclass(frozen=True)
class RenameSession(Action):
    """Rename the session the switcher is running in."""

    new_name: str


@dataclass(frozen=True)
class SwitchSession(Action):
    """Switch to (or create) a session, optionally focusing a tab or pane.

    ``layout`` and ``cwd`` only apply when the host has to create the session.
    A ``name`` of None asks the host to pick one.
    """

    name: str | None
    tab_position: int | None = None
    pane: PaneId | None = None
    layout: str | None = None
    cwd: str | None = None


@dataclass(frozen=True)
class FocusPane(Action):
    pane: PaneId


@dataclass(frozen=True)
class GoToTab(Action):
    position: int


@dataclass(frozen=True)
class DisconnectOtherClients(Action):
    """Detach every other client attached to the current session."""


@dataclass(frozen=True)
class DeleteResurrectable(Action):
    names: tuple[str, ...]


@dataclass(frozen=True)
class OpenFolderPicker(Action):
    """Open the folder picker helper.

    ``config`` determines the helper instance identity, ``args`` is data the
    helper echoes back with its ``filepicker_result`` message.
    """

    request_id: str
    plugin: str = FOLDER_PICKER_PLUGIN
    title: str = FOLDER_PICKER_TITLE
    config: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    args: dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def for_request(cls, request_id: str) -> OpenFolderPicker:
        return cls(
            request_id=request_id,
            config={"request_id": request_id},
            args={"request_id": request_id},
        )


@dataclass(frozen=True)
class RequestPermissions(Action):
    permissions: tuple[str, ...] = ("ReadApplicationState", "ChangeApplicationState")


@dataclass(frozen=True)
class Subscribe(Action):
    events: tuple[str, ...] = ("ModeUpdate", "SessionUpdate", "Key", "RunCommandResult")

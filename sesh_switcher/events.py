"""Inbound events the switcher consumes from its host."""

from __future__ import annotations

from dataclasses import dataclass, field

from sesh_switcher.keys import KeyChord
from sesh_switcher.models import ResurrectableSession, SessionInfo

FILEPICKER_RESULT = "filepicker_result"


class Event:
    """Marker base class for host events."""

    __slots__ = ()


@dataclass
class ModeUpdate(Event):
    """Style and client information; sent at start and on theme changes."""

    palette: str = "default"
    is_web_client: bool | None = None


@dataclass
class KeyEvent(Event):
    key: KeyChord


@dataclass
class SessionUpdate(Event):
    """Full session topology: live sessions and resurrectable ones."""

    sessions: list[SessionInfo] = field(default_factory=list)
    resurrectable: list[ResurrectableSession] = field(default_factory=list)


@dataclass
class PermissionRequestResult(Event):
    granted: bool = True


@dataclass
class RunCommandResult(Event):
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    context: dict[str, str] = field(default_factory=dict)


@dataclass
class PipeMessage:
    """A named message from another plugin, e.g. the folder picker result."""

    name: str
    payload: str | None = None
    args: dict[str, str] = field(default_factory=dict)

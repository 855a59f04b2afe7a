"""Core dataclasses for screens, sessions, tabs, panes and configuration.

Configuration models are loaded from JSON with dacite.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum


# =============================================================================
# Screen Models
# =============================================================================


class ScreenMode(Enum):
    """The three top-level screens of the switcher.

    Declaration order is the forward toggle order.
    """

    NEW_SESSION = "new"
    ATTACH = "attach"
    RESURRECT = "resurrect"

    def toggle_forward(self) -> ScreenMode:
        """Return the next screen: New -> Attach -> Resurrect -> New."""
        modes = list(ScreenMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    def toggle_backward(self) -> ScreenMode:
        """Return the previous screen: New -> Resurrect -> Attach -> New."""
        modes = list(ScreenMode)
        return modes[(modes.index(self) - 1) % len(modes)]

    @property
    def title(self) -> str:
        return {
            ScreenMode.NEW_SESSION: "New Session",
            ScreenMode.ATTACH: "Attach to Session",
            ScreenMode.RESURRECT: "Resurrect Session",
        }[self]


# =============================================================================
# Session Topology Models
# =============================================================================


@dataclass(frozen=True)
class PaneId:
    """Identity of a pane within a session."""

    id: str  # Host pane identifier (e.g. "%3" for tmux)
    is_plugin: bool = False  # Non-terminal pane


@dataclass
class PaneInfo:
    """A pane inside a tab."""

    pane_id: PaneId
    title: str
    is_focused: bool = False


@dataclass
class TabInfo:
    """A tab (tmux window) inside a session."""

    position: int  # Zero-based index within the session
    name: str
    panes: list[PaneInfo] = field(default_factory=list)
    is_active: bool = False


@dataclass
class SessionInfo:
    """A live session as reported by the host."""

    name: str
    tabs: list[TabInfo] = field(default_factory=list)
    is_current_session: bool = False
    connected_clients: int = 0
    web_clients_allowed: bool = True
    available_layouts: list[str] = field(default_factory=list)


@dataclass
class ResurrectableSession:
    """A session that is not running but can be recreated by the host."""

    name: str
    closed_at: datetime | None = None
    working_dir: str | None = None
    tab_names: list[str] = field(default_factory=list)

    @property
    def age_label(self) -> str:
        """Short human label for how long ago the session closed."""
        if self.closed_at is None:
            return ""
        seconds = int((datetime.now() - self.closed_at).total_seconds())
        if seconds < 60:
            return f"{seconds}s ago"
        if seconds < 3600:
            return f"{seconds // 60}m ago"
        if seconds < 86400:
            return f"{seconds // 3600}h ago"
        return f"{seconds // 86400}d ago"


# =============================================================================
# Configuration Models
# =============================================================================


@dataclass
class SwitcherConfig:
    """Switcher configuration.

    ``standalone`` selects the welcome presentation: quit keys no longer hide
    the overlay, the current session is not listed, and the switcher opens
    on the New Session screen.
    """

    standalone: bool = False
    poll_interval_ms: int = 1000
    default_layout: str = "default"
    tmux_binary: str = "tmux"
    resurrect_limit: int = 50

    @property
    def default_screen(self) -> ScreenMode:
        return ScreenMode.NEW_SESSION if self.standalone else ScreenMode.ATTACH


def model_to_dict(obj: object) -> dict:
    """Convert a dataclass model to a JSON-compatible dict."""
    return asdict(obj)  # type: ignore[call-overload]

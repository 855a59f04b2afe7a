"""Session switcher.

A keyboard-driven overlay for creating, attaching to, renaming, killing and
resurrecting terminal multiplexer sessions. The key handling lives in
``KeyDispatcher`` and runs against a plain ``SwitcherState``; a
``SessionHost`` (tmux by default) carries out the resulting actions.

Programmatic Usage:
    from sesh_switcher import BareKey, KeyChord, Switcher

    actions = []
    switcher = Switcher(action_sink=actions.append)
    switcher.handle_key(KeyChord.plain("d"))
    switcher.handle_key(KeyChord.plain(BareKey.ENTER))
"""

__version__ = "0.1.0"

# =============================================================================
# Core
# =============================================================================

from sesh_switcher.dispatcher import DispatchResult, KeyDispatcher
from sesh_switcher.state import AttachSubState, SwitcherState
from sesh_switcher.switcher import Switcher

# =============================================================================
# Keys, Actions and Events
# =============================================================================

from sesh_switcher.keys import BareKey, KeyChord, Modifier, chord_from_key
from sesh_switcher.actions import (
    Action,
    DeleteResurrectable,
    DisconnectOtherClients,
    FocusPane,
    GoToTab,
    HideOverlay,
    KillSessions,
    OpenFolderPicker,
    RenameSession,
    RequestPermissions,
    Subscribe,
    SwitchSession,
)
from sesh_switcher.events import (
    KeyEvent,
    ModeUpdate,
    PermissionRequestResult,
    PipeMessage,
    RunCommandResult,
    SessionUpdate,
)

# =============================================================================
# Data Models
# =============================================================================

from sesh_switcher.models import (
    PaneId,
    PaneInfo,
    ResurrectableSession,
    ScreenMode,
    SessionInfo,
    SwitcherConfig,
    TabInfo,
)

# =============================================================================
# Configuration
# =============================================================================

from sesh_switcher.config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Core
    "DispatchResult",
    "KeyDispatcher",
    "AttachSubState",
    "SwitcherState",
    "Switcher",
    # Keys
    "BareKey",
    "KeyChord",
    "Modifier",
    "chord_from_key",
    # Actions
    "Action",
    "DeleteResurrectable",
    "DisconnectOtherClients",
    "FocusPane",
    "GoToTab",
    "HideOverlay",
    "KillSessions",
    "OpenFolderPicker",
    "RenameSession",
    "RequestPermissions",
    "Subscribe",
    "SwitchSession",
    # Events
    "KeyEvent",
    "ModeUpdate",
    "PermissionRequestResult",
    "PipeMessage",
    "RunCommandResult",
    "SessionUpdate",
    # Models
    "PaneId",
    "PaneInfo",
    "ResurrectableSession",
    "ScreenMode",
    "SessionInfo",
    "SwitcherConfig",
    "TabInfo",
    # Configuration
    "load_config",
    "save_config",
]

"""Session lists and the new session form the key dispatcher drives."""

from sesh_switcher.catalog.new_session import NewSessionBuilder, NewSessionPhase
from sesh_switcher.catalog.resurrectable import ResurrectionCatalog
from sesh_switcher.catalog.session_list import SearchResult, SelectedIndex, SessionCatalog

__all__ = [
    "NewSessionBuilder",
    "NewSessionPhase",
    "ResurrectionCatalog",
    "SearchResult",
    "SelectedIndex",
    "SessionCatalog",
]

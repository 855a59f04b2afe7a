"""Session hosts: adapters that run switcher actions."""

from sesh_switcher.host.base import SessionHost
from sesh_switcher.host.resurrect_store import ResurrectStore
from sesh_switcher.host.tmux import TmuxHost, parse_topology

__all__ = ["SessionHost", "ResurrectStore", "TmuxHost", "parse_topology"]

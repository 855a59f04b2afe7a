"""Widgets for the switcher app."""

from sesh_switcher.widgets.switcher_view import SwitcherView, render_state

__all__ = ["SwitcherView", "render_state"]

"""Session host abstraction.

A host executes switcher actions and reports session topology. The tmux
adapter is the real implementation; ``sesh_switcher.testing`` provides a
recording one for tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sesh_switcher.actions import Action
    from sesh_switcher.events import SessionUpdate


@runtime_checkable
class SessionHost(Protocol):
    """Protocol for anything that can run session actions."""

    async def execute(self, action: Action) -> None:
        """Run one action. Failures are logged by the host, never raised."""
        ...

    async def query_topology(self) -> SessionUpdate:
        """Return the current live and resurrectable sessions."""
        ...

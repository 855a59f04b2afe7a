"""Session name rules checked before creating or renaming a session.

Checks run in a fixed order so the same bad name always produces the same
message. Failures raise a ``SwitcherValidationError`` subclass whose
``banner`` is shown to the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sesh_switcher.exceptions import (
    EmptySessionNameError,
    ForbiddenSessionError,
    RenameSlashError,
    ResurrectableSessionExistsError,
    SessionExistsError,
    SessionNameSlashError,
    SessionNameTooLongError,
)

if TYPE_CHECKING:
    from sesh_switcher.catalog import ResurrectionCatalog, SessionCatalog

# Session names end up in a unix socket path, which is capped at 108 bytes.
MAX_SESSION_NAME_BYTES = 108


class SelectionValidator:
    """Pure name checks against the current catalogs."""

    def __init__(
        self, sessions: SessionCatalog, resurrectable: ResurrectionCatalog
    ) -> None:
        self.sessions = sessions
        self.resurrectable = resurrectable

    def validate_new_session_name(self, name: str) -> None:
        """Check a name for the New Session screen.

        Raises:
            SessionNameTooLongError: The name is 108 bytes or longer.
            SessionNameSlashError: The name contains '/'.
            ForbiddenSessionError: The name is a live session this client
                may not attach to.
        """
        length = len(name.encode("utf-8"))
        if length >= MAX_SESSION_NAME_BYTES:
            raise SessionNameTooLongError(length)
        if "/" in name:
            raise SessionNameSlashError()
        if self.sessions.has_forbidden_session(name):
            raise ForbiddenSessionError(name)

    def validate_rename(self, new_name: str, current_name: str | None) -> bool:
        """Check a new name for the current session.

        Returns:
            False when the name is unchanged and the rename is a no-op,
            True when the rename should go ahead.

        Raises:
            EmptySessionNameError, SessionExistsError,
            ResurrectableSessionExistsError, RenameSlashError.
        """
        if not new_name:
            raise EmptySessionNameError()
        if new_name == current_name:
            return False
        if self.sessions.has_session(new_name):
            raise SessionExistsError(new_name)
        if self.resurrectable.has_session(new_name):
            raise ResurrectableSessionExistsError(new_name)
        if "/" in new_name:
            raise RenameSlashError()
        return True

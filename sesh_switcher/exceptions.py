"""Exception hierarchy for the session switcher.

Three families matter to the rest of the package:
- Validation errors are user-facing. Their message is shown verbatim in the
  error banner and cleared by the next keystroke.
- Configuration errors are raised while loading ``config.json``.
- Host errors come from the tmux adapter. The key-dispatch core never sees
  them because host actions are fire-and-forget.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class SeshSwitcherError(Exception):
    """Base exception for all session switcher errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Validation Errors (shown in the error banner)
# =============================================================================


class SwitcherValidationError(SeshSwitcherError):
    """Base class for errors surfaced to the user as a banner.

    ``banner`` is the exact text shown; ``str()`` may carry extra context
    for the log.
    """

    default_message = "Invalid selection"

    def __init__(
        self,
        message: str | None = None,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or self.default_message, context=context)

    @property
    def banner(self) -> str:
        return self.message


class SessionNameTooLongError(SwitcherValidationError):
    """Raised when a session name would overflow the socket path limit."""

    default_message = "Session name must be shorter than 108 bytes"

    def __init__(self, length: int) -> None:
        super().__init__(context={"length": length})


class SessionNameSlashError(SwitcherValidationError):
    """Raised when a new session name contains a path separator."""

    default_message = "Session name cannot contain '/'"


class ForbiddenSessionError(SwitcherValidationError):
    """Raised when the name belongs to a session this client may not attach to."""

    default_message = "This session exists and web clients cannot attach to it."

    def __init__(self, session_name: str) -> None:
        super().__init__(context={"session_name": session_name})


class EmptySessionNameError(SwitcherValidationError):
    default_message = "New name must not be empty."


class SessionExistsError(SwitcherValidationError):
    default_message = "A session by this name already exists."

    def __init__(self, session_name: str) -> None:
        super().__init__(context={"session_name": session_name})


class ResurrectableSessionExistsError(SwitcherValidationError):
    default_message = "A resurrectable session by this name already exists."

    def __init__(self, session_name: str) -> None:
        super().__init__(context={"session_name": session_name})


class RenameSlashError(SwitcherValidationError):
    default_message = "Session names cannot contain '/'"


class NoSessionSelectedError(SwitcherValidationError):
    default_message = "Must select session before killing it."


class NoOtherSessionsError(SwitcherValidationError):
    default_message = "No other sessions to kill. Quit to kill the current one."


class AlreadyAttachedError(SwitcherValidationError):
    default_message = "Already attached..."


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(SeshSwitcherError):
    """Base class for configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read or parsed."""

    def __init__(
        self,
        message: str = "Failed to load configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ConfigError):
    """Raised when the configuration does not match the schema."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = str(value)[:100]
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Host Errors
# =============================================================================


class HostError(SeshSwitcherError):
    """Base class for errors raised by a session host adapter."""

    pass


class TmuxNotAvailableError(HostError):
    """Raised when the tmux binary cannot be found or started."""

    def __init__(
        self,
        message: str = "tmux is not available",
        *,
        binary: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = {"binary": binary} if binary else {}
        super().__init__(message, context=ctx, cause=cause)


class TmuxCommandError(HostError):
    """Raised when a tmux command exits with a non-zero status."""

    def __init__(
        self,
        message: str = "tmux command failed",
        *,
        args: list[str] | tuple[str, ...] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx: dict[str, Any] = {}
        if args:
            ctx["args"] = " ".join(args)
        if returncode is not None:
            ctx["returncode"] = returncode
        if stderr:
            ctx["stderr"] = stderr.strip()[:200]
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for debugging."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 50

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)


error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)

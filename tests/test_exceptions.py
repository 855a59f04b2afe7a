"""Tests for custom exception hierarchy."""

from sesh_switcher.exceptions import (
    AlreadyAttachedError,
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    ErrorStats,
    ForbiddenSessionError,
    HostError,
    NoOtherSessionsError,
    SeshSwitcherError,
    SessionNameTooLongError,
    SwitcherValidationError,
    TmuxCommandError,
    TmuxNotAvailableError,
    error_stats,
    record_error,
)


class TestExceptionHierarchy:
    """Test that exceptions are properly organized in hierarchy."""

    def test_base_exception_properties(self):
        exc = SeshSwitcherError("test message", context={"key": "value"})
        assert exc.message == "test message"
        assert exc.context == {"key": "value"}
        assert exc.timestamp is not None
        assert exc.cause is None

    def test_base_exception_str_with_context(self):
        exc = SeshSwitcherError("test", context={"file": "test.txt"})
        assert str(exc) == "test (file=test.txt)"

    def test_base_exception_str_without_context(self):
        assert str(SeshSwitcherError("just a message")) == "just a message"

    def test_families(self):
        assert issubclass(SwitcherValidationError, SeshSwitcherError)
        assert issubclass(ConfigLoadError, ConfigError)
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(TmuxCommandError, HostError)
        assert issubclass(TmuxNotAvailableError, HostError)


class TestValidationBanners:
    """Banners are the exact user-facing text; context stays out of them."""

    def test_banner_excludes_context(self):
        exc = ForbiddenSessionError("secret")
        assert exc.banner == "This session exists and web clients cannot attach to it."
        assert "session_name=secret" in str(exc)

    def test_too_long_banner(self):
        exc = SessionNameTooLongError(120)
        assert exc.banner == "Session name must be shorter than 108 bytes"
        assert exc.context == {"length": 120}

    def test_fixed_banners(self):
        assert NoOtherSessionsError().banner == (
            "No other sessions to kill. Quit to kill the current one."
        )
        assert AlreadyAttachedError().banner == "Already attached..."

    def test_custom_message(self):
        assert SwitcherValidationError("custom").banner == "custom"


class TestHostErrors:
    def test_tmux_command_error_context(self):
        exc = TmuxCommandError(args=["tmux", "kill-session"], returncode=1, stderr="no server\n")
        assert exc.context == {
            "args": "tmux kill-session",
            "returncode": 1,
            "stderr": "no server",
        }

    def test_tmux_not_available(self):
        cause = FileNotFoundError("tmux")
        exc = TmuxNotAvailableError(binary="tmux", cause=cause)
        assert exc.cause is cause
        assert exc.context == {"binary": "tmux"}


class TestErrorStats:
    def test_record(self):
        stats = ErrorStats(max_recent=2)
        stats.record(ValueError("a"))
        stats.record(ValueError("b"))
        stats.record(KeyError("c"))
        assert stats.total_count == 3
        assert stats.by_type == {"ValueError": 2, "KeyError": 1}
        assert len(stats.recent_errors) == 2

    def test_record_error_uses_global_stats(self):
        before = error_stats.total_count
        record_error(RuntimeError("x"))
        assert error_stats.total_count == before + 1

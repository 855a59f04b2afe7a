"""Tests for the tmux session host."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sesh_switcher.actions import (
    DeleteResurrectable,
    DisconnectOtherClients,
    FocusPane,
    GoToTab,
    KillSessions,
    RenameSession,
    Subscribe,
    SwitchSession,
)
from sesh_switcher.exceptions import TmuxCommandError, TmuxNotAvailableError, error_stats
from sesh_switcher.host.resurrect_store import ResurrectStore
from sesh_switcher.host.tmux import TMUX_LAYOUTS, TmuxHost, parse_topology
from sesh_switcher.models import PaneId, ResurrectableSession


class FakeTmux:
    """Stands in for ``TmuxHost._run_tmux``: records calls, answers by subcommand."""

    def __init__(self, outputs: dict[str, str] | None = None, failing: set[str] | None = None):
        self.outputs = outputs or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, *args: str) -> str:
        self.calls.append(args)
        if args[0] in self.failing:
            raise TmuxCommandError(args=list(args), returncode=1)
        return self.outputs.get(args[0], "")

    def commands(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def host(tmp_path: Path) -> TmuxHost:
    return TmuxHost(store=ResurrectStore(tmp_path / "store.json"))


class TestRunTmux:
    """Tests for the subprocess wrapper."""

    @pytest.mark.asyncio
    async def test_returns_stdout(self, host: TmuxHost):
        process = MagicMock()
        process.returncode = 0
        process.communicate = AsyncMock(return_value=(b"main\n", b""))
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as exec_mock:
            output = await host._run_tmux("display-message", "-p", "#{session_name}")
        assert output == "main\n"
        assert exec_mock.call_args.args[:2] == ("tmux", "display-message")

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, host: TmuxHost):
        process = MagicMock()
        process.returncode = 1
        process.communicate = AsyncMock(return_value=(b"", b"no server running"))
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(TmuxCommandError) as exc_info:
                await host._run_tmux("list-sessions")
        assert exc_info.value.context["stderr"] == "no server running"

    @pytest.mark.asyncio
    async def test_missing_binary(self, host: TmuxHost):
        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("tmux"))
        ):
            with pytest.raises(TmuxNotAvailableError):
                await host._run_tmux("list-sessions")


class TestParseTopology:
    def test_builds_tree(self):
        sessions = parse_topology(
            [["main", "1"], ["side", "0"]],
            [["main", "0", "editor", "1"], ["main", "2", "shell", "0"], ["side", "1", "logs", "1"]],
            [
                ["main", "0", "%1", "vim", "1"],
                ["main", "0", "%2", "zsh", "0"],
                ["side", "1", "%5", "tail", "1"],
            ],
            "main",
        )
        main, side = sessions
        assert main.is_current_session and not side.is_current_session
        assert main.connected_clients == 1
        assert [t.position for t in main.tabs] == [0, 2]
        assert main.tabs[0].is_active
        assert [p.pane_id for p in main.tabs[0].panes] == [PaneId("%1"), PaneId("%2")]
        assert main.tabs[0].panes[0].is_focused
        assert side.tabs[0].panes[0].title == "tail"
        assert main.available_layouts == TMUX_LAYOUTS

    def test_skips_malformed_rows(self):
        sessions = parse_topology([["main"], ["ok", "0"]], [["ghost", "0", "x", "1"]], [["ok"]], None)
        assert [s.name for s in sessions] == ["ok"]
        assert sessions[0].tabs == []


class TestQueryTopology:
    @pytest.mark.asyncio
    async def test_reads_sessions_and_store(self, host: TmuxHost):
        host.store.add(ResurrectableSession("dead"))
        host.store.add(ResurrectableSession("main"))
        fake = FakeTmux(
            {
                "display-message": "main\n",
                "list-sessions": "main\t1\n",
                "list-windows": "main\t0\teditor\t1\n",
                "list-panes": "main\t0\t%1\tvim\t1\n",
            }
        )
        with patch.object(host, "_run_tmux", fake):
            update = await host.query_topology()
        assert [s.name for s in update.sessions] == ["main"]
        assert update.sessions[0].is_current_session
        # A stored session that is running again is not resurrectable.
        assert [s.name for s in update.resurrectable] == ["dead"]

    @pytest.mark.asyncio
    async def test_no_server(self, host: TmuxHost):
        fake = FakeTmux(failing={"display-message", "list-sessions"})
        with patch.object(host, "_run_tmux", fake):
            update = await host.query_topology()
        assert update.sessions == []

    @pytest.mark.asyncio
    async def test_missing_binary_keeps_stored_sessions(self, tmp_path: Path):
        host = TmuxHost(
            binary="/nonexistent/tmux", store=ResurrectStore(tmp_path / "store.json")
        )
        host.store.add(ResurrectableSession("dead"))
        before = error_stats.by_type.get("TmuxNotAvailableError", 0)
        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("tmux"))
        ):
            update = await host.query_topology()
        assert update.sessions == []
        assert [s.name for s in update.resurrectable] == ["dead"]
        assert error_stats.by_type["TmuxNotAvailableError"] == before + 1


class TestExecute:
    @pytest.mark.asyncio
    async def test_switch_to_existing_session(self, host: TmuxHost):
        fake = FakeTmux()
        with patch.object(host, "_run_tmux", fake):
            await host.execute(SwitchSession("side", tab_position=2))
        assert fake.calls == [
            ("has-session", "-t", "=side"),
            ("switch-client", "-t", "=side:2"),
        ]

    @pytest.mark.asyncio
    async def test_switch_to_pane(self, host: TmuxHost):
        fake = FakeTmux()
        with patch.object(host, "_run_tmux", fake):
            await host.execute(SwitchSession("side", 2, PaneId("%7")))
        assert fake.calls[-1] == ("switch-client", "-t", "%7")

    @pytest.mark.asyncio
    async def test_create_missing_session(self, host: TmuxHost):
        fake = FakeTmux({"new-session": "work\n"}, failing={"has-session"})
        with patch.object(host, "_run_tmux", fake):
            await host.execute(SwitchSession("work", layout="tiled", cwd="/src"))
        assert fake.commands() == ["has-session", "new-session", "select-layout", "switch-client"]
        new_session = fake.calls[1]
        assert "-s" in new_session and "work" in new_session
        assert "-c" in new_session and "/src" in new_session
        assert fake.calls[2] == ("select-layout", "-t", "=work:", "tiled")

    @pytest.mark.asyncio
    async def test_unnamed_session(self, host: TmuxHost):
        fake = FakeTmux({"new-session": "3\n"})
        with patch.object(host, "_run_tmux", fake):
            await host.execute(SwitchSession(None, layout="default"))
        assert fake.commands() == ["new-session", "switch-client"]
        assert "-s" not in fake.calls[0]
        assert fake.calls[1] == ("switch-client", "-t", "=3")

    @pytest.mark.asyncio
    async def test_resurrect_restores_tabs(self, host: TmuxHost):
        host.store.add(
            ResurrectableSession("old", working_dir="/old", tab_names=["editor", "shell"])
        )
        fake = FakeTmux({"new-session": "old\n"}, failing={"has-session"})
        with patch.object(host, "_run_tmux", fake):
            await host.execute(SwitchSession("old"))
        assert fake.commands() == ["has-session", "new-session", "new-window", "switch-client"]
        assert "/old" in fake.calls[1]
        assert "editor" in fake.calls[1]
        assert "shell" in fake.calls[2]
        assert host.store.get("old") is None

    @pytest.mark.asyncio
    async def test_kill_records_resurrectable(self, host: TmuxHost):
        fake = FakeTmux({"display-message": "/home/me\n", "list-windows": "editor\nshell\n"})
        with patch.object(host, "_run_tmux", fake):
            await host.execute(KillSessions(("a", "b")))
        assert fake.calls.count(("kill-session", "-t", "=a")) == 1
        assert fake.calls.count(("kill-session", "-t", "=b")) == 1
        stored = host.store.load()
        assert [s.name for s in stored] == ["b", "a"]
        assert stored[0].working_dir == "/home/me"
        assert stored[0].tab_names == ["editor", "shell"]
        assert stored[0].closed_at is not None

    @pytest.mark.parametrize(
        "action,expected",
        [
            (RenameSession("new"), [("rename-session", "new")]),
            (GoToTab(3), [("select-window", "-t", ":3")]),
            (DisconnectOtherClients(), [("detach-client", "-a")]),
            (FocusPane(PaneId("%4")), [("select-window", "-t", "%4"), ("select-pane", "-t", "%4")]),
            (Subscribe(), []),
        ],
    )
    @pytest.mark.asyncio
    async def test_simple_actions(self, host: TmuxHost, action, expected):
        fake = FakeTmux()
        with patch.object(host, "_run_tmux", fake):
            await host.execute(action)
        assert fake.calls == expected

    @pytest.mark.asyncio
    async def test_delete_resurrectable(self, host: TmuxHost):
        host.store.add(ResurrectableSession("a"))
        host.store.add(ResurrectableSession("b"))
        await host.execute(DeleteResurrectable(("a",)))
        assert [s.name for s in host.store.load()] == ["b"]

    @pytest.mark.asyncio
    async def test_failures_are_recorded_not_raised(self, host: TmuxHost):
        before = error_stats.by_type.get("TmuxCommandError", 0)
        fake = FakeTmux(failing={"rename-session"})
        with patch.object(host, "_run_tmux", fake):
            await host.execute(RenameSession("x"))
        assert error_stats.by_type["TmuxCommandError"] == before + 1

"""Tests for the live session catalog."""

from sesh_switcher.catalog import SessionCatalog
from sesh_switcher.models import PaneId, PaneInfo, SessionInfo, TabInfo


def make_session(name: str, current: bool = False, tabs: int = 2) -> SessionInfo:
    """Create a session whose tabs each have two panes."""
    return SessionInfo(
        name=name,
        is_current_session=current,
        tabs=[
            TabInfo(
                position=t,
                name=f"{name}-tab{t}",
                panes=[
                    PaneInfo(PaneId(f"%{name}{t}{p}"), title=f"{name}-pane{t}{p}")
                    for p in range(2)
                ],
            )
            for t in range(tabs)
        ],
    )


def make_catalog(*names: str, current: str | None = None) -> SessionCatalog:
    catalog = SessionCatalog()
    catalog.set_sessions([make_session(n, current=n == current) for n in names], [])
    return catalog


class TestTreeSelection:
    """Selection without a search term."""

    def test_initially_nothing_selected(self):
        catalog = make_catalog("a", "b")
        assert catalog.get_selected_session_name() is None

    def test_down_and_up_wrap(self):
        catalog = make_catalog("a", "b", "c")
        catalog.move_selection_down()
        assert catalog.get_selected_session_name() == "a"
        catalog.move_selection_up()
        assert catalog.get_selected_session_name() == "c"
        catalog.move_selection_down()
        assert catalog.get_selected_session_name() == "a"

    def test_up_from_nothing_selects_last(self):
        catalog = make_catalog("a", "b")
        catalog.move_selection_up()
        assert catalog.get_selected_session_name() == "b"

    def test_expand_to_tab_and_pane(self):
        catalog = make_catalog("a", "b")
        catalog.move_selection_down()
        catalog.result_expand()
        assert catalog.get_selected_tab_position() == 0
        catalog.move_selection_down()
        assert catalog.get_selected_tab_position() == 1
        catalog.result_expand()
        assert catalog.get_selected_pane_id() == PaneId("%a10")
        catalog.move_selection_down()
        assert catalog.get_selected_pane_id() == PaneId("%a11")
        assert catalog.get_selected_session_name() == "a"

    def test_shrink_goes_back_up(self):
        catalog = make_catalog("a")
        catalog.move_selection_down()
        catalog.result_expand()
        catalog.result_expand()
        catalog.result_shrink()
        assert catalog.get_selected_pane_id() is None
        assert catalog.get_selected_tab_position() == 0
        catalog.result_shrink()
        assert catalog.get_selected_tab_position() is None
        assert catalog.get_selected_session_name() == "a"

    def test_set_sessions_clamps_selection(self):
        catalog = make_catalog("a", "b", "c")
        catalog.move_selection_up()
        assert catalog.get_selected_session_name() == "c"
        catalog.set_sessions([make_session("a")], [])
        assert catalog.get_selected_session_name() is None

    def test_selected_is_current_session(self):
        catalog = make_catalog("a", "b", current="b")
        catalog.move_selection_up()
        assert catalog.selected_is_current_session() is True


class TestSearch:
    def test_search_selects_first_result(self):
        catalog = make_catalog("alpha", "beta", "alphabet")
        catalog.update_search_term("ALPHA")
        assert [r.session_name for r in catalog.search_results] == ["alpha", "alphabet"]
        assert catalog.get_selected_session_name() == "alpha"

    def test_search_navigation_wraps(self):
        catalog = make_catalog("alpha", "alphabet")
        catalog.update_search_term("alp")
        catalog.move_selection_down()
        assert catalog.get_selected_session_name() == "alphabet"
        catalog.move_selection_down()
        assert catalog.get_selected_session_name() == "alpha"

    def test_no_results(self):
        catalog = make_catalog("alpha")
        catalog.update_search_term("zzz")
        assert catalog.search_results == []
        assert catalog.get_selected_session_name() is None

    def test_clearing_search_restores_tree(self):
        catalog = make_catalog("alpha")
        catalog.update_search_term("al")
        catalog.update_search_term("")
        assert not catalog.is_searching
        assert catalog.search_results == []

    def test_tabs_and_panes_only_searched_when_expanded(self):
        catalog = make_catalog("a", "b")
        catalog.update_search_term("b-tab1")
        assert catalog.search_results == []

        catalog.toggle_expansion()
        catalog.update_search_term("b-tab1")
        assert [r.label for r in catalog.search_results] == ["b > b-tab1"]
        assert catalog.get_selected_tab_position() == 1

    def test_pane_result(self):
        catalog = make_catalog("a")
        catalog.toggle_expansion()
        catalog.update_search_term("a-pane01")
        assert catalog.get_selected_pane_id() == PaneId("%a01")
        assert catalog.get_selected_tab_position() == 0

    def test_expand_and_shrink_ignored_while_searching(self):
        catalog = make_catalog("a")
        catalog.update_search_term("a")
        catalog.result_expand()
        assert catalog.get_selected_tab_position() is None
        catalog.result_shrink()
        assert catalog.get_selected_session_name() == "a"

    def test_set_sessions_reruns_search(self):
        catalog = make_catalog("alpha", "alphabet")
        catalog.update_search_term("alpha")
        catalog.move_selection_down()
        catalog.set_sessions([make_session("alpha")], [])
        assert catalog.get_selected_session_name() == "alpha"


class TestSessionNames:
    def test_update_session_name(self):
        catalog = make_catalog("old", "other", current="old")
        catalog.update_search_term("old")
        catalog.update_session_name("old", "new")
        assert [s.name for s in catalog.sessions] == ["new", "other"]
        assert catalog.search_results[0].session_name == "new"

    def test_all_other_sessions(self):
        catalog = make_catalog("a", "b", "c", current="b")
        assert catalog.all_other_sessions() == ["a", "c"]

    def test_has_session_includes_forbidden(self):
        catalog = SessionCatalog()
        catalog.set_sessions([SessionInfo("a")], [SessionInfo("hidden")])
        assert catalog.has_session("a")
        assert catalog.has_session("hidden")
        assert catalog.has_forbidden_session("hidden")
        assert not catalog.has_forbidden_session("a")

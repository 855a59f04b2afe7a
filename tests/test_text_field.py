"""Tests for the readline-style search field."""

import pytest

from sesh_switcher.text_field import TextField


class TestInsertAndDelete:
    """Test insertion and single character deletion."""

    def test_insert_at_cursor(self):
        field = TextField("hllo", cursor=1)
        assert field.insert("e") is True
        assert field.content == "hello"
        assert field.cursor == 2

    def test_backspace_at_start_is_noop(self):
        field = TextField("abc", cursor=0)
        assert field.backspace() is False
        assert field.content == "abc"

    def test_backspace_removes_before_cursor(self):
        field = TextField("abc", cursor=2)
        assert field.backspace() is True
        assert field.content == "ac"
        assert field.cursor == 1

    def test_delete_forward_at_end_is_noop(self):
        field = TextField("abc")
        assert field.delete_forward() is False
        assert field.content == "abc"

    def test_delete_forward_keeps_cursor(self):
        field = TextField("abc", cursor=1)
        assert field.delete_forward() is True
        assert field.content == "ac"
        assert field.cursor == 1

    def test_cursor_is_clamped_on_construction(self):
        assert TextField("ab", cursor=10).cursor == 2
        assert TextField("ab", cursor=-3).cursor == 0

    @pytest.mark.parametrize("cursor", [0, 1, 3, 5])
    @pytest.mark.parametrize("char", ["x", " ", "é"])
    def test_backspace_undoes_insert(self, cursor, char):
        field = TextField("hello", cursor=cursor)
        field.insert(char)
        assert field.backspace() is True
        assert field.content == "hello"
        assert field.cursor == cursor


class TestCursorMovement:
    """Movement never changes content."""

    def test_moves_report_no_change(self):
        field = TextField("abc", cursor=1)
        assert field.move_left() is False
        assert field.cursor == 0
        assert field.move_left() is False
        assert field.cursor == 0
        assert field.move_to_end() is False
        assert field.cursor == 3
        assert field.move_right() is False
        assert field.cursor == 3
        assert field.move_to_start() is False
        assert field.cursor == 0
        assert field.content == "abc"


class TestKills:
    """Test line and word kills."""

    def test_kill_to_end(self):
        field = TextField("hello world", cursor=5)
        assert field.kill_to_end() is True
        assert field.content == "hello"
        assert field.cursor == 5

    def test_kill_to_end_at_end_is_noop(self):
        field = TextField("hello")
        assert field.kill_to_end() is False

    def test_kill_whole_line(self):
        field = TextField("hello", cursor=2)
        assert field.kill_whole_line() is True
        assert field.content == ""
        assert field.cursor == 0
        assert field.kill_whole_line() is False

    def test_delete_word_backward_skips_trailing_space(self):
        field = TextField("hello  world")
        assert field.delete_word_backward() is True
        assert field.content == "hello  "
        assert field.cursor == 7

        assert field.delete_word_backward() is True
        assert field.content == ""
        assert field.cursor == 0

    def test_delete_word_backward_at_start_is_noop(self):
        field = TextField("hello", cursor=0)
        assert field.delete_word_backward() is False

    def test_delete_word_forward(self):
        field = TextField("foo  bar baz", cursor=3)
        assert field.delete_word_forward() is True
        assert field.content == "foo baz"
        assert field.cursor == 3

    def test_is_empty(self):
        assert TextField().is_empty
        assert not TextField("x").is_empty
        assert len(TextField("abc")) == 3

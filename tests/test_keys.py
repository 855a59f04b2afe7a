"""Tests for key chords and Textual key conversion."""

from sesh_switcher.keys import (
    CTRL_C,
    ENTER,
    ESCAPE,
    SHIFT_TAB,
    TAB,
    BareKey,
    KeyChord,
    Modifier,
    chord_from_key,
)


class TestKeyChord:
    def test_chords_are_hashable_and_equal_by_value(self):
        assert KeyChord.ctrl("k") == KeyChord("k", frozenset({Modifier.CTRL}))
        assert {KeyChord.ctrl("k"): 1}[KeyChord.ctrl("k")] == 1

    def test_printable_char(self):
        assert KeyChord.plain("a").printable_char == "a"
        assert KeyChord.ctrl("a").printable_char is None
        assert ENTER.printable_char is None

    def test_str(self):
        assert str(KeyChord.ctrl("k")) == "ctrl+'k'"
        assert str(ESCAPE) == "escape"


class TestChordFromKey:
    """Conversion from Textual key names."""

    def test_plain_character(self):
        assert chord_from_key("a", "a") == KeyChord.plain("a")

    def test_uppercase_character_is_plain(self):
        assert chord_from_key("A", "A") == KeyChord.plain("A")

    def test_named_keys(self):
        assert chord_from_key("escape") == ESCAPE
        assert chord_from_key("enter") == ENTER
        assert chord_from_key("tab") == TAB
        assert chord_from_key("up") == KeyChord.plain(BareKey.UP)

    def test_shift_tab(self):
        assert chord_from_key("shift+tab") == SHIFT_TAB
        assert chord_from_key("backtab") == SHIFT_TAB

    def test_ctrl_chords(self):
        assert chord_from_key("ctrl+c") == CTRL_C
        assert chord_from_key("ctrl+k") == KeyChord.ctrl("k")
        assert chord_from_key("ctrl+comma") == KeyChord.ctrl(",")
        assert chord_from_key("ctrl+full_stop") == KeyChord.ctrl(".")

    def test_ctrl_slash_variants(self):
        assert chord_from_key("ctrl+slash") == KeyChord.ctrl("/")
        assert chord_from_key("ctrl+underscore") == KeyChord.ctrl("/")

    def test_alt_shift(self):
        assert chord_from_key("alt+X") == KeyChord.alt_shift("x")
        assert chord_from_key("alt+shift+x") == KeyChord.alt_shift("x")

    def test_punctuation_by_character(self):
        assert chord_from_key("exclamation_mark", "!") == KeyChord.plain("!")
        assert chord_from_key("space", " ") == KeyChord.plain(" ")

    def test_unknown_keys(self):
        assert chord_from_key("f5") is None
        assert chord_from_key("hyper+a") is None

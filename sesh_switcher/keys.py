"""Logical key chords and conversion from Textual key names.

The dispatcher never sees Textual events. It works on ``KeyChord`` values:
a bare key (a named key such as ``BareKey.UP`` or a single character) plus
a frozen set of modifiers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class BareKey(Enum):
    """Named, non-character keys."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "escape"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    HOME = "home"
    END = "end"


class Modifier(Enum):
    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"


@dataclass(frozen=True)
class KeyChord:
    """A bare key plus modifiers, e.g. Ctrl+K or Alt+Shift+X."""

    key: BareKey | str
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)

    @classmethod
    def plain(cls, key: BareKey | str) -> KeyChord:
        return cls(key)

    @classmethod
    def ctrl(cls, key: BareKey | str) -> KeyChord:
        return cls(key, frozenset({Modifier.CTRL}))

    @classmethod
    def alt(cls, key: BareKey | str) -> KeyChord:
        return cls(key, frozenset({Modifier.ALT}))

    @classmethod
    def shift(cls, key: BareKey | str) -> KeyChord:
        return cls(key, frozenset({Modifier.SHIFT}))

    @classmethod
    def alt_shift(cls, key: BareKey | str) -> KeyChord:
        return cls(key, frozenset({Modifier.ALT, Modifier.SHIFT}))

    @property
    def has_no_modifiers(self) -> bool:
        return not self.modifiers

    @property
    def is_char(self) -> bool:
        return isinstance(self.key, str)

    @property
    def printable_char(self) -> str | None:
        """The character to insert, if this chord types one."""
        if self.is_char and self.has_no_modifiers:
            return self.key  # type: ignore[return-value]
        return None

    def __str__(self) -> str:
        parts = [m.value for m in Modifier if m in self.modifiers]
        parts.append(self.key.value if isinstance(self.key, BareKey) else repr(self.key))
        return "+".join(parts)


# Common chords, named so key tables read like documentation.
ESCAPE = KeyChord.plain(BareKey.ESC)
ENTER = KeyChord.plain(BareKey.ENTER)
NEWLINE = KeyChord.plain("\n")
TAB = KeyChord.plain(BareKey.TAB)
SHIFT_TAB = KeyChord.shift(BareKey.TAB)
UP = KeyChord.plain(BareKey.UP)
DOWN = KeyChord.plain(BareKey.DOWN)
LEFT = KeyChord.plain(BareKey.LEFT)
RIGHT = KeyChord.plain(BareKey.RIGHT)
BACKSPACE = KeyChord.plain(BareKey.BACKSPACE)
DELETE = KeyChord.plain(BareKey.DELETE)
CTRL_C = KeyChord.ctrl("c")


# =============================================================================
# Textual key name conversion
# =============================================================================

# Textual names for keys that map onto a BareKey.
_NAMED_KEYS = {
    "up": BareKey.UP,
    "down": BareKey.DOWN,
    "left": BareKey.LEFT,
    "right": BareKey.RIGHT,
    "enter": BareKey.ENTER,
    "escape": BareKey.ESC,
    "tab": BareKey.TAB,
    "backspace": BareKey.BACKSPACE,
    "delete": BareKey.DELETE,
    "home": BareKey.HOME,
    "end": BareKey.END,
}

# Textual names for punctuation keys that appear in chords.
_PUNCTUATION = {
    "comma": ",",
    "full_stop": ".",
    "period": ".",
    "slash": "/",
    "space": " ",
    "minus": "-",
    "underscore": "_",
}

_MODIFIERS = {m.value: m for m in Modifier}


def chord_from_key(key: str, character: str | None = None) -> KeyChord | None:
    """Convert a Textual key name (and optional character) to a KeyChord.

    Args:
        key: Textual key name, e.g. ``"ctrl+k"``, ``"shift+tab"``, ``"a"``.
        character: The printable character Textual attached, if any.

    Returns:
        The chord, or None for keys the switcher has no use for.
    """
    if key == "backtab":
        return SHIFT_TAB
    # Terminals send Ctrl+/ as 0x1f, which Textual reports as ctrl+underscore.
    if key == "ctrl+underscore":
        return KeyChord.ctrl("/")

    *modifier_names, bare_name = key.split("+") if key != "+" else ["+"]
    modifiers: set[Modifier] = set()
    for name in modifier_names:
        modifier = _MODIFIERS.get(name)
        if modifier is None:
            return None
        modifiers.add(modifier)

    bare: BareKey | str
    if bare_name in _NAMED_KEYS:
        bare = _NAMED_KEYS[bare_name]
    elif bare_name in _PUNCTUATION:
        bare = _PUNCTUATION[bare_name]
    elif len(bare_name) == 1:
        bare = bare_name
    elif not modifiers and character and len(character) == 1 and character.isprintable():
        bare = character
    else:
        return None

    if isinstance(bare, str) and bare.isalpha() and bare.isupper():
        # Alt+X arrives as alt+X: the capital letter carries the shift.
        modifiers.add(Modifier.SHIFT)
        bare = bare.lower()

    if modifiers == {Modifier.SHIFT} and isinstance(bare, str):
        # A plain shifted character is just that character.
        return KeyChord.plain(bare.upper() if bare.isalpha() else bare)

    return KeyChord(bare, frozenset(modifiers))

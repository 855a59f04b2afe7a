"""Readline-style single line editing.

``TextField`` backs the Attach screen search prompt. Every operation keeps
``0 <= cursor <= len(content)`` and returns True when ``content`` changed,
so callers know whether to re-run the search filter.
"""

from __future__ import annotations


class TextField:
    """A cursor-addressable editable string."""

    def __init__(self, content: str = "", cursor: int | None = None) -> None:
        self.content = content
        self.cursor = len(content) if cursor is None else max(0, min(cursor, len(content)))

    def __repr__(self) -> str:
        return f"TextField({self.content!r}, cursor={self.cursor})"

    def __len__(self) -> int:
        return len(self.content)

    def __bool__(self) -> bool:
        return bool(self.content)

    @property
    def is_empty(self) -> bool:
        return not self.content

    # -------------------------------------------------------------------------
    # Insertion and single character deletion
    # -------------------------------------------------------------------------

    def insert(self, char: str) -> bool:
        self.content = self.content[: self.cursor] + char + self.content[self.cursor :]
        self.cursor += len(char)
        return True

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.content = self.content[: self.cursor - 1] + self.content[self.cursor :]
        self.cursor -= 1
        return True

    def delete_forward(self) -> bool:
        if self.cursor >= len(self.content):
            return False
        self.content = self.content[: self.cursor] + self.content[self.cursor + 1 :]
        return True

    # -------------------------------------------------------------------------
    # Cursor movement (never changes content)
    # -------------------------------------------------------------------------

    def move_left(self) -> bool:
        self.cursor = max(0, self.cursor - 1)
        return False

    def move_right(self) -> bool:
        self.cursor = min(len(self.content), self.cursor + 1)
        return False

    def move_to_start(self) -> bool:
        self.cursor = 0
        return False

    def move_to_end(self) -> bool:
        self.cursor = len(self.content)
        return False

    # -------------------------------------------------------------------------
    # Kills
    # -------------------------------------------------------------------------

    def kill_to_end(self) -> bool:
        """Ctrl+K: drop everything from the cursor onwards."""
        if self.cursor >= len(self.content):
            return False
        self.content = self.content[: self.cursor]
        return True

    def kill_whole_line(self) -> bool:
        """Ctrl+U: clear the field."""
        changed = bool(self.content)
        self.content = ""
        self.cursor = 0
        return changed

    def delete_word_backward(self) -> bool:
        """Ctrl+W: delete trailing whitespace, then the word before it."""
        if self.cursor == 0:
            return False
        start = self.cursor
        while start > 0 and self.content[start - 1].isspace():
            start -= 1
        while start > 0 and not self.content[start - 1].isspace():
            start -= 1
        self.content = self.content[:start] + self.content[self.cursor :]
        self.cursor = start
        return True

    def delete_word_forward(self) -> bool:
        """Alt+D: delete leading whitespace, then the word after the cursor."""
        if self.cursor >= len(self.content):
            return False
        end = self.cursor
        while end < len(self.content) and self.content[end].isspace():
            end += 1
        while end < len(self.content) and not self.content[end].isspace():
            end += 1
        self.content = self.content[: self.cursor] + self.content[end:]
        return True

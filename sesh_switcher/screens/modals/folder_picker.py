"""Folder picker modal for the New Session screen.

Lets the user browse directories and pick the working directory of the
session about to be created.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Static

logger = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = {
    "node_modules",
    "__pycache__",
    "venv",
    "dist",
    "build",
}


class FolderTree(DirectoryTree):
    """DirectoryTree that lists visible directories only."""

    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [
            path
            for path in paths
            if path.is_dir()
            and not path.name.startswith(".")
            and path.name not in SKIPPED_DIRECTORIES
        ]


class FolderPickerModal(ModalScreen[Path | None]):
    """Modal for choosing a folder.

    Returns the selected directory Path, or None if cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        # The tree keeps Enter for expanding and choosing directories.
        Binding("ctrl+s", "select", "Select", priority=True),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    DEFAULT_CSS = """
    FolderPickerModal {
        align: center middle;
    }

    FolderPickerModal #dialog {
        width: 70;
        height: 30;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }

    FolderPickerModal #title {
        text-style: bold;
        padding-bottom: 1;
    }

    FolderPickerModal FolderTree {
        height: 1fr;
        border: solid $surface-lighten-1;
        margin-bottom: 1;
    }

    FolderPickerModal #selected-path {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    FolderPickerModal #buttons {
        height: 3;
        align: center middle;
    }

    FolderPickerModal Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        root: str | Path | None = None,
        title: str = "Select folder for the new session...",
    ) -> None:
        """Initialize the modal.

        Args:
            root: Directory the tree starts at (default: home directory).
            title: Modal title.
        """
        super().__init__()
        self._root = Path(root) if root is not None else Path.home()
        self._title = title
        self._selected: Path = self._root

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self._title, id="title"),
            FolderTree(self._root, id="folder-tree"),
            Static(f"Selected: {self._root}", id="selected-path"),
            Horizontal(
                Button("Cancel", variant="default", id="cancel"),
                Button("Select (Ctrl+s)", variant="primary", id="select"),
                id="buttons",
            ),
            id="dialog",
        )

    def on_mount(self) -> None:
        self.query_one("#folder-tree", FolderTree).focus()

    @property
    def selected_path(self) -> Path:
        return self._selected

    def on_directory_tree_directory_selected(
        self, event: DirectoryTree.DirectorySelected
    ) -> None:
        self._selected = event.path
        self.query_one("#selected-path", Static).update(f"Selected: {event.path}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "select":
            self.action_select()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_select(self) -> None:
        logger.debug("Folder picked: %s", self._selected)
        self.dismiss(self._selected)

    def action_cursor_down(self) -> None:
        self.query_one("#folder-tree", FolderTree).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#folder-tree", FolderTree).action_cursor_up()

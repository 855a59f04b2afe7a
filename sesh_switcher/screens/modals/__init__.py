"""Modal dialogs."""

from sesh_switcher.screens.modals.folder_picker import FolderPickerModal, FolderTree

__all__ = ["FolderPickerModal", "FolderTree"]

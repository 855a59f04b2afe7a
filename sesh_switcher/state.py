"""The single mutable state aggregate the key dispatcher operates on."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from sesh_switcher.catalog import NewSessionBuilder, ResurrectionCatalog, SessionCatalog
from sesh_switcher.models import ScreenMode, SwitcherConfig
from sesh_switcher.requests import AsyncRequestTable
from sesh_switcher.text_field import TextField

logger = logging.getLogger(__name__)


class AttachSubState(Enum):
    """Mutually exclusive Attach screen states, highest priority first."""

    KILL_ALL_CONFIRM = "kill_all_confirm"
    RENAMING = "renaming"
    NORMAL = "normal"


@dataclass
class SwitcherState:
    """Everything the switcher knows for the lifetime of one instance.

    Nothing here is persisted. The search field and the rename field are
    separate storage; the Attach screen shows one or the other.
    """

    config: SwitcherConfig = field(default_factory=SwitcherConfig)
    mode: ScreenMode = ScreenMode.ATTACH
    search: TextField = field(default_factory=TextField)
    rename_field: str | None = None
    kill_all_confirm: bool = False
    error: str | None = None
    current_session_name: str | None = None
    is_web_client: bool = False
    palette: str = "default"
    sessions: SessionCatalog = field(default_factory=SessionCatalog)
    resurrectable: ResurrectionCatalog = field(default_factory=ResurrectionCatalog)
    new_session: NewSessionBuilder = field(default_factory=NewSessionBuilder)
    requests: AsyncRequestTable = field(default_factory=AsyncRequestTable)

    @classmethod
    def from_config(cls, config: SwitcherConfig) -> SwitcherState:
        return cls(
            config=config,
            mode=config.default_screen,
            new_session=NewSessionBuilder(default_layout=config.default_layout),
        )

    @property
    def standalone(self) -> bool:
        return self.config.standalone

    @property
    def is_renaming(self) -> bool:
        return self.rename_field is not None

    @property
    def attach_sub_state(self) -> AttachSubState:
        if self.kill_all_confirm:
            return AttachSubState.KILL_ALL_CONFIRM
        if self.is_renaming:
            return AttachSubState.RENAMING
        return AttachSubState.NORMAL

    @property
    def in_sub_dialog(self) -> bool:
        """Whether a modal sub-dialog on the active screen is capturing keys."""
        if self.mode == ScreenMode.ATTACH:
            return self.attach_sub_state != AttachSubState.NORMAL
        if self.mode == ScreenMode.RESURRECT:
            return self.resurrectable.delete_all_warning
        return False

    def show_error(self, message: str) -> None:
        logger.info("Error banner: %s", message)
        self.error = message

    def refilter(self) -> None:
        """Re-apply the search field to the session list."""
        self.sessions.update_search_term(self.search.content)

    def clear_search(self) -> None:
        self.search.kill_whole_line()
        self.refilter()

    def reset_selected_index(self) -> None:
        self.sessions.reset_selected_index()

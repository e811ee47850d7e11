"""ListBar widget for displaying and switching between task lists.

Each list is shown as a ListTab with its shortcut number, name and
completion percentage. Selecting a tab (click or number key) posts
ListBar.ListSelected with the chosen TaskList; the app turns that into a
SelectList controller event.
"""

from typing import List, Optional

from rich.console import RenderableType
from rich.text import Text
from textual.containers import Horizontal
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from taskpane.logging_config import get_logger
from taskpane.models import TaskList
from taskpane.ui.theme import (
    ACCENT,
    BACKGROUND,
    COMMENT,
    FOREGROUND,
    HOVER_OPACITY,
    SELECTION,
    YELLOW,
    with_alpha,
)

logger = get_logger(__name__)


class ListTab(Widget):
    """A single tab in the ListBar.

    The active tab is drawn in bold accent color. The completion percentage
    is shown once the list has tasks, in yellow until everything is done.
    """

    DEFAULT_CSS = f"""
    ListTab {{
        height: 1;
        width: auto;
        padding: 0 1;
        background: transparent;
    }}

    ListTab:hover {{
        background: {with_alpha(SELECTION, HOVER_OPACITY)};
    }}
    """

    active: reactive[bool] = reactive(False)

    def __init__(
        self,
        task_list: TaskList,
        shortcut_number: int,
        is_active: bool = False,
        is_last: bool = False,
        **kwargs
    ) -> None:
        """Initialize a ListTab widget.

        Args:
            task_list: The TaskList model to display
            shortcut_number: The number key shortcut
            is_active: Whether this list is currently active
            is_last: Whether this is the last tab (no trailing separator)
            **kwargs: Additional widget arguments
        """
        super().__init__(**kwargs)
        self.task_list = task_list
        self.shortcut_number = shortcut_number
        self.active = is_active
        self.is_last = is_last

    @property
    def list_id(self) -> str:
        return self.task_list.id

    def render(self) -> RenderableType:
        text = Text()
        text.append(f"[{self.shortcut_number}] ", style=f"bold {COMMENT}")

        name_style = f"bold {ACCENT}" if self.active else FOREGROUND
        text.append(self.task_list.name, style=name_style)

        if self.task_list.task_count > 0:
            completion = self.task_list.completion_percentage
            percentage_color = YELLOW if completion < 100 else ACCENT
            text.append(f" {completion:.0f}%", style=percentage_color)

        if not self.is_last:
            text.append("  │  ", style=COMMENT)

        return text

    def watch_active(self, active: bool) -> None:
        self.set_class(active, "active")

    def on_click(self) -> None:
        """Make this tab's list the active one."""
        parent = self.parent
        if isinstance(parent, ListBar):
            parent.set_active_list(self.list_id)


class ListBar(Horizontal):
    """Horizontal bar of all task lists with interactive switching.

    Attributes:
        lists: TaskList models being displayed
        tabs: ListTab widgets, in the same order as lists
        active_list_id: ID of the currently active list
    """

    DEFAULT_CSS = f"""
    ListBar {{
        height: 2;
        width: 100%;
        background: {BACKGROUND};
        padding: 1 1 0 1;
        layout: horizontal;
        align: left middle;
    }}
    """

    active_list_id: reactive[Optional[str]] = reactive(None)

    class ListSelected(Message):
        """Message emitted when a list is selected.

        Attributes:
            task_list: The selected list
        """

        def __init__(self, task_list: TaskList) -> None:
            super().__init__()
            self.task_list = task_list

    def __init__(
        self,
        lists: Optional[List[TaskList]] = None,
        active_list_id: Optional[str] = None,
        **kwargs
    ) -> None:
        """Initialize the ListBar.

        Args:
            lists: TaskList models to display
            active_list_id: ID of the currently active list
            **kwargs: Additional widget arguments
        """
        super().__init__(**kwargs)
        self.lists: List[TaskList] = list(lists or [])
        self.tabs: List[ListTab] = []
        self.active_list_id = active_list_id or (self.lists[0].id if self.lists else None)

    def _create_all_tabs(self) -> List[ListTab]:
        total_lists = len(self.lists)
        return [
            ListTab(
                task_list=task_list,
                shortcut_number=idx,
                is_active=task_list.id == self.active_list_id,
                is_last=idx == total_lists,
            )
            for idx, task_list in enumerate(self.lists, start=1)
        ]

    def compose(self):
        self.tabs = self._create_all_tabs()
        yield from self.tabs

    async def update_lists(self, lists: List[TaskList]) -> None:
        """Replace the displayed lists and rebuild the tabs.

        Args:
            lists: New list of TaskList models
        """
        logger.debug(f"ListBar: Updating lists, count={len(lists)}")
        self.lists = list(lists)
        await self.remove_children()
        self.tabs = self._create_all_tabs()
        await self.mount_all(self.tabs)

    def set_active_list(self, list_id: str) -> bool:
        """Activate a list and announce it with ListSelected.

        Args:
            list_id: ID of the list to make active

        Returns:
            True if the list is known, False otherwise
        """
        for task_list in self.lists:
            if task_list.id == list_id:
                logger.info(f"ListBar: Setting active list '{task_list.name}' (id={list_id})")
                self.active_list_id = list_id
                self.post_message(self.ListSelected(task_list))
                return True

        logger.warning(f"ListBar: Attempted to set active list with unknown id={list_id}")
        return False

    def select_list_by_number(self, number: int) -> bool:
        """Select a list by its shortcut number.

        Args:
            number: The 1-based shortcut number

        Returns:
            True if a list was selected, False if number is out of range
        """
        if 1 <= number <= len(self.lists):
            return self.set_active_list(self.lists[number - 1].id)

        logger.warning(f"ListBar: Invalid list number {number}, available lists: {len(self.lists)}")
        return False

    def watch_active_list_id(self, list_id: Optional[str]) -> None:
        for tab in self.tabs:
            tab.active = tab.list_id == list_id

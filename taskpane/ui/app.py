"""Main Textual application for TaskPane.

Layout: a list bar on top, the task pane and the detail panel side by side
below it. Widgets never touch the database. User interactions become
controller events, the controller answers with commands, and a worker runs
those commands through the CommandExecutor. Command results (the tasks of
a freshly selected list) come back as new controller events.
"""

import asyncio
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Footer

from taskpane.config import Config
from taskpane.controller import (
    Command,
    CreateTask,
    DeleteTask,
    Event,
    SelectList,
    TaskListController,
    UpdateTask,
)
from taskpane.database import DatabaseManager
from taskpane.logging_config import get_logger
from taskpane.models import Task, TaskList
from taskpane.services.command_executor import CommandExecutor
from taskpane.services.list_service import ListService
from taskpane.services.task_service import TaskServiceError
from taskpane.ui.components.detail_panel import DetailPanel
from taskpane.ui.components.list_bar import ListBar
from taskpane.ui.components.task_pane import TaskPane
from taskpane.ui.keybindings import get_all_bindings
from taskpane.ui.theme import BACKGROUND, SELECTION

logger = get_logger(__name__)

NOTIFICATION_TIMEOUT = 3

_MUTATING_COMMANDS = (CreateTask, UpdateTask, DeleteTask)


class TaskPaneApp(App):
    """To-do list application driven by a TaskListController."""

    CSS = f"""
    Screen {{
        background: {BACKGROUND};
        layout: vertical;
    }}

    #main-container {{
        width: 100%;
        height: 1fr;
        layout: horizontal;
    }}

    #task-pane {{
        width: 2fr;
    }}

    Footer {{
        background: {SELECTION};
    }}
    """

    BINDINGS = get_all_bindings()

    # ==============================================================================
    # LIFECYCLE METHODS
    # ==============================================================================

    def __init__(
        self,
        config: Optional[Config] = None,
        database_url: Optional[str] = None,
        **kwargs
    ) -> None:
        """Initialize the application.

        Args:
            config: Configuration to use (defaults to ~/.taskpane/config.ini)
            database_url: Override of the configured database URL
            **kwargs: Additional keyword arguments for App
        """
        super().__init__(**kwargs)
        self.title = "TaskPane"
        self.sub_title = "1-9 switch lists, Ctrl+Q quits"
        self.config = config or Config()
        self._database_url = database_url or self.config.get_database_config()['url']
        self.controller = TaskListController()
        self._db_manager: Optional[DatabaseManager] = None
        self._executor: Optional[CommandExecutor] = None
        self._lists: List[TaskList] = []
        self._command_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        display = self.config.get_display_config()

        yield ListBar(id="list-bar")
        with Horizontal(id="main-container"):
            yield TaskPane(
                empty_message=display['empty_message'],
                placeholder=display['input_placeholder'],
                id="task-pane",
            )
            yield DetailPanel(id="detail-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the database, load the lists and select the first one."""
        logger.info("TaskPane application mounted, initializing...")

        self._db_manager = DatabaseManager(self._database_url)
        await self._db_manager.initialize()
        self._executor = CommandExecutor(self._db_manager, display_task=self._display_task)

        async with self._db_manager.get_session() as session:
            self._lists = await ListService(session).ensure_default_lists(
                self.config.get_default_lists()
            )

        list_bar = self.query_one(ListBar)
        await list_bar.update_lists(self._lists)
        if self._lists:
            list_bar.set_active_list(self._lists[0].id)

        logger.info("TaskPane application ready")

    async def on_unmount(self) -> None:
        logger.info("TaskPane application shutting down")
        if self._db_manager is not None:
            await self._db_manager.close()

    # ==============================================================================
    # EVENT HANDLERS
    # ==============================================================================

    async def on_list_bar_list_selected(self, message: ListBar.ListSelected) -> None:
        await self.apply_event(SelectList(task_list=message.task_list))

    async def on_task_pane_interaction(self, message: TaskPane.Interaction) -> None:
        await self.apply_event(message.event)

    # ==============================================================================
    # ACTIONS
    # ==============================================================================

    def action_switch_list(self, number: int) -> None:
        self.query_one(ListBar).select_list_by_number(number)

    def action_clear_details(self) -> None:
        self.query_one(DetailPanel).set_task(None)

    # ==============================================================================
    # CONTROLLER WIRING
    # ==============================================================================

    async def apply_event(self, event: Event) -> None:
        """Apply an event to the controller, redraw, and schedule its commands.

        Args:
            event: Controller event to apply
        """
        commands = self.controller.handle(event)
        await self.query_one(TaskPane).set_state(self.controller.state)

        if commands:
            self.run_worker(self._execute_commands(commands), group="commands")

    async def _execute_commands(self, commands: List[Command]) -> None:
        """Run one event's commands in order, then apply the events they produce."""
        async with self._command_lock:
            try:
                events = await self._executor.execute_all(commands)
            except (TaskServiceError, SQLAlchemyError) as e:
                self._report_backend_error("Could not save changes", e)
                return

        for event in events:
            await self.apply_event(event)

        if any(isinstance(command, _MUTATING_COMMANDS) for command in commands):
            await self._refresh_lists()

    async def _refresh_lists(self) -> None:
        """Reload the lists so the list bar shows current completion counts."""
        try:
            async with self._db_manager.get_session() as session:
                self._lists = await ListService(session).get_all_lists()
        except SQLAlchemyError as e:
            self._report_backend_error("Could not reload lists", e)
            return
        await self.query_one(ListBar).update_lists(self._lists)

    def _report_backend_error(self, summary: str, error: Exception) -> None:
        logger.error(f"{summary}: {error}", exc_info=True)
        self.notify(f"{summary}: {error}", severity="error", timeout=NOTIFICATION_TIMEOUT)

    def _display_task(self, task: Task) -> None:
        self.query_one(DetailPanel).set_task(task)

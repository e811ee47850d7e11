"""
Command executor for TaskPane.

Runs the commands emitted by the task list controller against the database
services and turns their results into controller events.
"""

from typing import Callable, Iterable, List, Optional

from taskpane.controller import (
    Command,
    CreateTask,
    DeleteTask,
    DisplayTask,
    Event,
    GetTasks,
    ReplaceTasks,
    UpdateTask,
)
from taskpane.database import DatabaseManager
from taskpane.logging_config import get_logger
from taskpane.models import Task
from taskpane.services.task_service import TaskService

logger = get_logger(__name__)

DisplayCallback = Callable[[Task], None]


class CommandExecutor:
    """
    Executes controller commands, one database session per command.

    Display requests are forwarded to a callback supplied by the UI.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        display_task: Optional[DisplayCallback] = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            db_manager: Initialized database manager
            display_task: Called with the task for DisplayTask commands
        """
        self.db_manager = db_manager
        self.display_task = display_task

    async def execute(self, command: Command) -> List[Event]:
        """
        Execute a single command.

        Args:
            command: Command emitted by the controller

        Returns:
            Events to feed back into the controller

        Raises:
            TaskServiceError: If the backend rejects the command
            TypeError: If the command type is unknown
        """
        logger.debug(f"Executing {type(command).__name__}")

        if isinstance(command, DisplayTask):
            if self.display_task is not None:
                self.display_task(command.task)
            return []

        async with self.db_manager.get_session() as session:
            task_service = TaskService(session)

            if isinstance(command, GetTasks):
                tasks = await task_service.get_tasks_for_list(command.list_id)
                return [ReplaceTasks(tasks=tasks)]
            if isinstance(command, CreateTask):
                await task_service.create_task(command.task)
                return []
            if isinstance(command, UpdateTask):
                await task_service.update_task(command.task)
                return []
            if isinstance(command, DeleteTask):
                await task_service.delete_task(command.task_id)
                return []

        raise TypeError(f"Unsupported command: {type(command).__name__}")

    async def execute_all(self, commands: Iterable[Command]) -> List[Event]:
        """
        Execute commands sequentially in the given order.

        Returns:
            Events produced by all commands, in order
        """
        events: List[Event] = []
        for command in commands:
            events.extend(await self.execute(command))
        return events

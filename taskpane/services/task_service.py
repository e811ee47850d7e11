"""
Task service for TaskPane.

Implements task persistence operations on top of an async SQLAlchemy session.
Tasks arrive already built by the controller, so creation keeps the
caller's id.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskpane.database import TaskListORM, TaskORM
from taskpane.logging_config import get_logger
from taskpane.models import Priority, Status, Task

logger = get_logger(__name__)


class TaskServiceError(Exception):
    """Base exception for task service errors."""
    pass


class TaskNotFoundError(TaskServiceError):
    """Raised when a task is not found."""
    pass


class TaskListNotFoundError(TaskServiceError):
    """Raised when a task list is not found."""
    pass


class TaskService:
    """
    Service layer for task operations.

    Handles create, read, update and delete of tasks with database persistence.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize task service with database session.

        Args:
            session: Active async database session
        """
        self.session = session

    # ==============================================================================
    # CONVERSION HELPERS
    # ==============================================================================

    @staticmethod
    def _orm_to_pydantic(task_orm: TaskORM) -> Task:
        """
        Convert TaskORM to Pydantic Task model.

        Args:
            task_orm: SQLAlchemy ORM task instance

        Returns:
            Pydantic Task instance
        """
        return Task(
            id=task_orm.id,
            title=task_orm.title,
            notes=task_orm.notes,
            status=Status(task_orm.status),
            priority=Priority(task_orm.priority),
            list_id=task_orm.list_id,
            created_at=task_orm.created_at,
        )

    @staticmethod
    def _pydantic_to_orm(task: Task, position: int) -> TaskORM:
        """
        Convert Pydantic Task to TaskORM model.

        Args:
            task: Pydantic Task instance
            position: Display position within the list

        Returns:
            SQLAlchemy ORM task instance
        """
        return TaskORM(
            id=task.id,
            title=task.title,
            notes=task.notes,
            status=task.status.value,
            priority=int(task.priority),
            position=position,
            list_id=task.list_id,
            created_at=task.created_at,
        )

    # ==============================================================================
    # VALIDATION HELPERS
    # ==============================================================================

    async def _verify_list_exists(self, list_id: str) -> None:
        """
        Verify that a task list exists.

        Raises:
            TaskListNotFoundError: If list does not exist
        """
        list_orm = await self.session.get(TaskListORM, list_id)
        if list_orm is None:
            raise TaskListNotFoundError(f"Task list with id {list_id} not found")

    async def _get_task_or_raise(self, task_id: str) -> TaskORM:
        """
        Get a task by ID or raise an exception.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        task_orm = await self.session.get(TaskORM, task_id)
        if task_orm is None:
            raise TaskNotFoundError(f"Task with id {task_id} not found")
        return task_orm

    async def _get_next_position(self, list_id: str) -> int:
        """Get the position after the last task of a list."""
        result = await self.session.execute(
            select(func.max(TaskORM.position)).where(TaskORM.list_id == list_id)
        )
        last_position = result.scalar_one_or_none()
        return 0 if last_position is None else last_position + 1

    # ==============================================================================
    # CREATE OPERATIONS
    # ==============================================================================

    async def create_task(self, task: Task) -> Task:
        """
        Persist a new task at the end of its list.

        Args:
            task: Task to store, with its id already assigned

        Returns:
            The stored Task

        Raises:
            TaskListNotFoundError: If the owning list does not exist
        """
        try:
            logger.debug(f"Creating task: id={task.id}, title='{task.title}', list_id={task.list_id}")

            await self._verify_list_exists(task.list_id)
            position = await self._get_next_position(task.list_id)

            self.session.add(self._pydantic_to_orm(task, position))
            await self.session.flush()

            logger.info(f"Created task: id={task.id}, title='{task.title}', position={position}")
            return task
        except TaskListNotFoundError as e:
            logger.error(f"Failed to create task: {e}", exc_info=True)
            raise

    # ==============================================================================
    # READ OPERATIONS
    # ==============================================================================

    async def get_tasks_for_list(self, list_id: str) -> List[Task]:
        """
        Get all tasks of a list in display order.

        Args:
            list_id: ID of the task list

        Returns:
            List of Task instances ordered by position

        Raises:
            TaskListNotFoundError: If list does not exist
        """
        await self._verify_list_exists(list_id)

        result = await self.session.execute(
            select(TaskORM)
            .where(TaskORM.list_id == list_id)
            .order_by(TaskORM.position, TaskORM.created_at)
        )
        return [self._orm_to_pydantic(task_orm) for task_orm in result.scalars().all()]

    async def get_task_by_id(self, task_id: str) -> Optional[Task]:
        """
        Get a task by its ID.

        Returns:
            Task instance or None if not found
        """
        task_orm = await self.session.get(TaskORM, task_id)
        if task_orm is None:
            return None
        return self._orm_to_pydantic(task_orm)

    # ==============================================================================
    # UPDATE OPERATIONS
    # ==============================================================================

    async def update_task(self, task: Task) -> Task:
        """
        Overwrite a stored task's title, notes, status and priority.

        Args:
            task: Task carrying the new values

        Returns:
            The updated Task as stored

        Raises:
            TaskNotFoundError: If task does not exist
        """
        try:
            task_orm = await self._get_task_or_raise(task.id)

            task_orm.title = task.title
            task_orm.notes = task.notes
            task_orm.status = task.status.value
            task_orm.priority = int(task.priority)

            await self.session.flush()

            logger.info(
                f"Updated task: id={task.id}, title='{task.title}', "
                f"status={task.status.value}, priority={task.priority.name}"
            )
            return self._orm_to_pydantic(task_orm)
        except TaskNotFoundError as e:
            logger.error(f"Failed to update task - not found: {e}", exc_info=True)
            raise

    # ==============================================================================
    # DELETE OPERATIONS
    # ==============================================================================

    async def delete_task(self, task_id: str) -> bool:
        """
        Delete a task.

        Args:
            task_id: ID of the task to delete

        Returns:
            True if a task was deleted, False if no task had that id
        """
        task_orm = await self.session.get(TaskORM, task_id)
        if task_orm is None:
            logger.warning(f"Delete requested for unknown task: id={task_id}")
            return False

        await self.session.delete(task_orm)
        await self.session.flush()

        logger.info(f"Deleted task: id={task_id}, title='{task_orm.title}'")
        return True

    async def count_tasks(self, list_id: str) -> tuple[int, int]:
        """
        Count the tasks of a list.

        Returns:
            Tuple of (total tasks, completed tasks)
        """
        total = await self.session.scalar(
            select(func.count()).select_from(TaskORM).where(TaskORM.list_id == list_id)
        )
        completed = await self.session.scalar(
            select(func.count()).select_from(TaskORM).where(
                TaskORM.list_id == list_id,
                TaskORM.status == Status.COMPLETED.value,
            )
        )
        return total or 0, completed or 0

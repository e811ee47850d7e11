"""
List service for TaskPane.

Provides creation and retrieval of task lists, including default list
creation on first run and the task counts shown in the list bar.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskpane.database import TaskListORM
from taskpane.logging_config import get_logger
from taskpane.models import TaskList, new_id
from taskpane.services.task_service import TaskService

logger = get_logger(__name__)


class DuplicateListError(ValueError):
    """Raised when a list with the same name already exists."""
    pass


class ListService:
    """
    Service layer for task list management.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the list service.

        Args:
            session: Active database session for operations
        """
        self.session = session

    async def create_list(
        self,
        name: str,
        list_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> TaskList:
        """
        Create a new task list.

        Args:
            name: Name of the list to create
            list_id: Optional id for the list (generated if not provided)
            created_at: Optional creation timestamp

        Returns:
            Created TaskList model

        Raises:
            DuplicateListError: If a list with the same name already exists
        """
        logger.debug(f"Creating list: name='{name}', list_id={list_id}")

        if await self.get_list_by_name(name) is not None:
            logger.warning(f"List creation failed - name already exists: '{name}'")
            raise DuplicateListError(f"List with name '{name}' already exists")

        task_list = TaskList(
            id=list_id or new_id(),
            name=name,
            created_at=created_at or datetime.utcnow(),
        )
        self.session.add(TaskListORM(
            id=task_list.id,
            name=task_list.name,
            created_at=task_list.created_at,
        ))
        await self.session.flush()

        logger.info(f"Created list: id={task_list.id}, name='{name}'")
        return task_list

    async def get_all_lists(self) -> List[TaskList]:
        """
        Retrieve all task lists ordered by creation date.

        Returns:
            List of TaskList models with updated counts
        """
        result = await self.session.execute(
            select(TaskListORM).order_by(TaskListORM.created_at)
        )
        return [await self._orm_to_pydantic_with_counts(list_orm) for list_orm in result.scalars().all()]

    async def get_list_by_id(self, list_id: str) -> Optional[TaskList]:
        """
        Retrieve a specific task list by ID.

        Returns:
            TaskList model if found, None otherwise
        """
        list_orm = await self.session.get(TaskListORM, list_id)
        if list_orm is None:
            return None
        return await self._orm_to_pydantic_with_counts(list_orm)

    async def get_list_by_name(self, name: str) -> Optional[TaskList]:
        """
        Retrieve a task list by name.

        Returns:
            TaskList model if found, None otherwise
        """
        result = await self.session.execute(
            select(TaskListORM).where(TaskListORM.name == name)
        )
        list_orm = result.scalar_one_or_none()
        if list_orm is None:
            return None
        return await self._orm_to_pydantic_with_counts(list_orm)

    async def ensure_default_lists(self, names: List[str]) -> List[TaskList]:
        """
        Create the default lists if no list exists yet.

        Args:
            names: Names of the lists to create on first run

        Returns:
            All lists, ordered by creation date
        """
        existing = await self.get_all_lists()
        if existing:
            return existing

        logger.info(f"No lists found, creating defaults: {names}")
        # Distinct timestamps keep the configured order
        created_at = datetime.utcnow()
        for index, name in enumerate(names):
            await self.create_list(name, created_at=created_at + timedelta(microseconds=index))
        return await self.get_all_lists()

    async def _orm_to_pydantic_with_counts(self, list_orm: TaskListORM) -> TaskList:
        task_list = TaskList(
            id=list_orm.id,
            name=list_orm.name,
            created_at=list_orm.created_at,
        )
        task_count, completed_count = await TaskService(self.session).count_tasks(list_orm.id)
        task_list.update_counts(task_count, completed_count)
        return task_list

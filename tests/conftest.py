"""
Pytest configuration and fixtures for TaskPane tests.

Provides database fixtures, test data factories, and common test utilities.
"""

from datetime import datetime

import pytest
import pytest_asyncio

from taskpane.database import DatabaseManager, TaskListORM
from taskpane.models import Priority, Status, Task, TaskList


@pytest_asyncio.fixture
async def db_manager():
    """
    Create an in-memory SQLite database for testing.

    Yields:
        DatabaseManager instance with in-memory database
    """
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.initialize()

    yield manager

    await manager.close()


@pytest_asyncio.fixture
async def file_db_manager(tmp_path):
    """
    Create a file-backed SQLite database, for tests that open several sessions.

    Yields:
        Initialized DatabaseManager
    """
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'taskpane_test.db'}")
    await manager.initialize()

    yield manager

    await manager.close()


@pytest_asyncio.fixture
async def db_session(db_manager):
    """
    Provide a database session for tests.

    Yields:
        AsyncSession for database operations
    """
    async with db_manager.get_session() as session:
        yield session


@pytest.fixture
def sample_list_id():
    """A consistent id for testing task lists."""
    return "12345678-1234-5678-1234-567812345678"


@pytest_asyncio.fixture
async def sample_task_list(db_session, sample_list_id):
    """
    Create a sample task list in the database.

    Returns:
        TaskListORM instance
    """
    task_list = TaskListORM(
        id=sample_list_id,
        name="Work",
        created_at=datetime.utcnow()
    )
    db_session.add(task_list)
    await db_session.flush()
    return task_list


@pytest.fixture
def make_task_list():
    """
    Factory fixture for creating TaskList models.

    Example:
        def test_something(make_task_list):
            task_list = make_task_list(name="Custom List")
    """
    def _make_task_list(id: str = None, name: str = "Test List") -> TaskList:
        if id is None:
            return TaskList(name=name)
        return TaskList(id=id, name=name)
    return _make_task_list


@pytest.fixture
def make_task():
    """
    Factory fixture for creating Task models.

    Example:
        def test_something(make_task):
            task = make_task(title="Custom Task", list_id="L1")
    """
    def _make_task(
        id: str = None,
        title: str = "Test Task",
        status: Status = Status.NOT_STARTED,
        priority: Priority = Priority.NORMAL,
        list_id: str = "L1",
        notes: str = None,
    ) -> Task:
        fields = dict(
            title=title,
            status=status,
            priority=priority,
            list_id=list_id,
            notes=notes,
        )
        if id is not None:
            fields["id"] = id
        return Task(**fields)
    return _make_task

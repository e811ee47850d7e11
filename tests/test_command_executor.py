"""
Tests for the CommandExecutor.

Each command runs in its own session, so these tests use a file-backed
database and open fresh sessions to check what was committed.
"""

import pytest
import pytest_asyncio

from taskpane.controller import (
    ControllerState,
    CreateTask,
    DeleteTask,
    DisplayTask,
    EditInput,
    GetTasks,
    ReplaceTasks,
    SelectList,
    SetCompletion,
    SubmitNewTask,
    TaskListController,
    UpdateTask,
)
from taskpane.models import Status, Task
from taskpane.services.command_executor import CommandExecutor
from taskpane.services.list_service import ListService
from taskpane.services.task_service import TaskListNotFoundError, TaskService


@pytest_asyncio.fixture
async def work_list(file_db_manager):
    async with file_db_manager.get_session() as session:
        return await ListService(session).create_list("Work", list_id="L1")


@pytest.fixture
def displayed():
    return []


@pytest.fixture
def executor(file_db_manager, displayed):
    return CommandExecutor(file_db_manager, display_task=displayed.append)


async def _stored_tasks(db_manager, list_id):
    async with db_manager.get_session() as session:
        return await TaskService(session).get_tasks_for_list(list_id)


class TestExecute:
    """Tests for single command execution."""

    @pytest.mark.asyncio
    async def test_create_task_persists(self, executor, file_db_manager, work_list):
        task = Task.new("Buy milk", work_list.id)

        events = await executor.execute(CreateTask(task=task))

        assert events == []
        stored = await _stored_tasks(file_db_manager, work_list.id)
        assert [stored_task.id for stored_task in stored] == [task.id]

    @pytest.mark.asyncio
    async def test_get_tasks_answers_with_replace_tasks(self, executor, work_list):
        task = Task.new("Buy milk", work_list.id)
        await executor.execute(CreateTask(task=task))

        events = await executor.execute(GetTasks(list_id=work_list.id))

        assert len(events) == 1
        assert isinstance(events[0], ReplaceTasks)
        assert [loaded.id for loaded in events[0].tasks] == [task.id]

    @pytest.mark.asyncio
    async def test_update_task_persists(self, executor, file_db_manager, work_list):
        task = Task.new("Buy milk", work_list.id)
        await executor.execute(CreateTask(task=task))

        await executor.execute(UpdateTask(task=task.model_copy(update={"status": Status.COMPLETED})))

        stored = await _stored_tasks(file_db_manager, work_list.id)
        assert stored[0].status == Status.COMPLETED

    @pytest.mark.asyncio
    async def test_delete_task_and_unknown_delete(self, executor, file_db_manager, work_list):
        task = Task.new("Buy milk", work_list.id)
        await executor.execute(CreateTask(task=task))

        assert await executor.execute(DeleteTask(task_id=task.id)) == []
        assert await executor.execute(DeleteTask(task_id="missing")) == []
        assert await _stored_tasks(file_db_manager, work_list.id) == []

    @pytest.mark.asyncio
    async def test_display_task_uses_callback(self, executor, displayed, work_list):
        task = Task.new("Look at me", work_list.id)

        assert await executor.execute(DisplayTask(task=task)) == []
        assert displayed == [task]

    @pytest.mark.asyncio
    async def test_display_task_without_callback(self, file_db_manager, work_list):
        executor = CommandExecutor(file_db_manager)

        assert await executor.execute(DisplayTask(task=Task.new("x", work_list.id))) == []

    @pytest.mark.asyncio
    async def test_backend_errors_propagate(self, executor, work_list):
        with pytest.raises(TaskListNotFoundError):
            await executor.execute(GetTasks(list_id="missing"))

    @pytest.mark.asyncio
    async def test_unknown_command_raises(self, executor):
        with pytest.raises(TypeError):
            await executor.execute(object())


class TestControllerRoundTrip:
    """Driving the controller and executing its commands end to end."""

    @pytest.mark.asyncio
    async def test_created_task_reloads_after_reselect(self, executor, file_db_manager, work_list):
        controller = TaskListController()

        events = await executor.execute_all(controller.handle(SelectList(task_list=work_list)))
        for event in events:
            controller.handle(event)
        controller.handle(EditInput(text="Buy milk"))
        await executor.execute_all(controller.handle(SubmitNewTask()))
        created_id = controller.state.tasks[0].id
        await executor.execute_all(controller.handle(SetCompletion(task_id=created_id, is_complete=True)))

        fresh = TaskListController(ControllerState())
        for event in await executor.execute_all(fresh.handle(SelectList(task_list=work_list))):
            fresh.handle(event)

        assert [task.id for task in fresh.state.tasks] == [created_id]
        assert fresh.state.tasks[0].title == "Buy milk"
        assert fresh.state.tasks[0].status == Status.COMPLETED

"""
Tests for the TaskPane application class (taskpane/ui/app.py).

Tests cover:
- Startup: database, default lists, first list selection
- Creating, completing and deleting tasks through the UI
- List switching and the detail panel
- Backend failures reported as notifications
"""

import pytest
from sqlalchemy.exc import OperationalError
from textual.widgets import Checkbox, Input

from taskpane.config import Config
from taskpane.controller import ReplaceTasks, SelectTask, SetCompletion
from taskpane.models import Status, Task
from taskpane.services.list_service import ListService
from taskpane.services.task_service import TaskService
from taskpane.ui.app import TaskPaneApp
from taskpane.ui.components.detail_panel import DetailPanel
from taskpane.ui.components.list_bar import ListBar
from taskpane.ui.components.task_pane import TaskPane, TaskRow


@pytest.fixture
def app(tmp_path, monkeypatch):
    """App with a missing config file and a fresh database file."""
    for name in ["TASKPANE_DATABASE_URL", "TASKPANE_DEFAULT_LISTS",
                 "TASKPANE_EMPTY_MESSAGE", "TASKPANE_INPUT_PLACEHOLDER"]:
        monkeypatch.delenv(name, raising=False)
    return TaskPaneApp(
        config=Config(tmp_path / "missing.ini"),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'app.db'}",
    )


async def settle(pilot):
    """Let messages and command workers run to completion."""
    for _ in range(3):
        await pilot.pause()
        await pilot.app.workers.wait_for_complete()
    await pilot.pause()


async def stored_tasks(app):
    async with app._db_manager.get_session() as session:
        return await TaskService(session).get_tasks_for_list(app.controller.state.current_list.id)


class TestStartup:
    """Tests for application startup."""

    @pytest.mark.asyncio
    async def test_default_lists_created_and_first_selected(self, app):
        async with app.run_test() as pilot:
            await settle(pilot)

            bar = pilot.app.query_one(ListBar)
            assert [task_list.name for task_list in bar.lists] == ["Work", "Home", "Personal"]
            assert pilot.app.controller.state.current_list.name == "Work"
            assert pilot.app.controller.state.tasks == []

    @pytest.mark.asyncio
    async def test_compose_creates_components(self, app):
        async with app.run_test() as pilot:
            assert pilot.app.query_one("#list-bar", ListBar)
            assert pilot.app.query_one("#task-pane", TaskPane)
            assert pilot.app.query_one("#detail-panel", DetailPanel)


class TestTaskFlow:
    """Tests for task operations driven through the widgets."""

    @pytest.mark.asyncio
    async def test_add_complete_and_delete_task(self, app):
        async with app.run_test() as pilot:
            await settle(pilot)

            pilot.app.query_one("#new-task-input", Input).focus()
            await pilot.press(*"Milk")
            await pilot.press("enter")
            await settle(pilot)

            state = pilot.app.controller.state
            assert [task.title for task in state.tasks] == ["Milk"]
            assert state.input_buffer == ""
            assert [task.title for task in await stored_tasks(pilot.app)] == ["Milk"]

            task_id = state.tasks[0].id
            row = pilot.app.query_one(f"#task-{task_id}", TaskRow)
            row.query_one(Checkbox).toggle()
            await settle(pilot)

            assert (await stored_tasks(pilot.app))[0].status == Status.COMPLETED
            assert pilot.app.query_one(ListBar).lists[0].completion_percentage == 100.0

            await pilot.app.apply_event(
                pilot.app.query_one(TaskPane).view.rows[0].delete()
            )
            await settle(pilot)

            assert pilot.app.controller.state.tasks == []
            assert await stored_tasks(pilot.app) == []

    @pytest.mark.asyncio
    async def test_switching_lists_loads_their_tasks(self, app):
        async with app.run_test() as pilot:
            await settle(pilot)
            pilot.app.query_one("#new-task-input", Input).focus()
            await pilot.press(*"Report")
            await pilot.press("enter")
            await settle(pilot)

            pilot.app.action_switch_list(2)
            await settle(pilot)

            assert pilot.app.controller.state.current_list.name == "Home"
            assert pilot.app.controller.state.tasks == []

            pilot.app.action_switch_list(1)
            await settle(pilot)

            assert [task.title for task in pilot.app.controller.state.tasks] == ["Report"]

    @pytest.mark.asyncio
    async def test_select_task_shows_details(self, app):
        async with app.run_test() as pilot:
            await settle(pilot)
            pilot.app.query_one("#new-task-input", Input).focus()
            await pilot.press(*"Plan")
            await pilot.press("enter")
            await settle(pilot)

            task = pilot.app.controller.state.tasks[0]
            await pilot.app.apply_event(SelectTask(task=task))
            await settle(pilot)

            panel = pilot.app.query_one(DetailPanel)
            assert panel.current_task == task

            pilot.app.action_clear_details()
            assert panel.current_task is None


@pytest.fixture
def notifications(app, monkeypatch):
    """Record notify() calls as (message, severity) pairs."""
    recorded = []

    def record(message, *, severity="information", **kwargs):
        recorded.append((message, severity))

    monkeypatch.setattr(app, "notify", record)
    return recorded


class TestBackendFailures:
    """Backend errors are logged and shown, and the app keeps running."""

    @pytest.mark.asyncio
    async def test_failed_update_is_notified(self, app, notifications):
        async with app.run_test() as pilot:
            await settle(pilot)
            unsaved = Task.new("Never stored", pilot.app.controller.state.current_list.id)
            await pilot.app.apply_event(ReplaceTasks(tasks=[unsaved]))

            await pilot.app.apply_event(SetCompletion(task_id=unsaved.id, is_complete=True))
            state_after_toggle = pilot.app.controller.state
            await settle(pilot)

            assert pilot.app.is_running
            assert [severity for _, severity in notifications] == ["error"]
            assert "Could not save changes" in notifications[0][0]
            assert pilot.app.controller.state == state_after_toggle

    @pytest.mark.asyncio
    async def test_failed_list_refresh_is_notified(self, app, notifications, monkeypatch):
        async def locked(self):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        async with app.run_test() as pilot:
            await settle(pilot)
            lists_before = list(pilot.app.query_one(ListBar).lists)
            monkeypatch.setattr(ListService, "get_all_lists", locked)

            pilot.app.query_one("#new-task-input", Input).focus()
            await pilot.press(*"Milk")
            await pilot.press("enter")
            await settle(pilot)

            assert pilot.app.is_running
            assert [severity for _, severity in notifications] == ["error"]
            assert "Could not reload lists" in notifications[0][0]
            assert [task.title for task in await stored_tasks(pilot.app)] == ["Milk"]
            assert pilot.app.query_one(ListBar).lists == lists_before

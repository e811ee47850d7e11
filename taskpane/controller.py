"""
Task list controller for TaskPane.

The controller owns the UI-facing state (current list, displayed tasks,
pending input text). It applies one event at a time and answers with the
commands the backend has to run, in the order they must run. It never
performs I/O itself: persistence and display happen in whoever executes
the returned commands, and their results come back as new events.
"""

from typing import Callable, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from taskpane.logging_config import get_logger
from taskpane.models import Priority, Status, Task, TaskList

logger = get_logger(__name__)


class ControllerState(BaseModel):
    """Snapshot of what the task pane shows."""

    current_list: Optional[TaskList] = None
    tasks: List[Task] = Field(default_factory=list)
    input_buffer: str = ""


# ==============================================================================
# EVENTS
# ==============================================================================

class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class SelectList(_Message):
    """A list was chosen for display."""
    task_list: TaskList


class Delete(_Message):
    """The delete button of a task was pressed."""
    task_id: str


class ReplaceTasks(_Message):
    """Fresh tasks for the current list arrived from the backend."""
    tasks: List[Task]


class SelectTask(_Message):
    """A task row was activated."""
    task: Task


class SetCompletion(_Message):
    """A task checkbox was toggled."""
    task_id: str
    is_complete: bool


class EditInput(_Message):
    """The new-task input text changed."""
    text: str


class SubmitNewTask(_Message):
    """The new-task input was submitted."""


class SetPriority(_Message):
    task_id: str
    priority: Priority


class Rename(_Message):
    task_id: str
    title: str


class MoveUp(_Message):
    """Reserved for reordering; currently ignored."""


class MoveDown(_Message):
    """Reserved for reordering; currently ignored."""


Event = Union[
    SelectList,
    Delete,
    ReplaceTasks,
    SelectTask,
    SetCompletion,
    EditInput,
    SubmitNewTask,
    SetPriority,
    Rename,
    MoveUp,
    MoveDown,
]


# ==============================================================================
# COMMANDS
# ==============================================================================

class GetTasks(_Message):
    """Load the tasks of a list. Answered with a ReplaceTasks event."""
    list_id: str


class CreateTask(_Message):
    task: Task


class UpdateTask(_Message):
    task: Task


class DeleteTask(_Message):
    task_id: str


class DisplayTask(_Message):
    """Show the detail view for a task."""
    task: Task


Command = Union[GetTasks, CreateTask, UpdateTask, DeleteTask, DisplayTask]

Transition = Tuple[ControllerState, List[Command]]


# ==============================================================================
# EVENT HANDLERS
# ==============================================================================

def _select_list(state: ControllerState, event: SelectList) -> Transition:
    # Tasks of the previous list stay until ReplaceTasks arrives.
    new_state = state.model_copy(update={"current_list": event.task_list})
    return new_state, [GetTasks(list_id=event.task_list.id)]


def _delete(state: ControllerState, event: Delete) -> Transition:
    remaining = [task for task in state.tasks if task.id != event.task_id]
    new_state = state.model_copy(update={"tasks": remaining})
    # Emitted even when the task is not shown; the backend owns the id.
    return new_state, [DeleteTask(task_id=event.task_id)]


def _replace_tasks(state: ControllerState, event: ReplaceTasks) -> Transition:
    return state.model_copy(update={"tasks": list(event.tasks)}), []


def _select_task(state: ControllerState, event: SelectTask) -> Transition:
    return state, [DisplayTask(task=event.task)]


def _edit_input(state: ControllerState, event: EditInput) -> Transition:
    return state.model_copy(update={"input_buffer": event.text}), []


def _submit_new_task(state: ControllerState, event: SubmitNewTask) -> Transition:
    if state.current_list is None:
        return state, []

    task = Task.new(state.input_buffer, state.current_list.id)
    new_state = state.model_copy(update={
        "tasks": [*state.tasks, task],
        "input_buffer": "",
    })
    return new_state, [CreateTask(task=task)]


def _update_task(state: ControllerState, task_id: str, **changes) -> Transition:
    """Apply field changes to one task and emit its update, or do nothing."""
    for index, task in enumerate(state.tasks):
        if task.id == task_id:
            updated = task.model_copy(update=changes)
            tasks = list(state.tasks)
            tasks[index] = updated
            return state.model_copy(update={"tasks": tasks}), [UpdateTask(task=updated)]
    return state, []


def _set_completion(state: ControllerState, event: SetCompletion) -> Transition:
    status = Status.COMPLETED if event.is_complete else Status.NOT_STARTED
    return _update_task(state, event.task_id, status=status)


def _set_priority(state: ControllerState, event: SetPriority) -> Transition:
    return _update_task(state, event.task_id, priority=event.priority)


def _rename(state: ControllerState, event: Rename) -> Transition:
    return _update_task(state, event.task_id, title=event.title)


def _ignore(state: ControllerState, event: Event) -> Transition:
    return state, []


_HANDLERS: Dict[Type, Callable[[ControllerState, Event], Transition]] = {
    SelectList: _select_list,
    Delete: _delete,
    ReplaceTasks: _replace_tasks,
    SelectTask: _select_task,
    SetCompletion: _set_completion,
    EditInput: _edit_input,
    SubmitNewTask: _submit_new_task,
    SetPriority: _set_priority,
    Rename: _rename,
    MoveUp: _ignore,
    MoveDown: _ignore,
}


class TaskListController:
    """
    Applies events to the task pane state and collects backend commands.

    ``apply`` is a pure transition: it never mutates the state it is given.
    ``handle`` is the stateful variant used by the UI, which keeps the
    latest state on the controller.
    """

    def __init__(self, state: Optional[ControllerState] = None) -> None:
        self.state = state or ControllerState()

    @staticmethod
    def apply(state: ControllerState, event: Event) -> Transition:
        """
        Apply a single event to a state.

        Args:
            state: Current state, left untouched
            event: Event to apply

        Returns:
            Tuple of (new state, commands in execution order)

        Raises:
            TypeError: If the event type is unknown
        """
        handler = _HANDLERS.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {type(event).__name__}")
        return handler(state, event)

    def handle(self, event: Event) -> List[Command]:
        """
        Apply an event to the controller's own state.

        Args:
            event: Event to apply

        Returns:
            Commands to execute, in order
        """
        self.state, commands = self.apply(self.state, event)
        logger.debug(
            f"Applied {type(event).__name__}: tasks={len(self.state.tasks)}, "
            f"commands={[type(command).__name__ for command in commands]}"
        )
        return commands

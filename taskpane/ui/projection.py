"""Rendering projection of the controller state.

project() turns a ControllerState into a small view tree that widgets can
draw without knowing the controller. Rows and the input row also know which
controller events their affordances raise, so widgets only forward user
interactions.
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict

from taskpane.controller import (
    ControllerState,
    Delete,
    EditInput,
    SelectTask,
    SetCompletion,
    SubmitNewTask,
)
from taskpane.models import Priority, Task

EMPTY_MESSAGE = "No items"
INPUT_PLACEHOLDER = "Add new task"


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class TaskRowView(_View):
    """One task row: completion toggle, title, delete button."""

    task: Task

    @property
    def task_id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def is_completed(self) -> bool:
        return self.task.is_completed

    @property
    def priority(self) -> Priority:
        return self.task.priority

    def toggle(self, value: bool) -> SetCompletion:
        return SetCompletion(task_id=self.task.id, is_complete=value)

    def delete(self) -> Delete:
        return Delete(task_id=self.task.id)

    def select(self) -> SelectTask:
        return SelectTask(task=self.task)


class InputRowView(_View):
    """The new-task text field and its submit button."""

    text: str
    placeholder: str = INPUT_PLACEHOLDER

    def edit(self, text: str) -> EditInput:
        return EditInput(text=text)

    def submit(self) -> SubmitNewTask:
        return SubmitNewTask()


class EmptyView(_View):
    """No task rows. The input row stays so an empty list can be filled."""

    input: InputRowView
    message: str = EMPTY_MESSAGE


class ListView(_View):
    rows: List[TaskRowView]
    input: InputRowView


View = Union[EmptyView, ListView]


def project(
    state: ControllerState,
    empty_message: str = EMPTY_MESSAGE,
    placeholder: str = INPUT_PLACEHOLDER,
) -> View:
    """Project a controller state to a view tree.

    The empty view keeps the new-task input row next to the empty
    message, so a list without tasks can still get its first one.

    Args:
        state: State to draw
        empty_message: Text shown when there are no tasks
        placeholder: Placeholder of the new-task input

    Returns:
        EmptyView when there are no tasks, ListView otherwise
    """
    input_row = InputRowView(text=state.input_buffer, placeholder=placeholder)
    if not state.tasks:
        return EmptyView(input=input_row, message=empty_message)

    return ListView(
        rows=[TaskRowView(task=task) for task in state.tasks],
        input=input_row,
    )

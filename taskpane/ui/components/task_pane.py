"""Task pane widgets.

The TaskPane draws the projection of the controller state: an empty
message or one TaskRow per task, followed by the new-task input row. It
keeps no task state of its own; every user interaction is forwarded as a
TaskPane.Interaction message carrying the controller event to apply.
"""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Checkbox, Input, Static

from taskpane.controller import ControllerState, Event
from taskpane.logging_config import get_logger
from taskpane.models import Priority
from taskpane.ui.projection import (
    EMPTY_MESSAGE,
    INPUT_PLACEHOLDER,
    EmptyView,
    InputRowView,
    ListView,
    TaskRowView,
    View,
    project,
)
from taskpane.ui.style import ButtonStyle
from taskpane.ui.theme import (
    BORDER,
    COMMENT,
    COMPLETE_COLOR,
    FOREGROUND,
    get_priority_color,
)

logger = get_logger(__name__)

ROW_STYLE = ButtonStyle(selected=False, accent=True)

TRASH_ICON = "🗑"
ADD_ICON = "+"


class TaskTitle(Static):
    """Task title; clicking it opens the task details."""

    class Clicked(Message):
        """Posted when the title is clicked."""

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Clicked())


class TaskRow(Horizontal):
    """A single task: completion checkbox, title and delete button."""

    can_focus = True

    DEFAULT_CSS = ROW_STYLE.css("TaskRow") + f"""
    TaskRow {{
        height: 3;
        width: 100%;
        padding: 0 1;
        align-vertical: middle;
    }}

    TaskRow Checkbox {{
        width: auto;
        border: none;
        background: transparent;
    }}

    TaskRow TaskTitle {{
        width: 1fr;
        padding: 0 1;
    }}

    TaskRow .delete-button {{
        min-width: 5;
        width: 5;
        border: none;
    }}
    """

    BINDINGS = [
        Binding("enter", "select_task", "Details", show=False),
        Binding("delete", "delete_task", "Delete", show=False),
    ]

    def __init__(self, row: TaskRowView, **kwargs) -> None:
        """Initialize a TaskRow.

        Args:
            row: Projected row to display
            **kwargs: Additional keyword arguments for Horizontal
        """
        super().__init__(**kwargs)
        self.row = row

    def compose(self) -> ComposeResult:
        yield Checkbox("", value=self.row.is_completed, classes="complete-toggle")
        yield TaskTitle(self.render_title())
        yield Button(TRASH_ICON, classes="delete-button")

    def render_title(self) -> Text:
        """Build the title text with priority marker and completion styling."""
        text = Text()
        if self.row.priority == Priority.HIGH:
            text.append("! ", style=f"bold {get_priority_color(self.row.priority)}")
        elif self.row.priority == Priority.LOW:
            text.append("↓ ", style=get_priority_color(self.row.priority))

        if self.row.is_completed:
            text.append(self.row.title, style=f"strike {COMPLETE_COLOR}")
        else:
            text.append(self.row.title, style=FOREGROUND)
        return text

    def _forward(self, event: Event) -> None:
        self.post_message(TaskPane.Interaction(event))

    def on_checkbox_changed(self, message: Checkbox.Changed) -> None:
        message.stop()
        self._forward(self.row.toggle(message.value))

    def on_button_pressed(self, message: Button.Pressed) -> None:
        message.stop()
        self._forward(self.row.delete())

    def on_task_title_clicked(self, message: TaskTitle.Clicked) -> None:
        message.stop()
        self._forward(self.row.select())

    def action_select_task(self) -> None:
        self._forward(self.row.select())

    def action_delete_task(self) -> None:
        self._forward(self.row.delete())


class NewTaskRow(Horizontal):
    """Text field for a new task title, with an add button."""

    DEFAULT_CSS = f"""
    NewTaskRow {{
        height: 3;
        width: 100%;
        border-top: solid {BORDER};
    }}

    NewTaskRow Input {{
        width: 1fr;
    }}

    NewTaskRow .add-button {{
        min-width: 5;
        width: 5;
    }}
    """

    def __init__(self, row: InputRowView, **kwargs) -> None:
        super().__init__(**kwargs)
        self.row = row

    def compose(self) -> ComposeResult:
        yield Input(value=self.row.text, placeholder=self.row.placeholder, id="new-task-input")
        yield Button(ADD_ICON, classes="add-button")

    def _forward(self, event: Event) -> None:
        self.post_message(TaskPane.Interaction(event))

    def on_input_changed(self, message: Input.Changed) -> None:
        message.stop()
        self._forward(self.row.edit(message.value))

    def on_input_submitted(self, message: Input.Submitted) -> None:
        message.stop()
        self._forward(self.row.submit())

    def on_button_pressed(self, message: Button.Pressed) -> None:
        message.stop()
        self._forward(self.row.submit())


class TaskPane(Widget):
    """Displays the tasks of the current list and the new-task input.

    The pane only re-composes when the visible tasks change. Edits of the
    input text alone leave the widgets in place so the text field keeps its
    cursor and focus.
    """

    DEFAULT_CSS = f"""
    TaskPane {{
        width: 1fr;
        height: 100%;
        border: round {BORDER};
        layout: vertical;
    }}

    TaskPane .task-rows {{
        width: 100%;
        height: 1fr;
    }}

    TaskPane .empty-message {{
        width: 100%;
        height: 1fr;
        color: {COMMENT};
        text-align: center;
        content-align: center middle;
    }}
    """

    def __init__(
        self,
        empty_message: str = EMPTY_MESSAGE,
        placeholder: str = INPUT_PLACEHOLDER,
        **kwargs
    ) -> None:
        """Initialize a TaskPane.

        Args:
            empty_message: Text shown when the list has no tasks
            placeholder: Placeholder of the new-task input
            **kwargs: Additional keyword arguments for Widget
        """
        super().__init__(**kwargs)
        self.empty_message = empty_message
        self.placeholder = placeholder
        self._view: View = project(ControllerState(), empty_message, placeholder)

    @property
    def view(self) -> View:
        """The projection currently displayed."""
        return self._view

    def compose(self) -> ComposeResult:
        view = self._view
        if isinstance(view, EmptyView):
            yield Static(view.message, classes="empty-message")
        else:
            with VerticalScroll(classes="task-rows"):
                for row in view.rows:
                    yield TaskRow(row, id=f"task-{row.task_id}")
        yield NewTaskRow(view.input)

    async def set_state(self, state: ControllerState) -> None:
        """Redraw the pane for a new controller state.

        Args:
            state: State to display
        """
        view = project(state, self.empty_message, self.placeholder)
        previous = self._view
        self._view = view

        if _rows(previous) == _rows(view):
            return

        logger.debug(f"TaskPane: re-composing with {len(_rows(view))} rows")
        input_had_focus = self._input_has_focus()
        await self.recompose()
        if input_had_focus:
            self.query_one("#new-task-input", Input).focus()

    def _input_has_focus(self) -> bool:
        focused: Optional[Widget] = self.app.focused if self.is_mounted else None
        return focused is not None and focused.id == "new-task-input"

    class Interaction(Message):
        """Posted when the user does something the controller must handle."""

        def __init__(self, event: Event) -> None:
            """Initialize the Interaction message.

            Args:
                event: Controller event raised by the interaction
            """
            super().__init__()
            self.event = event


def _rows(view: View) -> list:
    if isinstance(view, ListView):
        return view.rows
    return []

"""Detail panel widget showing the task picked with DisplayTask."""

from datetime import datetime
from typing import Optional

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from taskpane.logging_config import get_logger
from taskpane.models import Status, Task
from taskpane.ui.theme import (
    ACCENT,
    BORDER,
    COMMENT,
    FOREGROUND,
    GREEN,
    PURPLE,
    YELLOW,
    get_priority_color,
)

logger = get_logger(__name__)

STATUS_LABELS = {
    Status.NOT_STARTED: ("Not started", YELLOW),
    Status.IN_PROGRESS: ("In progress", PURPLE),
    Status.COMPLETED: ("Completed", GREEN),
}


class DetailPanel(Widget):
    """Display-only panel with the title, status, priority and dates of a task."""

    can_focus = False

    DEFAULT_CSS = f"""
    DetailPanel {{
        width: 1fr;
        height: 100%;
        border: dashed {BORDER};
        padding: 0 1;
    }}

    DetailPanel .panel-content {{
        width: 100%;
        height: 1fr;
        padding: 1 1;
    }}

    DetailPanel .empty-message {{
        width: 100%;
        color: {COMMENT};
        text-align: center;
        padding: 2;
    }}

    DetailPanel .details {{
        color: {FOREGROUND};
    }}
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.current_task: Optional[Task] = None

    def compose(self):
        with VerticalScroll(classes="panel-content"):
            yield Static(
                "No task selected\nSelect a task to view details",
                classes="empty-message",
                id="detail-empty",
            )
            yield Static("", classes="details", id="detail-body", markup=True)

    def on_mount(self) -> None:
        self._render_details()

    def set_task(self, task: Optional[Task]) -> None:
        """Show a task, or the empty message when task is None."""
        if task:
            logger.debug(f"DetailPanel: Setting task '{task.title[:50]}' (id={task.id})")
        else:
            logger.debug("DetailPanel: Clearing task")
        self.current_task = task
        if self.is_mounted:
            self._render_details()

    def _render_details(self) -> None:
        empty_message = self.query_one("#detail-empty", Static)
        body = self.query_one("#detail-body", Static)

        if self.current_task is None:
            empty_message.display = True
            body.display = False
            return

        empty_message.display = False
        body.display = True
        body.update(build_details_markup(self.current_task))


def build_details_markup(task: Task) -> str:
    """Build the Rich markup describing a task.

    Args:
        task: Task to describe

    Returns:
        Markup string with TASK, STATUS, DATES and optional NOTES sections
    """
    status_label, status_color = STATUS_LABELS[task.status]
    priority_color = get_priority_color(task.priority)
    title = escape(task.title) or "[italic](untitled)[/italic]"

    lines = [
        f"[bold {ACCENT}]TASK[/bold {ACCENT}]",
        f"  {title}",
        "",
        f"[bold {ACCENT}]STATUS[/bold {ACCENT}]",
        f"  Status: [{status_color}]{status_label}[/{status_color}]",
        f"  Priority: [{priority_color}]{task.priority.name.capitalize()}[/{priority_color}]",
        "",
        f"[bold {ACCENT}]DATES[/bold {ACCENT}]",
        f"  Created: [{PURPLE}]{_format_datetime(task.created_at)}[/{PURPLE}]",
    ]

    if task.notes:
        lines.append("")
        lines.append(f"[bold {ACCENT}]NOTES[/bold {ACCENT}]")
        for note_line in task.notes.split("\n"):
            lines.append(f"  [italic]{escape(note_line)}[/italic]")

    return "\n".join(lines)


def _format_datetime(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M:%S")

"""TaskPane UI components - Reusable widgets and panels."""

from taskpane.ui.components.detail_panel import DetailPanel
from taskpane.ui.components.list_bar import ListBar, ListTab
from taskpane.ui.components.task_pane import NewTaskRow, TaskPane, TaskRow

__all__ = ["DetailPanel", "ListBar", "ListTab", "NewTaskRow", "TaskPane", "TaskRow"]

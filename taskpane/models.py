"""
Pydantic models for TaskPane.

Defines tasks, task lists, and the status and priority enumerations
shared by the controller, the services and the UI.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr, computed_field


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid4())


class Status(str, Enum):
    """Task progress states."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(IntEnum):
    """Task priority. Ordered, higher value means more urgent."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


class TaskList(BaseModel):
    """
    Represents a named collection of tasks (e.g., Work, Home).
    """

    id: str = Field(default_factory=new_id, description="Unique identifier for the list")
    name: str = Field(..., min_length=1, max_length=100, description="List name")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")

    _task_count: int = PrivateAttr(default=0)
    _completed_count: int = PrivateAttr(default=0)

    @computed_field
    @property
    def task_count(self) -> int:
        """Total number of tasks in this list."""
        return self._task_count

    @computed_field
    @property
    def completion_percentage(self) -> float:
        """
        Calculate completion percentage for this list.

        Returns:
            Percentage of completed tasks (0-100)
        """
        if self._task_count == 0:
            return 0.0
        return round((self._completed_count / self._task_count) * 100, 1)

    def update_counts(self, task_count: int, completed_count: int) -> None:
        """
        Update the task counts for computed properties.

        Args:
            task_count: Total number of tasks
            completed_count: Number of completed tasks
        """
        self._task_count = task_count
        self._completed_count = completed_count


class Task(BaseModel):
    """
    Represents a single to-do item belonging to a task list.

    Titles are free text and may be empty: a task is created from whatever
    the input field holds when it is submitted.
    """

    id: str = Field(default_factory=new_id, description="Unique identifier for the task")
    title: str = Field(default="", description="Task title")
    notes: Optional[str] = Field(default=None, max_length=5000, description="Optional task notes")
    status: Status = Field(default=Status.NOT_STARTED, description="Progress state")
    priority: Priority = Field(default=Priority.NORMAL, description="Task priority")
    list_id: str = Field(..., description="ID of the list this task belongs to")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")

    @classmethod
    def new(cls, title: str, list_id: str) -> "Task":
        """
        Build a fresh task with a new id and default status and priority.

        Args:
            title: Task title
            list_id: ID of the owning list

        Returns:
            New Task instance
        """
        return cls(title=title, list_id=list_id)

    @computed_field
    @property
    def is_completed(self) -> bool:
        """Whether the task is in the completed state."""
        return self.status == Status.COMPLETED

"""Task list state with optimistic status changes"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..models.task import Task, TaskStatus
from .api_client import ApiClientError, TaskApiClient
from .form import FlashSignal
from .notifications import NotificationCenter, notifications

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this task?"

FLASH_MESSAGES = {
    FlashSignal.CREATED: "Task created successfully!",
    FlashSignal.UPDATED: "Task updated successfully!",
}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class WidgetState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class StatusWidget:
    """Per-task status control: Idle -> Pending -> Committed | RolledBack -> Idle"""
    task_id: str
    status: TaskStatus
    state: WidgetState = WidgetState.IDLE
    previous: Optional[TaskStatus] = None
    outcome: Optional[WidgetState] = None
    transitions: List[WidgetState] = field(default_factory=list)

    @property
    def updating(self) -> bool:
        return self.state == WidgetState.PENDING

    def _move(self, state: WidgetState):
        self.state = state
        self.transitions.append(state)

    def begin(self, status: TaskStatus):
        self.previous = self.status
        self.status = status
        self.outcome = None
        self._move(WidgetState.PENDING)

    def commit(self):
        self.outcome = WidgetState.COMMITTED
        self._move(WidgetState.COMMITTED)

    def rollback(self):
        self.status = self.previous
        self.outcome = WidgetState.ROLLED_BACK
        self._move(WidgetState.ROLLED_BACK)

    def finish(self):
        self.previous = None
        self._move(WidgetState.IDLE)


def sort_key(task: Task):
    return (task.createdAt or _EPOCH, task.id)


class TaskBoard:
    """In-memory copy of the task list, kept in sync without refetching"""

    def __init__(self, api: TaskApiClient, notifier: Optional[NotificationCenter] = None):
        self.api = api
        self.notifier = notifier or notifications
        self._tasks: Dict[str, Task] = {}
        self._widgets: Dict[str, StatusWidget] = {}
        self.error: Optional[str] = None
        self.loading = False

    @property
    def tasks(self) -> List[Task]:
        """Tasks newest first"""
        return sorted(self._tasks.values(), key=sort_key, reverse=True)

    def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def widget(self, task_id: str) -> StatusWidget:
        if task_id not in self._widgets:
            self._widgets[task_id] = StatusWidget(task_id=task_id, status=self._tasks[task_id].status)
        return self._widgets[task_id]

    async def load(self) -> bool:
        """Fetch the task list once; failures land in `error`"""
        self.loading = True
        self.error = None
        try:
            tasks = await self.api.list_tasks()
        except ApiClientError as e:
            logger.error(f"Error fetching tasks: {e.message}")
            self.error = e.message
            return False
        finally:
            self.loading = False

        self._tasks = {task.id: task for task in tasks}
        self._widgets = {}
        return True

    def _set_status(self, task_id: str, status: TaskStatus):
        task = self._tasks.get(task_id)
        if task is not None:
            self._tasks[task_id] = task.model_copy(update={"status": status})

    async def change_status(self, task_id: str, status: TaskStatus) -> bool:
        """Apply the new status locally, then confirm it with the server"""
        status = TaskStatus(status)
        widget = self.widget(task_id)
        widget.begin(status)
        self._set_status(task_id, status)
        try:
            await self.api.update_status(task_id, status)
        except ApiClientError as e:
            logger.error(f"Error updating task status: {e.message}")
            widget.rollback()
            # The task may have been removed while the request was in flight
            self._set_status(task_id, widget.status)
            self.notifier.show_error(f"Error updating status: {e.message}")
            return False
        else:
            widget.commit()
            self.notifier.show_success(f"Status updated to {status.value}")
            return True
        finally:
            widget.finish()

    async def delete(self, task_id: str, confirm: Callable[[str], bool]) -> bool:
        """Delete after the user confirms; local state changes only on success"""
        if not confirm(DELETE_PROMPT):
            return False
        try:
            await self.api.delete_task(task_id)
        except ApiClientError as e:
            logger.error(f"Error deleting task: {e.message}")
            self.notifier.show_error(e.message or "Failed to delete task.")
            return False

        self._tasks.pop(task_id, None)
        self._widgets.pop(task_id, None)
        self.notifier.show_success("Task deleted successfully!")
        return True

    def handle_flash(self, signal: Optional[FlashSignal]) -> bool:
        """Show the notification passed back by a create/edit flow"""
        if signal is None:
            return False
        self.notifier.show_success(FLASH_MESSAGES[FlashSignal(signal)])
        return True

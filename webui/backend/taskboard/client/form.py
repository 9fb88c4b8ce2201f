"""Create and edit task flows"""
import logging
from enum import Enum
from typing import Any, Dict, Optional

from ..models.task import Task, TaskStatus
from .api_client import ApiClientError, TaskApiClient

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "dueDate")


class FlashSignal(str, Enum):
    """One-shot marker handed to the list view after a successful submit"""
    CREATED = "created"
    UPDATED = "updated"


def form_fields(task: Task) -> Dict[str, Any]:
    """Prefill values for the edit form; the due date becomes YYYY-MM-DD"""
    return {
        "title": task.title,
        "description": task.description,
        "dueDate": task.dueDate.date().isoformat(),
        "status": task.status.value,
    }


class TaskForm:
    """State behind the new/edit task pages"""

    def __init__(self, api: TaskApiClient):
        self.api = api
        self.fields: Dict[str, Any] = {
            "title": "",
            "description": "",
            "dueDate": "",
            "status": TaskStatus.PENDING.value,
        }
        self.task_id: Optional[str] = None
        self.error: Optional[str] = None
        self.loading = False
        self.submitting = False

    async def load(self, task_id: str) -> bool:
        """Fetch an existing task into the form (edit mode)"""
        self.task_id = task_id
        self.loading = True
        self.error = None
        try:
            task = await self.api.get_task(task_id)
            self.fields = form_fields(task)
            return True
        except ApiClientError as e:
            logger.error(f"Error fetching task {task_id}: {e.message}")
            self.error = e.message
            return False
        finally:
            self.loading = False

    def _missing_required(self, fields: Dict[str, Any]) -> bool:
        return any(not str(fields.get(name) or "").strip() for name in REQUIRED_FIELDS)

    async def _submit(self, fields: Dict[str, Any], task_id: Optional[str]) -> Optional[FlashSignal]:
        self.error = None
        merged = {**self.fields, **fields}
        if self._missing_required(merged):
            self.error = "All fields are required."
            return None

        self.fields = merged
        self.submitting = True
        try:
            if task_id is None:
                await self.api.create_task(merged)
                return FlashSignal.CREATED
            await self.api.update_task(task_id, merged)
            return FlashSignal.UPDATED
        except ApiClientError as e:
            logger.error(f"Error saving task: {e.message}")
            self.error = e.message
            return None
        finally:
            self.submitting = False

    async def submit_new(self, fields: Dict[str, Any]) -> Optional[FlashSignal]:
        """Create a task; returns the flash signal on success, None on failure"""
        return await self._submit(fields, None)

    async def submit_edit(self, task_id: str, fields: Dict[str, Any]) -> Optional[FlashSignal]:
        """Save a full update of an existing task"""
        return await self._submit(fields, task_id)

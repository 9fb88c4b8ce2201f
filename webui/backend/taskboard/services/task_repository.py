"""Task repository - reads and writes task documents in MongoDB"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..db import get_db
from ..errors import TaskError
from ..models.task import Task, from_document, to_document, validate_for_create, validate_for_update

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validate_task_id(task_id: str) -> ObjectId:
    """Reject malformed identifiers before any query is issued"""
    if not isinstance(task_id, str) or not ObjectId.is_valid(task_id):
        raise TaskError.invalid_id()
    return ObjectId(task_id)


class TaskRepository:
    """CRUD operations over the tasks collection.

    Every failure is raised as a TaskError; driver exceptions become
    STORAGE_ERROR so callers never see pymongo types.
    """

    def __init__(self, collection):
        self.collection = collection

    async def list_tasks(self) -> List[Task]:
        """List all tasks in storage order"""
        try:
            docs = await self.collection.find({}).to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to list tasks: {e}")
            raise TaskError.storage(str(e))
        return [from_document(doc) for doc in docs]

    async def get_task(self, task_id: str) -> Task:
        """Get task by ID"""
        oid = validate_task_id(task_id)
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Failed to get task {task_id}: {e}")
            raise TaskError.storage("Error fetching task")
        if doc is None:
            raise TaskError.not_found()
        return from_document(doc)

    async def create_task(self, payload: Any) -> Task:
        """Validate and insert a new task"""
        request = validate_for_create(payload)
        now = _now()
        doc: Dict[str, Any] = to_document(request)
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Failed to create task: {e}")
            raise TaskError.storage(str(e))
        doc["_id"] = result.inserted_id
        logger.info(f"Created task {result.inserted_id}")
        return from_document(doc)

    async def update_task(self, task_id: str, payload: Any) -> Task:
        """Apply a full or status-only update and return the stored result"""
        oid = validate_task_id(task_id)
        request = validate_for_update(payload)
        changes = to_document(request)
        changes["updatedAt"] = _now()
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update task {task_id}: {e}")
            raise TaskError.storage("Error updating task")
        if doc is None:
            raise TaskError.not_found()
        logger.info(f"Updated task {task_id} ({type(request).__name__})")
        return from_document(doc)

    async def delete_task(self, task_id: str) -> None:
        """Delete task by ID"""
        oid = validate_task_id(task_id)
        try:
            doc = await self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise TaskError.storage("Error deleting task")
        if doc is None:
            raise TaskError.not_found()
        logger.info(f"Deleted task {task_id}")


def get_task_repository() -> TaskRepository:
    """FastAPI dependency returning a repository bound to the shared client"""
    return TaskRepository(get_db().tasks)

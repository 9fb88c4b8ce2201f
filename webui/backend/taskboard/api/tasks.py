"""Task CRUD API endpoints"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from ..errors import TaskError
from ..services.task_repository import TaskRepository, get_task_repository, validate_task_id
from .envelope import ok

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


async def read_json(request: Request) -> Any:
    """Parse the request body, rejecting malformed JSON with a 400"""
    try:
        return await request.json()
    except ValueError:
        raise TaskError.validation(["Invalid JSON body"])


@router.get("/tasks")
async def list_tasks(repo: TaskRepository = Depends(get_task_repository)):
    """List all tasks"""
    tasks = await repo.list_tasks()
    return ok([task.to_json() for task in tasks])


@router.post("/tasks", status_code=201)
async def create_task(request: Request, repo: TaskRepository = Depends(get_task_repository)):
    """Create a new task"""
    payload = await read_json(request)
    task = await repo.create_task(payload)
    return ok(task.to_json(), status_code=201)


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, repo: TaskRepository = Depends(get_task_repository)):
    """Get a task by ID"""
    task = await repo.get_task(task_id)
    return ok(task.to_json())


@router.put("/tasks/{task_id}")
async def update_task(task_id: str, request: Request, repo: TaskRepository = Depends(get_task_repository)):
    """
    Update a task.

    The body is either the full field set (title, description, dueDate,
    optional status) or a status-only payload such as {"status": "completed"}.
    """
    validate_task_id(task_id)
    payload = await read_json(request)
    task = await repo.update_task(task_id, payload)
    return ok(task.to_json())


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, repo: TaskRepository = Depends(get_task_repository)):
    """Delete a task"""
    await repo.delete_task(task_id)
    return ok(message="Task deleted successfully")

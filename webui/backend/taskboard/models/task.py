"""Task data models"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from ..errors import TaskError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# Human-readable labels used in validation messages
FIELD_LABELS = {
    "title": "Title",
    "description": "Description",
    "dueDate": "Due date",
    "status": "Status",
}

CONTENT_FIELDS = ("title", "description", "dueDate")


class TaskStatus(str, Enum):
    """Task lifecycle status"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


STATUS_VALUES = [s.value for s in TaskStatus]


def parse_due_date(value: Any) -> Any:
    """Turn an ISO-8601 date or date-time string into an aware UTC datetime.

    Date-only strings and naive date-times are read as UTC, so "2025-03-01"
    becomes 2025-03-01T00:00:00Z. Empty values pass through as None and are
    reported as missing by the model.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError("Due date must be a valid ISO-8601 date")
    else:
        raise ValueError("Due date must be a valid ISO-8601 date")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        # Offset pushed the instant outside years 1..9999
        raise ValueError("Due date must be a valid ISO-8601 date")


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Render a datetime as YYYY-MM-DDTHH:MM:SS.mmmZ"""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskFields(BaseModel):
    """Writable task fields shared by create and full update"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = TaskStatus.PENDING
    dueDate: datetime

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        """Missing or empty status falls back to pending"""
        if v is None or v == "":
            return TaskStatus.PENDING
        return v

    @field_validator("dueDate", mode="before")
    @classmethod
    def validate_due_date(cls, v):
        return parse_due_date(v)


class TaskCreate(TaskFields):
    """Task creation request"""
    pass


class FullUpdate(TaskFields):
    """Update replacing title, description, dueDate and status"""
    pass


class StatusUpdate(BaseModel):
    """Update touching only the status field"""
    model_config = ConfigDict(extra="ignore")

    status: TaskStatus


UpdateRequest = Union[FullUpdate, StatusUpdate]


class Task(BaseModel):
    """Task as returned to clients"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    dueDate: datetime
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_serializer("dueDate", "createdAt", "updatedAt")
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return format_datetime(value)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def _message_for(error: Dict[str, Any]) -> str:
    field = str(error["loc"][0]) if error.get("loc") else ""
    label = FIELD_LABELS.get(field, field)
    kind = error.get("type")
    ctx = error.get("ctx") or {}

    if field == "status" and kind == "enum":
        return f"`{error.get('input')}` is not a valid enum value for path `status`."
    if kind in ("missing", "string_too_short") or error.get("input") is None:
        return f"{label} is required"
    if kind == "string_too_long":
        return f"{label} cannot be more than {ctx.get('max_length')} characters"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return f"{label} is invalid"


def validation_messages(exc: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into one message per field"""
    return [_message_for(error) for error in exc.errors()]


def _require_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise TaskError.validation(["Request body must be a JSON object"])
    return payload


def _validate(model: Type[BaseModel], payload: Dict[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise TaskError.validation(validation_messages(e))


def validate_for_create(payload: Any) -> TaskCreate:
    """Validate a creation payload, collecting every field failure"""
    return _validate(TaskCreate, _require_object(payload))


def _present(payload: Dict[str, Any], field: str) -> bool:
    return payload.get(field) not in (None, "")


def classify_update(payload: Dict[str, Any]) -> Type[BaseModel]:
    """Pick the update variant from the fields present in the payload.

    Status alone selects a status-only update; anything else is a full update
    and must carry every content field.
    """
    if _present(payload, "status") and not any(_present(payload, f) for f in CONTENT_FIELDS):
        return StatusUpdate
    return FullUpdate


def validate_for_update(payload: Any) -> UpdateRequest:
    payload = _require_object(payload)
    return _validate(classify_update(payload), payload)


def to_document(request: Union[TaskCreate, UpdateRequest]) -> Dict[str, Any]:
    """Map a validated request to the fields written to storage"""
    if isinstance(request, StatusUpdate):
        return {"status": request.status.value}
    return {
        "title": request.title,
        "description": request.description,
        "status": request.status.value,
        "dueDate": request.dueDate,
    }


def from_document(doc: Dict[str, Any]) -> Task:
    """Build a Task from a stored document"""
    data = dict(doc)
    data["_id"] = str(data["_id"])
    return Task.model_validate(data)

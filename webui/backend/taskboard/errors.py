"""Error kinds shared by the repository and the API layer"""
from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Closed set of failures a task operation can produce"""
    INVALID_ID = "invalid_id"
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"


class TaskError(Exception):
    """Raised by the repository layer; mapped to a status code by the API layer"""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, fields: Optional[List[str]] = None):
        self.kind = kind
        self.fields = list(fields or [])
        if message is None:
            message = ", ".join(self.fields) if self.fields else kind.value
        self.message = message
        super().__init__(message)

    @classmethod
    def invalid_id(cls) -> "TaskError":
        return cls(ErrorKind.INVALID_ID, "Invalid task ID format")

    @classmethod
    def not_found(cls) -> "TaskError":
        return cls(ErrorKind.NOT_FOUND, "Task not found")

    @classmethod
    def validation(cls, fields: List[str]) -> "TaskError":
        return cls(ErrorKind.VALIDATION_FAILED, fields=fields)

    @classmethod
    def storage(cls, message: str) -> "TaskError":
        return cls(ErrorKind.STORAGE_ERROR, message)

    def __repr__(self) -> str:
        return f"TaskError(kind={self.kind.value!r}, message={self.message!r})"

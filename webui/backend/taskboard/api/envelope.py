"""Uniform {success, data|error|message} response envelope"""
import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import ErrorKind, TaskError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_ID: 400,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE_ERROR: 500,
}


def ok(data: Any = None, status_code: int = 200, message: str = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = data
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def fail(error: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    """Translate a TaskError into an error envelope"""
    status_code = STATUS_BY_KIND[exc.kind]
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({status_code}): {exc.message}")
    return fail(exc.message, status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and unsupported methods still answer with an envelope"""
    logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.detail}")
    return fail(str(exc.detail), exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [str(err.get("msg")) for err in exc.errors()]
    logger.warning(f"{request.method} {request.url.path} rejected (400): {messages}")
    return fail(", ".join(messages) or "Invalid request", 400)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return fail(str(exc) or "An unknown error occurred", 500)

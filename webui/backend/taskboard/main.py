"""FastAPI application entry point"""
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import tasks
from .api.envelope import (
    http_error_handler,
    request_validation_handler,
    task_error_handler,
    unhandled_error_handler,
)
from .db import close_db
from .errors import TaskError
from .models.task import DESCRIPTION_MAX_LENGTH, STATUS_VALUES, TITLE_MAX_LENGTH, TaskStatus

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting Taskboard API")
    # The Mongo client is opened lazily by the first request that needs it
    yield
    await close_db()
    logger.info("Shutting down Taskboard API")


# Create FastAPI app
app = FastAPI(
    title="Taskboard API",
    description="RESTful API for managing personal tasks",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TaskError, task_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Include routers: /tasks is the public path, /api/tasks the alias used by the client
app.include_router(tasks.router)
app.include_router(tasks.router, prefix="/api", include_in_schema=False)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "success": True,
        "message": "API is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": os.getenv("APP_ENV", "development")
    }


@app.get("/api/config")
async def get_config():
    """Get task field configuration for clients"""
    return {
        "success": True,
        "data": {
            "statuses": STATUS_VALUES,
            "default_status": TaskStatus.PENDING.value,
            "title_max_length": TITLE_MAX_LENGTH,
            "description_max_length": DESCRIPTION_MAX_LENGTH
        }
    }


def run():
    import uvicorn

    uvicorn.run(
        "taskboard.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("APP_ENV", "development") == "development",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    run()

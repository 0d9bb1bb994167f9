import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tasktracker.app.auth import require_credentials
from tasktracker.app.config import get_settings
from tasktracker.app.core.errors import ApiError
from tasktracker.app.core.logging_config import configure_logging
from tasktracker.app.db import init_db
from tasktracker.app.routers import tasklists, tasks, users

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title="Task List API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url=None,
    dependencies=[Depends(require_credentials)],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "%s %s -> %s",
        request.method,
        request.url.path,
        response.status_code,
        extra={"elapsed_ms": elapsed_ms},
    )
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_payload()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    payload = {"error": "Malformed request", "details": exc.errors()}
    return JSONResponse(status_code=400, content=jsonable_encoder(payload))


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    init_db()


app.include_router(users.router)
app.include_router(tasklists.router)
app.include_router(tasks.router)


@app.get("/")
def root() -> dict:
    return {
        "message": "Task List API",
        "version": API_VERSION,
        "endpoints": {
            "users": {
                "GET /api/users": "Get all users",
                "GET /api/users/:id": "Get a user by ID",
                "GET /api/users/search?name=...": "Search users by name",
                "POST /api/users": "Create a new user",
                "PUT /api/users/:id": "Update a user",
                "DELETE /api/users/:id": "Delete a user",
                "GET /api/users/:userId/tasks": "Get all tasks for a user",
                "POST /api/users/:userId/tasks": "Create a task for a user",
                "GET /api/users/:userId/tasklist": "Get the task list for a user",
            },
            "tasks": {
                "GET /api/tasks": "Get all tasks",
                "GET /api/tasks/:id": "Get a task by ID",
                "PUT /api/tasks/:id": "Update a task description",
                "PATCH /api/tasks/:id/finish": "Mark a task as finished",
                "PATCH /api/tasks/:id/unfinish": "Mark a task as unfinished",
                "DELETE /api/tasks/:id": "Delete a task",
            },
            "tasklists": {
                "GET /api/tasklists/:id": "Get a task list by ID",
            },
        },
    }


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""

    import uvicorn

    configure_logging()
    logger.info("Task List API listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

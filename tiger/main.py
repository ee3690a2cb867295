import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tiger.config import settings
from tiger.core.errors import NotFoundError, StorageError, ValidationError
import tiger.db.models  # noqa: F401  registers every model with Base

from tiger.api.auth.routes import router as auth_router
from tiger.api.tasks.routes import router as tasks_router
from tiger.api.subtasks.routes import router as subtasks_router
from tiger.api.appointments.routes import router as appointments_router
from tiger.api.meetings.routes import router as meetings_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tiger")

# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(tasks_router, prefix="/tasks", tags=["Tasks"])
app.include_router(subtasks_router, prefix="/tasks/{task_id}/subtasks", tags=["Subtasks"])
app.include_router(appointments_router, prefix="/appointments", tags=["Appointments"])
app.include_router(meetings_router, prefix="/meetings", tags=["Meetings"])


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Storage failure, nothing was saved"})


# Database errors raised outside a transaction() scope (lookups, refresh)
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Storage failure, nothing was saved"})


@app.get("/ping")
def ping():
    return {"message": "pong"}

import fcntl
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import AsyncSessionLocal, create_tables
from app.exceptions import AppError
from app.logging_config import setup_logging
from app.routers.admin import router as admin_router
from app.routers.auth import router as auth_router
from app.routers.categories import router as categories_router
from app.routers.tasks import router as tasks_router
from app.services.seed import ensure_admin, seed_default_categories

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


SEED_LOCK_FILE = "/tmp/task_api_seed.lock"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Gunicorn workers start together; the lock makes them create tables and
    # seed one at a time so only the first one inserts anything.
    with open(SEED_LOCK_FILE, "w") as lock_fd:
        fcntl.flock(lock_fd, fcntl.LOCK_EX)
        try:
            await create_tables()
            async with AsyncSessionLocal() as db:
                if settings.SEED_DEFAULT_CATEGORIES:
                    await seed_default_categories(db)
                if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
                    await ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME)
        finally:
            fcntl.flock(lock_fd, fcntl.LOCK_UN)

    logger.info("[PROCESS %s] Task API started", os.getpid())
    yield
    logger.info("Task API shutting down")


app = FastAPI(
    lifespan=lifespan,
    title="Task API",
    description="Tasks and categories with per-owner access control and an admin overview",
    version="1.0.0",
)

# Enable CORS for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex="https?://.*",  # Flexibly allow all origins during development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=exc.headers)


def _field_name(loc) -> str:
    # ("body", "email") -> "email"; ("query", "limit") -> "limit"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        msg = err["msg"].removeprefix("Value error, ")
        errors.setdefault(_field_name(err["loc"]), []).append(msg)
    return JSONResponse(
        status_code=422,
        content={"message": "The given data was invalid.", "errors": errors},
    )


# Global exception handler to ensure CORS headers on failure
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Credentials": "true"
        }
    )


app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(tasks_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {"message": "Task API running"}

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .error_handlers import register_error_handlers
from .observability import setup_logging
from .repositories import get_repository
from .routers import todos as todos_router
from .settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items plus mark-done, percentage and incoming queries.",
    },
]

_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(_settings.log_level, _settings.log_format)
    # Resolve the repository up front so the sqlite table exists before the first request
    get_repository()
    logger.info("Todo API started (backend=%s)", _settings.persistence_backend)
    yield
    logger.info("Todo API stopped")


app = FastAPI(
    title="Todo API",
    description="Backend API service for managing todos with pluggable storage backends.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


app.include_router(todos_router.router)


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the app with uvicorn on the configured HOST/PORT."""
    uvicorn.run(app, host=_settings.host, port=_settings.port)


if __name__ == "__main__":
    run()

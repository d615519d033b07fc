"""
AI Command Assistant - Backend Application

FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from command_assistant import __version__
from command_assistant.api import api_router
from command_assistant.core.config import get_config, get_log_path
from command_assistant.core.datetime_utils import now_iso
from command_assistant.core.logging import get_logger, setup_logging


# Record startup time globally
_startup_time = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Sets up logging on startup and logs shutdown.
    """
    global _startup_time
    _startup_time = now_iso()
    logger = setup_logging()
    logger.info("Starting AI Command Assistant...")
    logger.debug("Log level: %s, log file: %s", get_config().logging.level, get_log_path())

    # Database tables are created by scripts/init_db.py, not on startup.

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="AI Command Assistant",
    description="Natural-language to shell command assistant backed by configurable AI providers",
    version=__version__,
    lifespan=lifespan,
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger = get_logger()
    method = request.method
    path = request.url.path
    logger.debug("Request started: %s %s", method, path)
    response = await call_next(request)
    logger.debug("Request completed: %s %s -> %s", method, path, response.status_code)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "name": "AI Command Assistant",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with startup time."""
    return {
        "status": "healthy",
        "startup_time": _startup_time,
        "timestamp": now_iso(),
    }


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        "main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
    )

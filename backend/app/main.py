"""Todo API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Collection routes registered before item routes (/stats, /bulk/* first)
    - Global error handlers map TodoServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The TodoStore is created in the lifespan and lives on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Store is process-local: state lost on restart, one store per worker
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.core.todo_store import TodoStore
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.api.routes import health, todos, todo_item

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.todo_store = TodoStore(cache_size=settings.query_cache_size)
    logger.info("Todo API started")
    yield
    logger.info("Todo API shutting down")


app = FastAPI(
    title="Todo API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(todos.router)
app.include_router(todo_item.router)

register_error_handlers(app)

# Pre-built UI bundle, mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")

"""Main entrypoint and application factory for the Student Bank Dashboard API.

This module initializes the FastAPI application, configures logging, prepares the configured transaction store (optionally seeding it with sample data), maps ledger errors to HTTP responses, and exposes the Scalar API reference endpoint. It also includes the main entrypoint for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from scalar_fastapi import get_scalar_api_reference

from bankdash.api.dependencies import get_ledger_service
from bankdash.api.routes import router
from bankdash.core.errors import ValidationError
from bankdash.core.settings import get_settings
from bankdash.core.utils import ROOT_LOGGER_NAME, ensure_dir, get_logger, utcnow
from bankdash.fixtures.sample_data import generate_sample_transactions


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    settings = get_settings()
    log_path = Path(settings.log_file)
    ensure_dir(log_path.parent)
    logger = get_logger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())
    # Add file handler for persistent logs (not colorized)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    logger.propagate = False


setup_logging()
logger = get_logger("bankdash.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler: open the configured store and seed it with sample data when enabled."""
    _ = app  # Silence unused argument warning
    settings = get_settings()
    service = get_ledger_service()
    logger.info(f"Using '{settings.store_backend}' transaction store")
    if settings.seed_sample_data:
        sample = generate_sample_transactions(utcnow(), days=settings.sample_days, seed=settings.sample_seed)
        service.seed(sample)
    yield


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Student Bank Dashboard API",
    description="""
    The Student Bank Dashboard API records deposits and withdrawals and serves the derived views a dashboard renders.

    **Endpoints:**
    - `POST /transactions`: Record a transaction. Returns the transaction, new balance, and its notification.
    - `GET /transactions`, `GET /transactions/history`, `GET /transactions/export`: Browse or download the log.
    - `GET /balance`: Current balance with a replay reconciliation check.
    - `GET /analytics/*`: Balance series, category spending, monthly rollup, trend, rolling window, summary.
    - `GET|POST /notifications`, `DELETE /notifications/{{id}}`: Notifications.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.include_router(router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Report rejected ledger input as 422 with the offending field."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> JSONResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)

"""FastAPI application - Event Schema Service.

Serves read-only JSON views of the event schema catalog: classes, objects,
categories, the attribute dictionary, profiles and extensions.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from . import __version__
from .api import routes
from .api.models import HealthResponse
from .catalog.loader import SchemaLoadError, load_catalog
from .catalog.registry import SchemaCatalog
from .config import Config
from .views.composer import ViewComposer


logger = logging.getLogger(__name__)

# Environment variable naming the config file
CONFIG_ENV = "SCHEMA_SVC_CONFIG"

# Global composer instance (initialized in lifespan)
_composer: ViewComposer | None = None


def load_config() -> Config:
    """Load config from the file named by SCHEMA_SVC_CONFIG, or defaults."""
    path = os.environ.get(CONFIG_ENV)
    if not path:
        return Config()
    logger.info(f"Loading config from {path}")
    return Config.from_file(path)


def build_catalog(config: Config) -> SchemaCatalog:
    """Load the schema catalog named in the config; empty if none is configured."""
    schema_file = config.catalog.schema_file
    if not schema_file:
        logger.warning("No schema file configured, serving an empty catalog")
        return SchemaCatalog()
    return load_catalog(Path(schema_file))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    global _composer

    logger.info("Starting event schema service...")

    config = load_config()
    catalog = build_catalog(config)

    _composer = ViewComposer(catalog=catalog)
    routes.configure(_composer)

    logger.info(f"Event schema service started (schema {catalog.version})")

    yield

    logger.info("Event schema service stopped")


# Create FastAPI app
app = FastAPI(
    title="Event Schema Service",
    description="Read-only views of the event schema: classes, objects, categories and profiles.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(routes.router)


@app.exception_handler(SchemaLoadError)
async def schema_load_error_handler(request: Request, exc: SchemaLoadError):
    logger.error(f"Schema error while serving {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal error"},
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    if not _composer:
        raise HTTPException(status_code=503, detail="Service not initialized")

    return HealthResponse(
        status="healthy",
        version=_composer.catalog.version,
        catalog=_composer.catalog.count(),
    )


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "Event Schema Service",
        "version": __version__,
        "endpoints": {
            "/api/version": "Schema version",
            "/api/categories": "Categories, or /api/categories/{id} for one",
            "/api/classes": "Classes, or /api/classes/{id}?objects=1&profiles=... for one",
            "/api/objects": "Objects, or /api/objects/{id}?objects=1 for one",
            "/api/dictionary": "Attribute dictionary",
            "/api/profiles": "Profiles",
            "/api/extensions": "Extensions",
            "/export/classes": "All classes in full",
            "/export/objects": "All objects in full",
            "/export/schema": "Classes, objects, types and version in one document",
            "/sample/classes": "Sample event of /sample/classes/{id}, or /sample/base_event",
            "/sample/objects": "Sample data of /sample/objects/{id}",
            "/api/translate": "POST - Translate event data",
            "/api/validate": "POST - Validate event data",
            "/health": "Health check",
        },
    }


def run():
    """Run the service with uvicorn."""
    import uvicorn

    config = load_config()

    logging.basicConfig(
        level=config.logging.level,
        format=config.logging.format,
    )

    uvicorn.run(
        "schema_svc.main:app",
        host=config.server.host,
        port=config.server.port,
        workers=config.server.workers,
        reload=config.server.reload,
    )


if __name__ == "__main__":
    run()

"""FastAPI app entry: config, logging, registry, health, and error handling."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config.logging import configure_logging, get_logger
from app.config.settings import get_settings
from app.controllers.routes.chat import router as chat_router
from app.controllers.routes.embed import router as embed_router
from app.controllers.routes.models import router as models_router
from app.services.responses.registry import build_registry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and the read-only response registry. Nothing to release on shutdown."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    try:
        app.state.registry = build_registry(settings.embedding_dimension)
    except ValueError as e:
        logger.error("Failed to load response rules", extra={"error": str(e)})
        raise
    yield
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Mock OpenAI Service",
        description="Deterministic OpenAI-compatible chat, tool-calling and embeddings API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(models_router, prefix=settings.api_prefix)
    app.include_router(chat_router, prefix=settings.api_prefix)
    app.include_router(embed_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Liveness: service is up."""
        return {"status": "ok"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness: the response registry is loaded."""
        registry = getattr(request.app.state, "registry", None)
        if registry is None:
            return JSONResponse(content={"status": "degraded", "rules": 0}, status_code=503)
        return JSONResponse(content={"status": "ok", "rules": registry.rule_count}, status_code=200)

    @app.exception_handler(Exception)
    async def global_exception_handler(_request: Request, exc: Exception):
        """Centralized error handling: never leak stack traces or internals to the client."""
        logger.exception("Unhandled error", extra={"error": type(exc).__name__})
        return JSONResponse(
            content={"detail": "An internal error occurred."},
            status_code=500,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())

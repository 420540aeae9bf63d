"""FastAPI dependencies shared by the routes."""

from functools import lru_cache

from fastapi import Depends, Request

from app.config.settings import Settings, get_settings
from app.services.responses.registry import ResponseRegistry, build_registry


@lru_cache
def _standalone_registry(embedding_dimension: int) -> ResponseRegistry:
    """Registry for apps served without their lifespan (e.g. a TestClient used outside `with`)."""
    return build_registry(embedding_dimension)


def get_registry(request: Request, settings: Settings = Depends(get_settings)) -> ResponseRegistry:
    """Registry built at startup; app state is never written at request time."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        return _standalone_registry(settings.embedding_dimension)
    return registry

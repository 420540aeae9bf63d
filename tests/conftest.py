"""
Shared pytest fixtures for the mock OpenAI service.

Provides the bundled registry, small hand-built registries for ordering tests,
and a TestClient whose streaming delay is zero so HTTP tests stay fast.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config.responses.models import ResponsesConfig
from app.config.responses.static import load_responses_config
from app.config.settings import Settings, get_settings
from app.main import create_app
from app.services.responses.registry import ResponseRegistry

WEATHER_TOOL = {
    "type": "function",
    "function": {"name": "get_weather", "description": "Current weather", "parameters": {"type": "object"}},
}


@pytest.fixture
def registry() -> ResponseRegistry:
    """Registry built from the bundled rule table."""
    return ResponseRegistry.from_config(load_responses_config())


@pytest.fixture
def default_text(registry: ResponseRegistry) -> str:
    return registry.default_response()


@pytest.fixture
def small_registry() -> ResponseRegistry:
    """Narrow rule first, broad catch-all second, plus a tool rule."""
    config = ResponsesConfig.model_validate(
        {
            "default_response": "fallback",
            "rules": [
                {"name": "greeting", "pattern": "^hello", "response": "Hello world"},
                {"name": "spring_cve", "pattern": "spring.*cve", "response": "specific"},
                {"name": "catch_all_cve", "pattern": "cve", "response": "broad"},
                {"name": "weather", "pattern": "weather", "tool": "get_weather"},
            ],
        }
    )
    return ResponseRegistry.from_config(config)


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(stream_delay_ms=0)


@pytest.fixture
def client(fast_settings: Settings) -> Iterator[TestClient]:
    """TestClient running the app lifespan, with zero stream delay."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: fast_settings
    with TestClient(app) as c:
        yield c


@pytest.fixture
def weather_tool() -> dict:
    return WEATHER_TOOL

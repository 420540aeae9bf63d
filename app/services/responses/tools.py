"""Canned tool results for the simulated tool-calling flow."""

import json
from typing import Any, Callable

from app.utils.time import utc_now


def _weather() -> dict[str, Any]:
    return {
        "location": "San Francisco",
        "temperature": "18°C",
        "condition": "Partly cloudy",
        "humidity": "65%",
    }


def _current_time() -> dict[str, Any]:
    # Only non-deterministic payload in the service
    return {"datetime": utc_now().replace(tzinfo=None).isoformat(), "timezone": "UTC"}


def _create_ticket() -> dict[str, Any]:
    return {"ticket_id": "TSE-12345", "status": "CREATED", "message": "Support ticket created successfully"}


def _web_search() -> dict[str, Any]:
    return {
        "results": [
            {
                "title": "Spring Boot 3.4.1 Released",
                "url": "https://spring.io/blog/2025/01/spring-boot-3-4-1",
            },
            {
                "title": "Spring Framework 6.2 GA",
                "url": "https://spring.io/blog/2024/11/spring-framework-6-2",
            },
        ]
    }


TOOL_REGISTRY: dict[str, Callable[[], dict[str, Any]]] = {
    "get_weather": _weather,
    "get_current_time": _current_time,
    "create_ticket": _create_ticket,
    "web_search": _web_search,
}

UNKNOWN_TOOL: dict[str, Any] = {"error": "Unknown tool"}


def tool_result(tool_name: str, arguments: str | None = None) -> str:
    """
    Return the canned JSON result for a tool. Arguments are accepted for signature
    compatibility and ignored. Unknown tools get {"error": "Unknown tool"}.
    """
    fn = TOOL_REGISTRY.get(tool_name)
    payload = fn() if fn is not None else UNKNOWN_TOOL
    return json.dumps(payload, ensure_ascii=False)

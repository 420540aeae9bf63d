"""
Response registry: ordered (pattern, response) rules resolved first-match-wins.
Built once from the rule table and shared read-only for the process lifetime.
"""

import re
from dataclasses import dataclass
from typing import Union

from app.config.logging import get_logger
from app.config.responses.models import TOOL_CALL_PREFIX, ResponsesConfig
from app.config.responses.static import ResponseConfigError, load_responses_config
from app.services.embedder.deterministic import DEFAULT_DIMENSION, generate_embedding
from app.services.responses.tools import tool_result

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlainText:
    """Reply with literal text."""

    text: str

    def as_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class ToolCall:
    """Ask the client to call a tool instead of replying."""

    tool_name: str

    def as_text(self) -> str:
        return f"{TOOL_CALL_PREFIX}{self.tool_name}"


Response = Union[PlainText, ToolCall]


@dataclass(frozen=True)
class ResponsePattern:
    matcher: re.Pattern[str]
    response: Response
    name: str | None = None


def tool_name_of(response_text: str | None) -> str | None:
    """Strip the TOOL_CALL: marker from a response text; None when the text is not a tool call."""
    if response_text and response_text.startswith(TOOL_CALL_PREFIX):
        return response_text[len(TOOL_CALL_PREFIX) :]
    return None


class ResponseRegistry:
    """
    Resolves an utterance to a canned reply. Rules are scanned in declaration order and
    the first pattern found anywhere in the text wins; broad rules must be declared after
    narrow ones. Also owns the canned tool results and the deterministic embeddings.
    """

    def __init__(
        self,
        patterns: list[ResponsePattern],
        default_response: str,
        embedding_dimension: int = DEFAULT_DIMENSION,
    ):
        self._patterns: tuple[ResponsePattern, ...] = tuple(patterns)
        self._default = PlainText(default_response)
        self._embedding_dimension = embedding_dimension

    @classmethod
    def from_config(
        cls, config: ResponsesConfig, embedding_dimension: int = DEFAULT_DIMENSION
    ) -> "ResponseRegistry":
        """Compile every rule case-insensitively. Raises ResponseConfigError on a bad pattern."""
        patterns: list[ResponsePattern] = []
        for i, rule in enumerate(config.rules):
            try:
                matcher = re.compile(rule.pattern, re.IGNORECASE)
            except re.error as e:
                raise ResponseConfigError(f"Rule {rule.name or i!r} has an invalid pattern: {e}") from e
            response: Response = ToolCall(rule.tool) if rule.tool is not None else PlainText(rule.response or "")
            patterns.append(ResponsePattern(matcher=matcher, response=response, name=rule.name))
        return cls(patterns, config.default_response, embedding_dimension)

    @property
    def rule_count(self) -> int:
        return len(self._patterns)

    def find_response(self, prompt: str | None) -> Response:
        text = prompt or ""
        for pattern in self._patterns:
            if pattern.matcher.search(text):
                logger.debug("Rule matched", extra={"rule": pattern.name})
                return pattern.response
        return self._default

    def find_response_text(self, prompt: str | None) -> str:
        """Marker-text form of find_response: tool calls come back as TOOL_CALL:<name>."""
        return self.find_response(prompt).as_text()

    def is_tool_call(self, prompt: str | None) -> bool:
        return isinstance(self.find_response(prompt), ToolCall)

    def default_response(self) -> str:
        return self._default.text

    def tool_result(self, tool_name: str, arguments: str | None = None) -> str:
        return tool_result(tool_name, arguments)

    def embedding_of(self, text: str | None) -> list[float]:
        return generate_embedding(text or "", self._embedding_dimension)


def build_registry(embedding_dimension: int = DEFAULT_DIMENSION) -> ResponseRegistry:
    """Build the registry from the configured rule table."""
    config = load_responses_config()
    registry = ResponseRegistry.from_config(config, embedding_dimension)
    logger.info("Response registry loaded", extra={"rules": registry.rule_count})
    return registry

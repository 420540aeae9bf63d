"""Request/response schemas for POST /chat/completions (OpenAI wire shape)."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on", "y", "t"}


def _as_optional_str(v: Any) -> Any:
    """Scalars become their string form; None stays None."""
    if v is None or isinstance(v, str):
        return v
    return str(v)


def _as_bool(v: Any) -> bool:
    """Lenient flag parsing; anything unrecognised is False."""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v == 1
    if isinstance(v, str):
        return v.strip().lower() in _TRUTHY
    return False


class ChatMessage(BaseModel):
    """Inbound conversation message. Every field is optional; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    role: str | None = Field(default=None, description="user|assistant|tool|system")
    content: str | list[dict[str, Any]] | None = Field(
        default=None, description="Text, or a list of content parts with type=text"
    )
    tool_calls: list[dict[str, Any]] | None = Field(default=None)
    tool_call_id: str | None = Field(default=None)

    @field_validator("role", "tool_call_id", mode="before")
    @classmethod
    def _scalar_to_str(cls, v: Any) -> Any:
        return _as_optional_str(v)

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, v: Any) -> Any:
        # Bare strings in a part list are text parts; other non-dict parts are dropped
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, dict):
            return [v]
        if isinstance(v, list):
            return [
                {"type": "text", "text": p} if isinstance(p, str) else p
                for p in v
                if isinstance(p, (str, dict))
            ]
        return str(v)

    @field_validator("tool_calls", mode="before")
    @classmethod
    def _coerce_tool_calls(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return None
        return [c for c in v if isinstance(c, dict)]

    def text(self) -> str:
        """Plain text of the message; text parts are concatenated, other parts dropped."""
        if isinstance(self.content, str):
            return self.content
        if not self.content:
            return ""
        return "".join(
            str(part.get("text") or "") for part in self.content if part.get("type", "text") == "text"
        )


class ChatCompletionRequest(BaseModel):
    """POST /chat/completions request body. Missing or mistyped fields take defaults."""

    model_config = ConfigDict(extra="ignore")

    model: str | None = Field(default=None)
    messages: list[ChatMessage] = Field(default_factory=list)
    stream: bool = Field(default=False)
    tools: list[Any] | None = Field(default=None, description="Tool definitions; non-dict entries never match")
    tool_choice: Any = Field(default=None)

    @field_validator("model", mode="before")
    @classmethod
    def _model_to_str(cls, v: Any) -> Any:
        return _as_optional_str(v)

    @field_validator("messages", mode="before")
    @classmethod
    def _coerce_messages(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        return [m for m in v if isinstance(m, (dict, ChatMessage))]

    @field_validator("stream", mode="before")
    @classmethod
    def _coerce_stream(cls, v: Any) -> Any:
        return _as_bool(v)

    @field_validator("tools", mode="before")
    @classmethod
    def _coerce_tools(cls, v: Any) -> Any:
        return v if isinstance(v, list) else None


class FunctionCall(BaseModel):
    name: str
    arguments: str


class ToolCallOut(BaseModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str | None
    tool_calls: list[ToolCallOut] | None = None


class Choice(BaseModel):
    index: int
    message: AssistantMessage
    finish_reason: str


class Usage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatCompletionResponse(BaseModel):
    """Non-streaming reply. Serialized with exclude_unset so plain replies carry no tool_calls key."""

    id: str
    object: Literal["chat.completion"] = "chat.completion"
    created: int
    model: str
    choices: list[Choice]
    usage: Usage


class Delta(BaseModel):
    content: str


class ChunkChoice(BaseModel):
    index: int = 0
    delta: Delta
    finish_reason: str | None = None


class ChatCompletionChunk(BaseModel):
    """One streamed frame."""

    id: str
    object: Literal["chat.completion.chunk"] = "chat.completion.chunk"
    created: int
    model: str
    choices: list[ChunkChoice]

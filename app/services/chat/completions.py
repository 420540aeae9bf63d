"""
Chat completion resolution: pick the utterance, ask the registry, decide between a
tool call, a plain reply, or the degraded fallback. Builds the non-streaming payloads.
"""

from dataclasses import dataclass
from typing import Any

from app.config.logging import get_logger
from app.controllers.schema.chat import (
    AssistantMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    FunctionCall,
    ToolCallOut,
    Usage,
)
from app.services.responses.registry import PlainText, Response, ResponseRegistry, ToolCall
from app.utils.ids import generate_completion_id, generate_tool_call_id
from app.utils.time import epoch_seconds

logger = get_logger(__name__)

# Fixed usage figures reported by the mock
PROMPT_TOKENS = 50
TOOL_CALL_COMPLETION_TOKENS = 25
EMPTY_ARGUMENTS = "{}"


@dataclass(frozen=True)
class ChatReply:
    """Resolved reply. Only plain replies on the normal path may be streamed."""

    response: Response
    streamable: bool = True


def extract_user_message(messages: list[ChatMessage] | None) -> str:
    """
    Text of the latest user message, scanning backward. Without any user message,
    the last message regardless of role. Empty conversation gives "".
    """
    if not messages:
        return ""
    for msg in reversed(messages):
        if msg.role == "user":
            return msg.text()
    return messages[-1].text()


def find_tool(tools: list[Any] | None, tool_name: str) -> dict[str, Any] | None:
    """Return the tool definition whose function.name equals tool_name, or None."""
    for tool in tools or []:
        function = tool.get("function") if isinstance(tool, dict) else None
        if isinstance(function, dict) and function.get("name") == tool_name:
            return tool
    return None


def resolve_chat_reply(request: ChatCompletionRequest, registry: ResponseRegistry) -> ChatReply:
    user_message = extract_user_message(request.messages)
    logger.debug("User message extracted", extra={"user_message": user_message})

    response = registry.find_response(user_message)

    if request.tools and isinstance(response, ToolCall):
        if find_tool(request.tools, response.tool_name) is not None:
            return ChatReply(response=response, streamable=False)
        logger.info("Requested tool not declared; falling back", extra={"tool": response.tool_name})
        return ChatReply(response=PlainText(registry.find_response_text("")), streamable=False)

    if isinstance(response, ToolCall):
        # No tools declared: never leak the marker
        return ChatReply(response=PlainText(registry.default_response()))
    return ChatReply(response=response)


def build_completion_response(content: str, model_id: str) -> ChatCompletionResponse:
    completion_tokens = len(content) // 4
    return ChatCompletionResponse(
        id=generate_completion_id(),
        object="chat.completion",
        created=epoch_seconds(),
        model=model_id,
        choices=[
            Choice(
                index=0,
                message=AssistantMessage(role="assistant", content=content),
                finish_reason="stop",
            )
        ],
        usage=Usage(
            prompt_tokens=PROMPT_TOKENS,
            completion_tokens=completion_tokens,
            total_tokens=PROMPT_TOKENS + completion_tokens,
        ),
    )


def build_tool_call_response(
    tool_name: str, model_id: str, arguments: str = EMPTY_ARGUMENTS
) -> ChatCompletionResponse:
    return ChatCompletionResponse(
        id=generate_completion_id(),
        object="chat.completion",
        created=epoch_seconds(),
        model=model_id,
        choices=[
            Choice(
                index=0,
                message=AssistantMessage(
                    role="assistant",
                    content=None,
                    tool_calls=[
                        ToolCallOut(
                            id=generate_tool_call_id(),
                            type="function",
                            function=FunctionCall(name=tool_name, arguments=arguments),
                        )
                    ],
                ),
                finish_reason="tool_calls",
            )
        ],
        usage=Usage(
            prompt_tokens=PROMPT_TOKENS,
            completion_tokens=TOOL_CALL_COMPLETION_TOKENS,
            total_tokens=PROMPT_TOKENS + TOOL_CALL_COMPLETION_TOKENS,
        ),
    )


def build_reply_response(reply: ChatReply, model_id: str) -> ChatCompletionResponse:
    """Non-streaming payload for a resolved reply."""
    if isinstance(reply.response, ToolCall):
        return build_tool_call_response(reply.response.tool_name, model_id)
    return build_completion_response(reply.response.text, model_id)

"""POST /chat/completions: canned replies, simulated tool calls, and paced streaming."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from app.config.logging import get_logger
from app.config.settings import Settings, get_settings
from app.controllers.dependencies import get_registry
from app.controllers.schema.chat import ChatCompletionRequest, ChatCompletionResponse
from app.services.chat.completions import build_reply_response, resolve_chat_reply
from app.services.chat.streaming import stream_chat_chunks
from app.services.responses.registry import PlainText, ResponseRegistry

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/completions", response_model=ChatCompletionResponse, response_model_exclude_unset=True)
async def chat_completions(
    body: ChatCompletionRequest,
    request: Request,
    registry: ResponseRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """
    Tool calls are emitted only when the request declares the matching tool. Plain
    replies stream as text/event-stream when `stream` is true.
    """
    logger.info("Chat completion request", extra={"stream": body.stream, "messages": len(body.messages)})
    reply = resolve_chat_reply(body, registry)

    if body.stream and reply.streamable and isinstance(reply.response, PlainText):
        return StreamingResponse(
            stream_chat_chunks(
                reply.response.text,
                settings.model_id,
                settings.stream_delay_ms / 1000,
                is_disconnected=request.is_disconnected,
            ),
            media_type="text/event-stream",
        )
    return build_reply_response(reply, settings.model_id)

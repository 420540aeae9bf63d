"""
Simulated token streaming as Server-Sent Events. The producer sleeps before each
chunk, so chunks arrive paced and in order, with the [DONE] frame always last.
"""

import asyncio
import re
from collections.abc import AsyncIterator, Awaitable, Callable

from app.config.logging import get_logger
from app.controllers.schema.chat import ChatCompletionChunk, ChunkChoice, Delta
from app.utils.ids import generate_completion_id
from app.utils.time import epoch_seconds

logger = get_logger(__name__)

DONE_SENTINEL = "[DONE]"
_TOKEN_BOUNDARY = re.compile(r"(?<=\s)")


def split_stream_tokens(text: str) -> list[str]:
    """Split after every whitespace character, keeping it on the preceding token."""
    return [t for t in _TOKEN_BOUNDARY.split(text) if t]


def format_sse(data: str) -> str:
    return f"data: {data}\n\n"


def build_chunk(completion_id: str, token: str, model_id: str) -> ChatCompletionChunk:
    return ChatCompletionChunk(
        id=completion_id,
        created=epoch_seconds(),
        model=model_id,
        choices=[ChunkChoice(index=0, delta=Delta(content=token), finish_reason=None)],
    )


async def stream_chat_chunks(
    text: str,
    model_id: str,
    delay_seconds: float,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncIterator[str]:
    """
    Yield one SSE frame per token, then the [DONE] frame. Stops without further frames
    when `is_disconnected` reports the client gone; cancellation propagates from the sleep.
    """
    completion_id = generate_completion_id()
    tokens = split_stream_tokens(text)
    sent = 0
    try:
        for token in tokens:
            await asyncio.sleep(delay_seconds)
            if is_disconnected is not None and await is_disconnected():
                logger.info(
                    "Stream consumer disconnected",
                    extra={"completion_id": completion_id, "sent": sent, "total": len(tokens)},
                )
                return
            yield format_sse(build_chunk(completion_id, token, model_id).model_dump_json())
            sent += 1
        yield format_sse(DONE_SENTINEL)
    except asyncio.CancelledError:
        logger.info("Stream cancelled", extra={"completion_id": completion_id, "sent": sent})
        raise
    logger.debug("Stream complete", extra={"completion_id": completion_id, "chunks": sent})

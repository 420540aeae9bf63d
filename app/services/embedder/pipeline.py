"""Embedding listing: one deterministic vector per input, in input order."""

from app.config.logging import get_logger
from app.controllers.schema.embeddings import EmbeddingData, EmbeddingResponse, EmbeddingUsage
from app.services.responses.registry import ResponseRegistry

logger = get_logger(__name__)


def approximate_tokens(texts: list[str]) -> int:
    """Crude usage proxy: total characters // 4."""
    return sum(len(t) for t in texts) // 4


def run_embed_pipeline(texts: list[str], registry: ResponseRegistry, model_id: str) -> EmbeddingResponse:
    data = [
        EmbeddingData(object="embedding", index=i, embedding=registry.embedding_of(text))
        for i, text in enumerate(texts)
    ]
    tokens = approximate_tokens(texts)
    logger.debug("Embeddings generated", extra={"count": len(data), "tokens": tokens})
    return EmbeddingResponse(
        object="list",
        data=data,
        model=model_id,
        usage=EmbeddingUsage(prompt_tokens=tokens, total_tokens=tokens),
    )

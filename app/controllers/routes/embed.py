"""POST /embeddings: deterministic embedding vectors for each input."""

from fastapi import APIRouter, Depends

from app.config.logging import get_logger
from app.config.settings import Settings, get_settings
from app.controllers.dependencies import get_registry
from app.controllers.schema.embeddings import EmbeddingRequest, EmbeddingResponse
from app.services.embedder.pipeline import run_embed_pipeline
from app.services.responses.registry import ResponseRegistry

logger = get_logger(__name__)

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.post("", response_model=EmbeddingResponse)
async def create_embeddings(
    body: EmbeddingRequest,
    registry: ResponseRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
) -> EmbeddingResponse:
    """Same text always yields the same unit-length vector; usage is characters // 4."""
    logger.info("Embedding request", extra={"inputs": len(body.input)})
    return run_embed_pipeline(body.input, registry, settings.embedding_model_id)

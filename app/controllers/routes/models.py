"""GET /models: static model listing."""

from fastapi import APIRouter, Depends

from app.config.logging import get_logger
from app.config.settings import Settings, get_settings
from app.controllers.schema.models import ModelCard, ModelList
from app.utils.time import epoch_seconds

logger = get_logger(__name__)

router = APIRouter(prefix="/models", tags=["models"])


@router.get("", response_model=ModelList)
async def list_models(settings: Settings = Depends(get_settings)) -> ModelList:
    logger.info("Listing models")
    return ModelList(
        object="list",
        data=[
            ModelCard(
                id=settings.model_id,
                object="model",
                created=epoch_seconds(),
                owned_by=settings.owned_by,
            )
        ],
    )

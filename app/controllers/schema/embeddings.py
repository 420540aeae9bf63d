"""Request/response schemas for POST /embeddings (OpenAI wire shape)."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmbeddingRequest(BaseModel):
    """
    POST /embeddings request body. `input` may be one value or a list; null items become ""
    and other non-string items their string form.
    """

    model_config = ConfigDict(extra="ignore")

    model: str | None = Field(default=None)
    input: list[str] = Field(default_factory=list)

    @field_validator("model", mode="before")
    @classmethod
    def _model_to_str(cls, v: Any) -> Any:
        return v if v is None or isinstance(v, str) else str(v)

    @field_validator("input", mode="before")
    @classmethod
    def _coerce_input(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            v = [v]
        return ["" if item is None else item if isinstance(item, str) else str(item) for item in v]


class EmbeddingData(BaseModel):
    object: Literal["embedding"] = "embedding"
    index: int = Field(..., ge=0)
    embedding: list[float]


class EmbeddingUsage(BaseModel):
    prompt_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(..., ge=0)


class EmbeddingResponse(BaseModel):
    object: Literal["list"] = "list"
    data: list[EmbeddingData]
    model: str
    usage: EmbeddingUsage

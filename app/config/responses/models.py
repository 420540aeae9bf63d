"""Response rule configuration models. Read-only; no business logic."""

from pydantic import BaseModel, Field, model_validator

TOOL_CALL_PREFIX = "TOOL_CALL:"


class ResponseRuleConfig(BaseModel):
    """One (pattern, payload) rule. Exactly one of `response` or `tool` is set."""

    name: str | None = Field(default=None, description="Label used in logs")
    pattern: str = Field(..., min_length=1, description="Regular expression, matched case-insensitively")
    response: str | None = Field(default=None, description="Literal reply text, or a TOOL_CALL:<name> marker")
    tool: str | None = Field(default=None, description="Tool name to call instead of replying")

    @model_validator(mode="after")
    def _one_payload(self) -> "ResponseRuleConfig":
        if (self.response is None) == (self.tool is None):
            raise ValueError("rule must define exactly one of 'response' or 'tool'")
        if self.response is not None and self.response.startswith(TOOL_CALL_PREFIX):
            self.tool = self.response[len(TOOL_CALL_PREFIX) :]
            self.response = None
        if self.tool is not None and not self.tool:
            raise ValueError("tool name must not be empty")
        return self


class ResponsesConfig(BaseModel):
    """Ordered rule table plus the fallback reply."""

    default_response: str = Field(..., min_length=1)
    rules: list[ResponseRuleConfig] = Field(default_factory=list)

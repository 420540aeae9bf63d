"""Id generation for completions and tool calls. Unique per call, format not contract-bearing."""

import uuid


def generate_short_id(prefix: str) -> str:
    """Generate a unique id with prefix, e.g. chatcmpl-mock-<8 hex>."""
    return f"{prefix}{uuid.uuid4().hex[:8]}"


def generate_completion_id() -> str:
    return generate_short_id("chatcmpl-mock-")


def generate_tool_call_id() -> str:
    return generate_short_id("call_mock_")

"""Static response rule loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.config.responses.models import ResponsesConfig
from app.config.settings import get_settings

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: ResponsesConfig | None = None


class ResponseConfigError(ValueError):
    """Raised when a rule file cannot be read or does not validate."""


def _resolve_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    override = get_settings().responses_path
    return Path(override) if override else _config_path


def _load_raw_data(path: Path) -> dict[str, Any]:
    """Load raw JSON for the rule table."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResponseConfigError(f"Cannot read response rules from {str(path)!r}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResponseConfigError(f"Response rules in {str(path)!r} are not valid JSON: {e}") from e


def load_responses_config(path: str | Path | None = None) -> ResponsesConfig:
    """
    Load and validate the rule table. Without `path`, use settings.responses_path or the
    bundled static.json; that default is cached for the process lifetime.
    """
    global _cached
    if path is None and _cached is not None:
        return _cached
    resolved = _resolve_path(path)
    data = _load_raw_data(resolved)
    try:
        config = ResponsesConfig.model_validate(data)
    except ValidationError as e:
        raise ResponseConfigError(f"Invalid response rules in {str(resolved)!r}: {e}") from e
    if path is None:
        _cached = config
    return config

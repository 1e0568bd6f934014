"""URL, query string and JSON parameter helpers shared by all operations."""

import json
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from .errors import ValidationError

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"

TOOLS_EXAMPLE = '["tool1", "tool2"] or ["^(list|get|search|track|describe|run_*)_.*"]'


def encode_uri_component(value: str) -> str:
    """Percent-encode a single path segment or query value."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def normalize_base_url(base_url: str) -> str:
    """
    Strip one trailing slash and a trailing /v1 from a base URL.

    Routes are always appended with their /v1 prefix, so a base URL
    configured as "https://api.getport.io/v1/" and one configured as
    "https://api.getport.io" end up identical.
    """
    normalized = base_url.strip()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    if normalized.endswith("/v1"):
        normalized = normalized[:-3]
    return normalized


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Serialize optional query parameters, preserving their order.

    True booleans become ``key=true``; False, None and empty strings
    are left out. Returns "" when nothing qualifies.
    """
    parts = []
    for key, value in params.items():
        if isinstance(value, bool):
            if value:
                parts.append(f"{key}=true")
        elif value:
            parts.append(f"{key}={encode_uri_component(str(value))}")
    return f"?{'&'.join(parts)}" if parts else ""


def parse_json_parameter(value: Any) -> Optional[Dict[str, Any]]:
    """
    Leniently parse an optional JSON object parameter.

    Returns None for empty input, "{}", invalid JSON, non-objects and
    empty objects. Never raises.
    """
    if isinstance(value, dict):
        return value or None
    if not isinstance(value, str) or not value.strip() or value == "{}":
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return None
    if isinstance(parsed, dict) and parsed:
        return parsed
    return None


def parse_tools_parameter(value: Any) -> List[Any]:
    """
    Strictly parse the Tools parameter into a list.

    Raises ValidationError when the value is not valid JSON or does not
    decode to an array.
    """
    if isinstance(value, list):
        return value

    if not isinstance(value, str):
        if value is None:
            raise ValidationError(
                "Invalid JSON format for Tools field",
                f"The Tools field must be a valid JSON array. Example: {TOOLS_EXAMPLE}",
            )
        raise ValidationError(
            "Tools must be a valid JSON array",
            f"The Tools field must contain a JSON array of tool names. Example: {TOOLS_EXAMPLE}",
        )

    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValidationError(
            "Invalid JSON format for Tools field",
            f"The Tools field must be a valid JSON array. Example: {TOOLS_EXAMPLE}",
        ) from e

    if not isinstance(parsed, list):
        raise ValidationError(
            "Tools must be a valid JSON array",
            f"The Tools field must contain a JSON array of tool names. Example: {TOOLS_EXAMPLE}",
        )
    return parsed

"""Centralized JSON serialization utilities.

Pre-created partial functions for common JSON serialization patterns.
"""

from __future__ import annotations

import json

from collections.abc import Callable
from functools import partial
from typing import Any

from oracle_mcp.core.constants import JSON_PREVIEW_CHARS

# Compact JSON serialization (no spaces) with fallback to str for non-serializable types.
# Example: json_compact({"key": "value"}) -> '{"key":"value"}'
json_compact: Callable[..., str] = partial(json.dumps, separators=(",", ":"), default=str, ensure_ascii=False)


def summarize_json(value: Any, limit: int = JSON_PREVIEW_CHARS) -> str:
    """Serialize a payload for an error message, bounded to ``limit`` characters.

    Args:
        value: Any JSON-like payload
        limit: Characters of the serialized form to keep

    Returns:
        The compact JSON text, or its first ``limit`` characters followed by
        ``...[truncated N chars]`` where N is the number of characters dropped

    Example:
        >>> summarize_json({"status": "failed"})
        '{"status":"failed"}'
    """
    json_str = json_compact(value)
    if len(json_str) <= limit:
        return json_str
    return f"{json_str[:limit]}...[truncated {len(json_str) - limit} chars]"

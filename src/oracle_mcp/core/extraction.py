"""
Answer text extraction from Responses API payloads.

Payloads come in several shapes. Each shape is handled by one named strategy,
a pure function from payload to optional text. Strategies are tried in
EXTRACTION_STRATEGIES order and the first non-empty result wins. Support for a
new shape is added by appending a strategy.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

TEXT_SEPARATOR = "\n\n"


@dataclass(frozen=True, slots=True)
class ExtractionStrategy:
    """A named way of finding answer text in a payload."""

    name: str
    extract: Callable[[dict[str, Any]], str | None]


def append_text_segment(buffer: list[str], text: str) -> None:
    """Add ``text`` to ``buffer`` unless it is blank."""
    if text.strip():
        buffer.append(text)


def collect_text_from_contents(contents: Iterable[Any], buffer: list[str]) -> None:
    """Collect every ``text`` field of a content list, descending into nested ``content`` lists."""
    for entry in contents:
        if not isinstance(entry, dict):
            continue
        text = entry.get("text")
        if isinstance(text, str):
            append_text_segment(buffer, text)
        nested = entry.get("content")
        if isinstance(nested, list):
            collect_text_from_contents(nested, buffer)


def _joined(buffer: list[str]) -> str | None:
    return TEXT_SEPARATOR.join(buffer) if buffer else None


def _from_output_text(payload: dict[str, Any]) -> str | None:
    text = payload.get("output_text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


def _from_output_text_list(payload: dict[str, Any]) -> str | None:
    chunks = payload.get("output_text")
    if not isinstance(chunks, list):
        return None
    buffer: list[str] = []
    for chunk in chunks:
        if isinstance(chunk, str):
            append_text_segment(buffer, chunk)
    return _joined(buffer)


def _from_output_items(payload: dict[str, Any]) -> str | None:
    items = payload.get("output")
    if not isinstance(items, list):
        return None
    buffer: list[str] = []
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("content"), list):
            collect_text_from_contents(item["content"], buffer)
    return _joined(buffer)


def _from_content(payload: dict[str, Any]) -> str | None:
    content = payload.get("content")
    if not isinstance(content, list):
        return None
    buffer: list[str] = []
    collect_text_from_contents(content, buffer)
    return _joined(buffer)


EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("output_text", _from_output_text),
    ExtractionStrategy("output_text_list", _from_output_text_list),
    ExtractionStrategy("output_items", _from_output_items),
    ExtractionStrategy("content", _from_content),
)


def extract_output_text(
    payload: Any,
    strategies: Iterable[ExtractionStrategy] = EXTRACTION_STRATEGIES,
) -> str | None:
    """Return the answer text of a terminal payload, or None when it holds no text.

    None is not an error by itself; the caller decides what a missing answer means.
    """
    if not isinstance(payload, dict):
        return None
    for strategy in strategies:
        text = strategy.extract(payload)
        if text:
            return text
    return None


def incomplete_reason(payload: Any) -> str | None:
    """``incomplete_details.reason`` of a payload, if present."""
    if not isinstance(payload, dict):
        return None
    details = payload.get("incomplete_details")
    if isinstance(details, dict) and isinstance(details.get("reason"), str):
        return details["reason"]
    return None


def error_message(payload: Any) -> str | None:
    """``error.message`` of a payload, if present."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None

"""
Responses API transport.

Thin async wrapper around AsyncOpenAI that exchanges raw JSON payloads. The
raw body is kept (instead of the SDK's typed Response) because answer text
may live in several shapes that extraction needs to see as-is. SDK
exceptions are translated into the Oracle error taxonomy here and nowhere else.
"""

from __future__ import annotations

import json

from typing import Any, Protocol

import openai

from openai import AsyncOpenAI

from oracle_mcp.models.error_models import ProtocolError, TransportError


class ResponsesBackend(Protocol):
    """What the orchestration needs from the remote service."""

    async def create(self, body: dict[str, Any]) -> Any:
        """Submit a generation job and return the parsed job payload."""

    async def retrieve(self, job_id: str) -> Any:
        """Fetch the current payload of a job."""

    async def aclose(self) -> None:
        """Release network resources."""


def _parse_json(text: str, context: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"{context}: {e}") from e


class ResponsesTransport:
    """ResponsesBackend over a shared AsyncOpenAI client.

    The client is created once at startup and used concurrently by every
    call; it holds no per-call state.
    """

    def __init__(self, client: AsyncOpenAI):
        self._client = client

    async def create(self, body: dict[str, Any]) -> Any:
        try:
            raw = await self._client.responses.with_raw_response.create(**body)
        except openai.APIStatusError as e:
            text = e.response.text
            raise TransportError(
                f"OpenAI API returned non-success status {e.status_code}: {text}",
                status_code=e.status_code,
                body=text,
            ) from e
        except openai.APIError as e:
            raise TransportError(f"Failed to call OpenAI API: {e}") from e

        return _parse_json(raw.text, "Failed to parse OpenAI response")

    async def retrieve(self, job_id: str) -> Any:
        try:
            raw = await self._client.responses.with_raw_response.retrieve(job_id)
        except openai.APIStatusError as e:
            text = e.response.text
            raise TransportError(
                f"Failed to poll OpenAI response: status {e.status_code}: {text}",
                status_code=e.status_code,
                body=text,
            ) from e
        except openai.APIError as e:
            raise TransportError(f"Failed to poll OpenAI response: {e}") from e

        return _parse_json(raw.text, "Failed to parse OpenAI poll response")

    async def aclose(self) -> None:
        await self._client.close()

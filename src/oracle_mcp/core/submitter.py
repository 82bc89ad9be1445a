"""Submission of generation jobs to the Responses API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from oracle_mcp.core.constants import DEFAULT_CONFIG, OracleConfig
from oracle_mcp.models.error_models import ProtocolError
from oracle_mcp.utils.json_utils import summarize_json

if TYPE_CHECKING:
    from oracle_mcp.integrations.responses_transport import ResponsesBackend


@dataclass(slots=True)
class SubmittedJob:
    """A freshly created job: its id, first status and full payload."""

    job_id: str
    status: str
    payload: dict[str, Any]


def response_status(payload: Any) -> str | None:
    if isinstance(payload, dict) and isinstance(payload.get("status"), str):
        return payload["status"]
    return None


class RequestSubmitter:
    """Builds the request body and submits one generation job."""

    def __init__(self, backend: ResponsesBackend, config: OracleConfig = DEFAULT_CONFIG):
        self.backend = backend
        self.config = config

    def build_body(self, prompt: str, output_budget: int) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "input": prompt,
            "instructions": self.config.instructions,
            "reasoning": {"effort": self.config.reasoning_effort},
            "max_output_tokens": output_budget,
        }

    async def submit(self, prompt: str, output_budget: int) -> SubmittedJob:
        """Submit ``prompt`` with ``output_budget`` as max_output_tokens.

        Raises:
            TransportError: The request could not be sent or was rejected
            ProtocolError: The body is not a JSON object with an ``id``
        """
        payload = await self.backend.create(self.build_body(prompt, output_budget))

        job_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(job_id, str) or not job_id:
            raise ProtocolError(
                f"OpenAI response missing an id. Raw payload: {summarize_json(payload, self.config.preview_chars)}",
                payload=payload,
            )

        return SubmittedJob(job_id=job_id, status=response_status(payload) or "unknown", payload=payload)

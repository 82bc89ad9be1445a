"""
Polling of generation jobs until they reach a terminal status.

The wait between polls is an ``await`` on an injectable sleep (asyncio.sleep
by default), so a job being polled never blocks other calls sharing the event
loop and the wait is cancellable.
"""

from __future__ import annotations

import asyncio

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, NoReturn

from oracle_mcp.core.constants import DEFAULT_CONFIG, OracleConfig
from oracle_mcp.core.extraction import error_message
from oracle_mcp.core.submitter import response_status
from oracle_mcp.models.error_models import PollTimeout, TerminalFailure, UnexpectedStatus
from oracle_mcp.utils.json_utils import summarize_json
from oracle_mcp.utils.logger import logger

if TYPE_CHECKING:
    from oracle_mcp.integrations.responses_transport import ResponsesBackend

Sleep = Callable[[float], Awaitable[Any]]


class JobStatus(str, Enum):
    """Statuses a Responses API job can report."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelling"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    FAILED = "failed"
    REQUIRES_ACTION = "requires_action"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str | None) -> JobStatus | None:
        """Known status for ``value``, or None when it is missing or unexpected."""
        try:
            return cls(value)
        except ValueError:
            return None


#: Statuses that mean "still running, poll again".
PENDING_STATUSES = frozenset({JobStatus.QUEUED, JobStatus.IN_PROGRESS, JobStatus.CANCELLING})

#: Terminal statuses that carry a result worth extracting.
SETTLED_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.INCOMPLETE})


def next_poll_delay(
    current_ms: float,
    start_ms: float = DEFAULT_CONFIG.poll_start_delay_ms,
    factor: float = DEFAULT_CONFIG.poll_backoff_factor,
    cap_ms: float = DEFAULT_CONFIG.poll_max_delay_ms,
) -> float:
    """Delay after ``current_ms``: start at ``start_ms``, grow by ``factor``, never exceed ``cap_ms``."""
    if current_ms <= 0:
        return min(start_ms, cap_ms)
    return min(current_ms * factor, cap_ms)


@dataclass(slots=True)
class BackoffState:
    """Delay before the next poll and time already spent waiting, in milliseconds."""

    delay_ms: float
    elapsed_ms: float = 0.0


class PollingOrchestrator:
    """Re-fetches a job with growing delays until it settles or the deadline passes."""

    def __init__(
        self,
        backend: ResponsesBackend,
        config: OracleConfig = DEFAULT_CONFIG,
        sleep: Sleep = asyncio.sleep,
    ):
        self.backend = backend
        self.config = config
        self._sleep = sleep

    def _preview(self, payload: Any) -> str:
        return summarize_json(payload, self.config.preview_chars)

    def _advance(self, backoff: BackoffState, waited_ms: float) -> BackoffState:
        return BackoffState(
            delay_ms=next_poll_delay(
                backoff.delay_ms,
                start_ms=self.config.poll_start_delay_ms,
                factor=self.config.poll_backoff_factor,
                cap_ms=self.config.poll_max_delay_ms,
            ),
            elapsed_ms=backoff.elapsed_ms + waited_ms,
        )

    async def wait(self, job_id: str, payload: Any) -> dict[str, Any]:
        """Poll ``job_id`` until it is completed or incomplete and return that payload.

        Raises:
            PollTimeout: Still pending once the cumulative wait reached the deadline
            TerminalFailure: The job failed, was cancelled or requires action
            UnexpectedStatus: The job reported an unknown status
            TransportError, ProtocolError: A poll request failed
        """
        backoff = BackoffState(delay_ms=self.config.poll_start_delay_ms)

        while True:
            raw_status = response_status(payload)
            status = JobStatus.parse(raw_status)

            if status in SETTLED_STATUSES:
                return payload

            if status in PENDING_STATUSES:
                if backoff.elapsed_ms >= self.config.poll_timeout_ms:
                    raise PollTimeout(
                        f"Timed out waiting for OpenAI response {job_id} to finish. "
                        f"Last payload: {self._preview(payload)}",
                        payload=payload,
                    )

                # The last wait is shortened so the total never overshoots the deadline.
                waited_ms = min(backoff.delay_ms, self.config.poll_timeout_ms - backoff.elapsed_ms)
                await self._sleep(waited_ms / 1000)
                payload = await self.backend.retrieve(job_id)
                backoff = self._advance(backoff, waited_ms)
                logger.debug(
                    f"Polled {job_id}: status={response_status(payload)} waited={backoff.elapsed_ms:.0f}ms",
                    job_id=job_id,
                )
                continue

            self._raise_for_status(status, raw_status or "unknown", payload)

    def _raise_for_status(self, status: JobStatus | None, raw_status: str, payload: Any) -> NoReturn:
        preview = self._preview(payload)

        if status is JobStatus.FAILED:
            message = error_message(payload) or "OpenAI response marked as failed"
            raise TerminalFailure(f"{message}. Raw payload: {preview}", status=raw_status, payload=payload)

        if status is JobStatus.REQUIRES_ACTION:
            raise TerminalFailure(
                "OpenAI response requires additional action that Oracle cannot perform "
                f"(status '{raw_status}'). Raw payload: {preview}",
                status=raw_status,
                payload=payload,
            )

        if status is JobStatus.CANCELLED:
            raise TerminalFailure(
                f"OpenAI response was cancelled before completion (status '{raw_status}'). Raw payload: {preview}",
                status=raw_status,
                payload=payload,
            )

        raise UnexpectedStatus(
            f"OpenAI response entered unexpected status '{raw_status}'. Raw payload: {preview}",
            status=raw_status,
            payload=payload,
        )

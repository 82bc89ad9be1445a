"""
Attempt loop for one logical call.

A job that stops "incomplete" because it ran out of output tokens, before
producing any text, is resubmitted with a doubled budget. The budget and the
attempt count travel as an immutable AttemptState.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from oracle_mcp.core.constants import DEFAULT_CONFIG, RETRYABLE_INCOMPLETE_REASON, OracleConfig
from oracle_mcp.core.extraction import extract_output_text, incomplete_reason
from oracle_mcp.core.polling import JobStatus, PollingOrchestrator
from oracle_mcp.core.submitter import RequestSubmitter, response_status
from oracle_mcp.models.error_models import IncompleteNoText, NoTextExtracted
from oracle_mcp.utils.json_utils import summarize_json
from oracle_mcp.utils.logger import logger

REASON_UNAVAILABLE = "reason unavailable"


def truncation_warning(reason: str | None) -> str:
    """Note appended to an answer whose job ended incomplete."""
    return (
        f"\n\n[oracle warning] OpenAI stopped early ({reason or REASON_UNAVAILABLE}). "
        "The answer may be truncated."
    )


@dataclass(frozen=True, slots=True)
class AttemptState:
    """Output budget and 1-based attempt number of the current submission."""

    output_budget: int
    attempt: int = 1

    def escalated(self, ceiling: int) -> AttemptState:
        return replace(self, output_budget=min(self.output_budget * 2, ceiling), attempt=self.attempt + 1)


class RetryPolicy:
    """Submits, polls and extracts, escalating the budget on token exhaustion."""

    def __init__(
        self,
        submitter: RequestSubmitter,
        poller: PollingOrchestrator,
        config: OracleConfig = DEFAULT_CONFIG,
    ):
        self.submitter = submitter
        self.poller = poller
        self.config = config

    def initial_state(self) -> AttemptState:
        return AttemptState(output_budget=self.config.initial_output_budget)

    def can_escalate(self, state: AttemptState, reason: str | None) -> bool:
        return (
            reason == RETRYABLE_INCOMPLETE_REASON
            and state.output_budget < self.config.max_output_budget
            and state.attempt < self.config.max_attempts
        )

    async def run(self, prompt: str) -> str:
        """Drive attempts for ``prompt`` until an answer or a final error.

        Raises:
            IncompleteNoText: Ended incomplete without text, no retry left
            NoTextExtracted: Ended completed without text
            plus anything raised by submission or polling
        """
        state = self.initial_state()

        while True:
            job = await self.submitter.submit(prompt, state.output_budget)
            logger.info(
                f"Submitted OpenAI response {job.job_id} "
                f"(attempt {state.attempt}, max_output_tokens={state.output_budget}, status={job.status})",
                job_id=job.job_id,
                attempt=state.attempt,
            )

            payload = await self.poller.wait(job.job_id, job.payload)
            status = response_status(payload)
            reason = incomplete_reason(payload)
            answer = extract_output_text(payload)

            if answer is not None:
                if status == JobStatus.INCOMPLETE.value:
                    logger.warning(f"OpenAI response {job.job_id} incomplete ({reason}), returning partial answer")
                    return answer + truncation_warning(reason)
                return answer

            if status == JobStatus.INCOMPLETE.value and self.can_escalate(state, reason):
                state = state.escalated(self.config.max_output_budget)
                logger.warning(
                    f"OpenAI response {job.job_id} ran out of output tokens before any text; "
                    f"retrying with max_output_tokens={state.output_budget} (attempt {state.attempt})",
                    job_id=job.job_id,
                )
                continue

            preview = summarize_json(payload, self.config.preview_chars)
            if status == JobStatus.INCOMPLETE.value:
                raise IncompleteNoText(
                    f"OpenAI response ended incomplete ({reason or REASON_UNAVAILABLE}) "
                    f"before returning any text. Raw payload: {preview}",
                    reason=reason or REASON_UNAVAILABLE,
                    payload=payload,
                )
            raise NoTextExtracted(
                f"OpenAI response did not contain any text output. Raw payload: {preview}",
                payload=payload,
            )

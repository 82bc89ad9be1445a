"""
Oracle service: one logical call from request to answer.

Pipeline: test-mode short circuit → file contexts → prompt → credentials
check → RetryPolicy (submit, poll, extract, escalate). ``call`` raises
OracleError subclasses; ``solve`` is the boundary that turns them into a
ToolResponse so hosts never see an exception.
"""

from __future__ import annotations

import asyncio
import time

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from oracle_mcp.core.constants import DEFAULT_CONFIG, ERROR_MISSING_API_KEY, ERROR_PREFIX, OracleConfig
from oracle_mcp.core.polling import PollingOrchestrator, Sleep
from oracle_mcp.core.prompts import build_prompt
from oracle_mcp.core.retry import RetryPolicy
from oracle_mcp.core.submitter import RequestSubmitter
from oracle_mcp.models.api_models import FileContext, OracleRequest, ToolResponse
from oracle_mcp.models.error_models import ConfigurationError, OracleError
from oracle_mcp.utils.file_utils import read_file_contexts
from oracle_mcp.utils.logger import logger

if TYPE_CHECKING:
    from oracle_mcp.integrations.responses_transport import ResponsesBackend

FileReader = Callable[[Sequence[str]], Awaitable[list[FileContext]]]

TEST_MODE_BANNER = "[oracle test mode] No call was made to OpenAI because ORACLE_TEST_MODE is set.\n\n"


def render_test_mode_answer(request: OracleRequest) -> str:
    """Canned answer echoing the request, used when test mode is on."""
    lines = [TEST_MODE_BANNER, "Problem description:\n", request.problem, "\n\n"]

    extra = request.extra_context
    if extra is not None and extra.strip():
        lines.extend(["Extra context:\n", extra, "\n\n"])
    else:
        lines.append("Extra context: (not provided)\n\n")

    lines.append("Files provided:\n")
    if request.files:
        lines.extend(f"- {path}\n" for path in request.files)
    else:
        lines.append("(none)\n")

    return "".join(lines)


class OracleService:
    """Entry point shared by the MCP tool and the CLI.

    One instance serves many concurrent calls. It holds only the injected,
    read-only collaborators; every call keeps its own attempt and backoff state.

    Args:
        backend: Responses API transport, or None when no API key is configured
        config: Fixed backend configuration
        test_mode: Answer with a canned echo instead of calling OpenAI
        file_reader: Turns request paths into FileContext entries
        sleep: Wait used between polls
    """

    def __init__(
        self,
        backend: ResponsesBackend | None,
        config: OracleConfig = DEFAULT_CONFIG,
        *,
        test_mode: bool = False,
        file_reader: FileReader = read_file_contexts,
        sleep: Sleep = asyncio.sleep,
    ):
        self.backend = backend
        self.config = config
        self.test_mode = test_mode
        self._file_reader = file_reader
        self._retry: RetryPolicy | None = None
        if backend is not None:
            self._retry = RetryPolicy(
                RequestSubmitter(backend, config),
                PollingOrchestrator(backend, config, sleep=sleep),
                config,
            )

    async def build_prompt(self, request: OracleRequest) -> str:
        contexts = await self._file_reader(request.files) if request.files else []
        return build_prompt(
            request.problem,
            request.extra_context,
            contexts,
            max_chars=self.config.max_prompt_chars,
        )

    async def call(self, request: OracleRequest) -> str:
        """Answer ``request`` or raise an OracleError."""
        if self.test_mode:
            logger.info("Test mode enabled, skipping OpenAI call")
            return render_test_mode_answer(request)

        prompt = await self.build_prompt(request)

        if self._retry is None:
            raise ConfigurationError(ERROR_MISSING_API_KEY)

        return await self._retry.run(prompt)

    async def solve(self, request: OracleRequest) -> ToolResponse:
        """Answer ``request`` as a ToolResponse; OracleError never escapes."""
        started = time.perf_counter()
        try:
            answer = await self.call(request)
        except OracleError as e:
            logger.error(f"Oracle call failed [{e.code.value}]: {e.message}", error_code=e.code.value)
            return ToolResponse(success=False, error=f"{ERROR_PREFIX}: {e.message}", code=e.code)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Oracle call finished in {duration_ms:.0f}ms ({len(answer)} chars)", ms=int(duration_ms))
        return ToolResponse(success=True, answer=answer)

    async def aclose(self) -> None:
        if self.backend is not None:
            await self.backend.aclose()

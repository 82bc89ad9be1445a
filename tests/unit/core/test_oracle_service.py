"""Tests for OracleService, the shared entry point of the tool and the CLI."""

from __future__ import annotations

import asyncio

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from oracle_mcp.core.oracle import TEST_MODE_BANNER, OracleService, render_test_mode_answer
from oracle_mcp.models.api_models import FileContext, OracleRequest
from oracle_mcp.models.error_models import ConfigurationError, ErrorCode, TerminalFailure


class StubFileReader:
    """Records requested paths and returns fixed contents."""

    def __init__(self) -> None:
        self.requested: list[list[str]] = []

    async def __call__(self, paths: Sequence[str]) -> list[FileContext]:
        self.requested.append(list(paths))
        return [FileContext(path=p, content=f"contents of {p}") for p in paths]


class TestTestMode:
    """Tests for the canned test-mode answer."""

    def test_render_minimal_request(self) -> None:
        answer = render_test_mode_answer(OracleRequest(problem="fix bug"))

        assert answer == (
            TEST_MODE_BANNER
            + "Problem description:\nfix bug\n\n"
            + "Extra context: (not provided)\n\n"
            + "Files provided:\n(none)\n"
        )

    def test_render_full_request(self) -> None:
        request = OracleRequest(problem="fix bug", files=["a.py", "b.py"], extra_context="python 3.12")

        answer = render_test_mode_answer(request)

        assert "Extra context:\npython 3.12\n\n" in answer
        assert answer.endswith("Files provided:\n- a.py\n- b.py\n")

    @pytest.mark.asyncio
    async def test_no_backend_needed(self) -> None:
        """Test mode answers without credentials and without reading files."""
        reader = StubFileReader()
        service = OracleService(None, test_mode=True, file_reader=reader)

        response = await service.solve(OracleRequest(problem="fix bug", files=["missing.py"]))

        assert response.success is True
        assert response.answer is not None
        assert "fix bug" in response.answer
        assert "- missing.py" in response.answer
        assert reader.requested == []

    @pytest.mark.asyncio
    async def test_backend_untouched(self, make_backend: Callable[..., Any]) -> None:
        backend = make_backend(created=[])
        service = OracleService(backend, test_mode=True)

        await service.call(OracleRequest(problem="fix bug"))

        assert backend.create_calls == []


class TestCall:
    """Tests for OracleService.call and solve."""

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        service = OracleService(None, file_reader=StubFileReader())

        with pytest.raises(ConfigurationError) as exc_info:
            await service.call(OracleRequest(problem="fix bug"))

        assert exc_info.value.message == "Environment variable OPENAI_API_KEY is not set"

    @pytest.mark.asyncio
    async def test_solve_wraps_errors(self) -> None:
        service = OracleService(None)

        response = await service.solve(OracleRequest(problem="fix bug"))

        assert response.success is False
        assert response.answer is None
        assert response.error == "Oracle encountered an error: Environment variable OPENAI_API_KEY is not set"
        assert response.code is ErrorCode.CONFIGURATION_ERROR

    @pytest.mark.asyncio
    async def test_prompt_includes_files_and_context(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        reader = StubFileReader()
        backend = make_backend(created=[make_job(status="completed", output_text="answer")])
        service = OracleService(backend, file_reader=reader, sleep=recording_sleep)
        request = OracleRequest(problem="why slow?", files=["db.py"], extra_context="postgres 16")

        answer = await service.call(request)

        assert answer == "answer"
        assert reader.requested == [["db.py"]]
        prompt = backend.create_calls[0]["input"]
        assert "why slow?" in prompt
        assert "postgres 16" in prompt
        assert "===== FILE: db.py =====\ncontents of db.py\n" in prompt

    @pytest.mark.asyncio
    async def test_failed_job_surfaces_message(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        backend = make_backend(
            created=[make_job(status="queued")],
            polled=[make_job(status="failed", error={"message": "rate limited"})],
        )
        service = OracleService(backend, sleep=recording_sleep)

        response = await service.solve(OracleRequest(problem="fix bug"))

        assert response.success is False
        assert response.error is not None
        assert response.error.startswith("Oracle encountered an error: rate limited")
        assert response.code is ErrorCode.TERMINAL_FAILURE

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(
        self, make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        """Calls sharing one service keep separate attempt state."""

        class EchoBackend:
            def __init__(self) -> None:
                self.budgets: list[int] = []

            async def create(self, body: dict[str, Any]) -> dict[str, Any]:
                self.budgets.append(body["max_output_tokens"])
                await asyncio.sleep(0)
                problem = body["input"].rsplit("### Coding problem\n", 1)[1].strip()
                return make_job(f"resp_{problem}", status="completed", output_text=f"answer to {problem}")

            async def retrieve(self, job_id: str) -> dict[str, Any]:
                raise AssertionError("completed jobs are never polled")

            async def aclose(self) -> None:
                pass

        backend = EchoBackend()
        service = OracleService(backend, sleep=recording_sleep)

        answers = await asyncio.gather(*(service.call(OracleRequest(problem=f"p{i}")) for i in range(5)))

        assert answers == [f"answer to p{i}" for i in range(5)]
        assert backend.budgets == [2048] * 5

    @pytest.mark.asyncio
    async def test_aclose(self, make_backend: Callable[..., Any]) -> None:
        backend = make_backend(created=[])

        await OracleService(backend).aclose()
        await OracleService(None).aclose()

        assert backend.closed is True


class TestScenarios:
    """End-to-end call flows against a scripted backend."""

    @pytest.mark.asyncio
    async def test_test_mode_echo(self) -> None:
        answer = await OracleService(None, test_mode=True).call(OracleRequest(problem="fix bug"))

        assert answer.startswith("[oracle test mode]")
        assert "fix bug" in answer

    @pytest.mark.asyncio
    async def test_queued_to_completed(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        backend = make_backend(
            created=[make_job(status="queued")],
            polled=[make_job(status="in_progress"), make_job(status="completed", output_text="done")],
        )

        answer = await OracleService(backend, sleep=recording_sleep).call(OracleRequest(problem="p"))

        assert answer == "done"

    @pytest.mark.asyncio
    async def test_two_exhausted_budgets_then_completed(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        exhausted = {"incomplete_details": {"reason": "max_output_tokens"}}
        backend = make_backend(
            created=[
                make_job("resp_1", status="incomplete", **exhausted),
                make_job("resp_2", status="incomplete", **exhausted),
                make_job("resp_3", status="completed", output_text="ok"),
            ]
        )

        answer = await OracleService(backend, sleep=recording_sleep).call(OracleRequest(problem="p"))

        assert answer == "ok"
        assert [body["max_output_tokens"] for body in backend.create_calls] == [2048, 4096, 8192]
        assert len({body["input"] for body in backend.create_calls}) == 1

    @pytest.mark.asyncio
    async def test_partial_answer_with_content_filter(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        backend = make_backend(
            created=[
                make_job(status="incomplete", output_text="partial", incomplete_details={"reason": "content_filter"})
            ]
        )

        answer = await OracleService(backend, sleep=recording_sleep).call(OracleRequest(problem="p"))

        assert answer.startswith("partial\n\n[oracle warning]")
        assert "(content_filter)" in answer

    @pytest.mark.asyncio
    async def test_rate_limited_failure(
        self, make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
    ) -> None:
        backend = make_backend(
            created=[make_job(status="queued")],
            polled=[make_job(status="failed", error={"message": "rate limited"})],
        )

        with pytest.raises(TerminalFailure) as exc_info:
            await OracleService(backend, sleep=recording_sleep).call(OracleRequest(problem="p"))

        assert "rate limited" in exc_info.value.message


@pytest.mark.asyncio
async def test_unreadable_path_becomes_error_block(
    make_backend: Callable[..., Any], make_job: Callable[..., dict[str, Any]], recording_sleep: Any
) -> None:
    """A path the OS rejects outright still yields an answer, with the error in the prompt."""
    backend = make_backend(created=[make_job(status="completed", output_text="answer")])
    service = OracleService(backend, sleep=recording_sleep)

    response = await service.solve(OracleRequest(problem="p", files=["bad\x00name"]))

    assert response.success is True
    prompt = backend.create_calls[0]["input"]
    assert "===== FILE: bad\x00name (error reading) =====\nInvalid path: " in prompt

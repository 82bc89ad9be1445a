"""Shared test fixtures for the Oracle test suite.

Provides a scripted Responses API backend and an instant sleep so that no
test touches the network or the wall clock.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from oracle_mcp.core.constants import get_settings

ORACLE_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "ORACLE_TEST_MODE",
    "ORACLE_LOG_DIR",
    "HTTP_REQUEST_LOGGING",
    "DEBUG",
)


# ============================================================================
# Test Isolation: Environment and Settings Cache
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove Oracle environment variables and clear cached settings around each test."""
    for name in ORACLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Fake Responses API
# ============================================================================


class FakeBackend:
    """Scripted ResponsesBackend.

    ``created`` holds one entry per submission, ``polled`` one entry per poll.
    An entry that is an exception is raised instead of returned.
    """

    def __init__(self, created: list[Any], polled: list[Any] | None = None):
        self.created = list(created)
        self.polled = list(polled or [])
        self.create_calls: list[dict[str, Any]] = []
        self.retrieve_calls: list[str] = []
        self.closed = False

    @staticmethod
    def _next(queue: list[Any]) -> Any:
        if not queue:
            raise AssertionError("FakeBackend ran out of scripted payloads")
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def create(self, body: dict[str, Any]) -> Any:
        self.create_calls.append(body)
        return self._next(self.created)

    async def retrieve(self, job_id: str) -> Any:
        self.retrieve_calls.append(job_id)
        return self._next(self.polled)

    async def aclose(self) -> None:
        self.closed = True


class RecordingSleep:
    """Stand-in for asyncio.sleep that returns immediately and records delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total_ms(self) -> float:
        return sum(self.calls) * 1000


def job(job_id: str = "resp_1", status: str = "completed", **fields: Any) -> dict[str, Any]:
    """Build a Responses API job payload."""
    return {"id": job_id, "object": "response", "status": status, **fields}


@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    """Factory for scripted backends."""
    return FakeBackend


@pytest.fixture
def make_job() -> Callable[..., dict[str, Any]]:
    """Factory for job payloads."""
    return job


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Instant sleep that records requested delays."""
    return RecordingSleep()

"""
OpenAI client factory utilities.
Centralizes AsyncOpenAI client creation with consistent configuration.
"""

from __future__ import annotations

from typing import Any

import httpx

from openai import AsyncOpenAI

from oracle_mcp.core.constants import USER_AGENT
from oracle_mcp.utils.http_logger import create_logging_client

# Each request and each poll is a short round trip; the long wait for
# gpt-5-pro happens between polls, not inside a single request.
DEFAULT_CONNECT_TIMEOUT = 30.0  # Time to establish connection
DEFAULT_READ_TIMEOUT = 120.0  # Time to receive a response
DEFAULT_WRITE_TIMEOUT = 60.0  # Time to send request (prompts can be ~1MB)
DEFAULT_POOL_TIMEOUT = 30.0  # Time to acquire connection from pool

# One HTTP request per submission or poll. SDK retries would create duplicate
# jobs and wait outside the polling deadline.
OPENAI_MAX_RETRIES = 0


def create_http_client(enable_logging: bool = False) -> httpx.AsyncClient:
    """Create the shared HTTP client.

    Args:
        enable_logging: Enable HTTP request/response logging

    Returns:
        Configured httpx.AsyncClient
    """
    timeout = httpx.Timeout(
        connect=DEFAULT_CONNECT_TIMEOUT,
        read=DEFAULT_READ_TIMEOUT,
        write=DEFAULT_WRITE_TIMEOUT,
        pool=DEFAULT_POOL_TIMEOUT,
    )
    headers = {"User-Agent": USER_AGENT}

    if enable_logging:
        client: httpx.AsyncClient = create_logging_client(timeout=timeout, headers=headers)
        return client

    return httpx.AsyncClient(timeout=timeout, headers=headers)


def create_openai_client(
    api_key: str,
    base_url: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncOpenAI:
    """Create AsyncOpenAI client with consistent configuration.

    Args:
        api_key: OpenAI API key
        base_url: Optional base URL for custom endpoints
        http_client: Optional httpx client (shared, possibly with request logging)

    Returns:
        Configured AsyncOpenAI client with SDK retries disabled
    """
    kwargs: dict[str, Any] = {
        "api_key": api_key,
        "http_client": http_client,
        "max_retries": OPENAI_MAX_RETRIES,
    }
    if base_url:
        kwargs["base_url"] = base_url
    return AsyncOpenAI(**kwargs)

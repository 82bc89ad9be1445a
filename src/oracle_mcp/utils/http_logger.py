"""
HTTP request/response logging for debugging Responses API traffic.

Captures request metadata and response status using httpx event hooks.
Bodies are summarized, never logged in full, since prompts can be large.
"""

from __future__ import annotations

from typing import Any

import httpx

from oracle_mcp.utils.logger import logger

SENSITIVE_HEADERS = frozenset({"authorization", "api-key", "x-api-key"})


class HTTPLogger:
    """Logs HTTP requests and responses for debugging."""

    async def log_request(self, request: httpx.Request) -> None:
        """Log outgoing HTTP request."""
        logger.info(
            f"HTTP Request: {request.method} {request.url}",
            http_request=True,
            headers=self._sanitize_headers(dict(request.headers)),
            body_bytes=len(request.content) if request.content else 0,
        )

    async def log_response(self, response: httpx.Response) -> None:
        """Log HTTP response status. The body is left unread so streaming stays intact."""
        request = response.request
        logger.info(
            f"HTTP Response: {response.status_code} {request.method} {request.url}",
            http_response=True,
            status_code=response.status_code,
        )

    def _sanitize_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Redact sensitive header values, keeping the last 4 characters."""
        sanitized = headers.copy()
        for key, value in headers.items():
            if key.lower() in SENSITIVE_HEADERS:
                sanitized[key] = f"***{value[-4:]}" if len(value) > 4 else "***"
        return sanitized


def create_logging_client(
    timeout: httpx.Timeout | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an httpx client with request/response logging.

    Args:
        timeout: Optional timeout configuration
        headers: Default headers for every request

    Returns:
        Configured httpx.AsyncClient with event hooks
    """
    http_logger = HTTPLogger()

    event_hooks: dict[str, list[Any]] = {
        "request": [http_logger.log_request],
        "response": [http_logger.log_response],
    }

    return httpx.AsyncClient(event_hooks=event_hooks, timeout=timeout, headers=headers)

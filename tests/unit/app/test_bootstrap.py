"""Tests for service initialization from settings."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from oracle_mcp.app.bootstrap import initialize_service
from oracle_mcp.core.constants import Settings
from oracle_mcp.integrations.responses_transport import ResponsesTransport


class TestInitializeService:
    """Tests for initialize_service."""

    def test_without_api_key(self) -> None:
        with patch("oracle_mcp.app.bootstrap.logger") as mock_logger:
            service = initialize_service(Settings(_env_file=None))

        assert service.backend is None
        assert service.test_mode is False
        mock_logger.warning.assert_called_once()

    def test_test_mode_without_key(self) -> None:
        with patch("oracle_mcp.app.bootstrap.logger") as mock_logger:
            service = initialize_service(Settings(_env_file=None, oracle_test_mode=True))

        assert service.backend is None
        assert service.test_mode is True
        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_with_api_key(self) -> None:
        settings = Settings(_env_file=None, openai_api_key="sk-test", openai_base_url="https://proxy.example/v1")

        with patch("oracle_mcp.app.bootstrap.logger"):
            service = initialize_service(settings)

        try:
            assert isinstance(service.backend, ResponsesTransport)
        finally:
            await service.aclose()

    def test_logging_configured(self) -> None:
        settings = Settings(_env_file=None, debug=True, oracle_log_dir="/tmp/oracle-logs")

        with patch("oracle_mcp.app.bootstrap.logger") as mock_logger:
            initialize_service(settings)

        mock_logger.configure.assert_called_once_with(debug=True, log_dir="/tmp/oracle-logs")

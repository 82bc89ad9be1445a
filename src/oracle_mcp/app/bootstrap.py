"""Application initialization for Oracle.

Loads the environment, validates settings, configures logging and builds the
single OracleService shared by every call. The OpenAI client is created here
once and only read afterwards.
"""

from __future__ import annotations

from dotenv import load_dotenv

from oracle_mcp.core.constants import DEFAULT_CONFIG, Settings, get_settings
from oracle_mcp.core.oracle import OracleService
from oracle_mcp.integrations.responses_transport import ResponsesTransport
from oracle_mcp.utils.client_factory import create_http_client, create_openai_client
from oracle_mcp.utils.logger import logger


def initialize_service(settings: Settings | None = None) -> OracleService:
    """Build the OracleService from environment settings.

    A missing OPENAI_API_KEY does not stop startup: test mode needs no key,
    and real calls report ConfigurationError when they are made.

    Args:
        settings: Pre-built settings (tests); defaults to the cached environment settings

    Returns:
        OracleService ready to serve concurrent calls
    """
    if settings is None:
        load_dotenv()
        settings = get_settings()

    logger.configure(debug=settings.debug, log_dir=settings.oracle_log_dir)

    backend = None
    if settings.openai_api_key:
        http_client = create_http_client(enable_logging=settings.http_request_logging)
        if settings.http_request_logging:
            logger.info("HTTP request/response logging enabled")
        client = create_openai_client(
            settings.openai_api_key,
            base_url=settings.openai_base_url,
            http_client=http_client,
        )
        backend = ResponsesTransport(client)
        logger.info(f"OpenAI client ready (model: {DEFAULT_CONFIG.model})")
    elif not settings.oracle_test_mode:
        logger.warning("OPENAI_API_KEY is not set; Oracle calls will fail until it is configured")

    if settings.oracle_test_mode:
        logger.info("ORACLE_TEST_MODE is set; requests will not reach OpenAI")

    return OracleService(backend, DEFAULT_CONFIG, test_mode=settings.oracle_test_mode)

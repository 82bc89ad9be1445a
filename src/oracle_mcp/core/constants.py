"""
Constants and configuration for Oracle.
Centralizes all magic numbers and configuration values.
Includes Pydantic validation for environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# Responses API Configuration
# ============================================================================

#: Model used for every Oracle request. A single backend is assumed.
ORACLE_MODEL = "gpt-5-pro"

#: Reasoning effort sent with every request.
ORACLE_REASONING_EFFORT = "high"

#: System instructions sent alongside the user prompt.
ORACLE_INSTRUCTIONS = (
    "You are Oracle, a meticulous, senior-level coding assistant. Always think step-by-step "
    "and consider edge cases before answering. When relevant, suggest concrete code changes "
    "and explain why."
)

#: User agent reported by the shared HTTP client.
USER_AGENT = "oracle-mcp-server/0.1"

# ============================================================================
# Output Budget / Retry Configuration
# ============================================================================

#: Initial max_output_tokens for the first attempt.
INITIAL_OUTPUT_BUDGET = 2048

#: Ceiling for max_output_tokens after escalation.
MAX_OUTPUT_BUDGET = 8192

#: Maximum number of submissions per logical call (first attempt included).
MAX_ATTEMPTS = 3

#: Incomplete reason that makes a text-less response eligible for a retry.
RETRYABLE_INCOMPLETE_REASON = "max_output_tokens"

# ============================================================================
# Polling Configuration
# ============================================================================

#: First delay between polls, in milliseconds.
POLL_START_DELAY_MS = 500

#: Upper bound for the delay between polls, in milliseconds.
POLL_MAX_DELAY_MS = 5_000

#: Growth factor applied to the delay after every poll.
POLL_BACKOFF_FACTOR = 1.5

#: Cumulative time spent waiting before giving up, in seconds.
POLL_TIMEOUT_SECONDS = 120

# ============================================================================
# Prompt / Diagnostics Configuration
# ============================================================================

#: Hard cap on the prompt length in characters (roughly 256k tokens).
MAX_PROMPT_CHARS = 1_000_000

#: Characters of a serialized payload kept in error messages.
JSON_PREVIEW_CHARS = 2_000

# ============================================================================
# Logging Configuration
# ============================================================================

#: Maximum size in bytes for log files before rotation (10MB).
LOG_MAX_SIZE = 10 * 1024 * 1024

#: Number of request log backups to retain during rotation.
LOG_BACKUP_COUNT_REQUESTS = 5

#: Number of error log backups to retain during rotation.
LOG_BACKUP_COUNT_ERRORS = 3

#: Maximum characters to show in log previews for tool arguments and results.
LOG_PREVIEW_LENGTH = 50

#: Length of the per-process run id attached to log records.
RUN_ID_LENGTH = 8

# ============================================================================
# Error Messages
# ============================================================================

#: Raised at call time when no API key is configured.
ERROR_MISSING_API_KEY = "Environment variable OPENAI_API_KEY is not set"

#: Prefix for every error surfaced to a caller.
ERROR_PREFIX = "Oracle encountered an error"

#: Values of ORACLE_TEST_MODE that switch test mode on.
TRUTHY_FLAG_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class OracleConfig:
    """Fixed backend configuration, built once and injected into the service.

    Attributes:
        model: Responses API model name
        instructions: System instructions for every request
        reasoning_effort: Reasoning effort level
        initial_output_budget: max_output_tokens of the first attempt
        max_output_budget: Ceiling for escalated budgets
        max_attempts: Submissions allowed per logical call
        poll_start_delay_ms: First poll delay
        poll_max_delay_ms: Poll delay cap
        poll_backoff_factor: Poll delay growth factor
        poll_timeout_seconds: Cumulative wait before PollTimeout
        max_prompt_chars: Prompt length cap
        preview_chars: Payload preview length in error messages
    """

    model: str = ORACLE_MODEL
    instructions: str = ORACLE_INSTRUCTIONS
    reasoning_effort: str = ORACLE_REASONING_EFFORT
    initial_output_budget: int = INITIAL_OUTPUT_BUDGET
    max_output_budget: int = MAX_OUTPUT_BUDGET
    max_attempts: int = MAX_ATTEMPTS
    poll_start_delay_ms: float = POLL_START_DELAY_MS
    poll_max_delay_ms: float = POLL_MAX_DELAY_MS
    poll_backoff_factor: float = POLL_BACKOFF_FACTOR
    poll_timeout_seconds: float = POLL_TIMEOUT_SECONDS
    max_prompt_chars: int = MAX_PROMPT_CHARS
    preview_chars: int = JSON_PREVIEW_CHARS

    @property
    def poll_timeout_ms(self) -> float:
        return self.poll_timeout_seconds * 1000


DEFAULT_CONFIG = OracleConfig()

# ============================================================================
# Environment Configuration with Pydantic Validation
# ============================================================================


class Settings(BaseSettings):
    """Environment settings with validation.

    Loads from environment variables and .env file. The API key is optional
    here so that test mode works without credentials; a missing key is
    reported when a real call is attempted.
    """

    openai_api_key: str | None = Field(default=None, description="OpenAI API key for authentication")
    openai_base_url: str | None = Field(default=None, description="Optional custom Responses API endpoint")

    oracle_test_mode: bool = Field(default=False, description="Return canned answers without calling OpenAI")

    debug: bool = Field(default=False, description="Enable debug logging")
    http_request_logging: bool = Field(default=False, description="Enable HTTP request/response logging")
    oracle_log_dir: str | None = Field(default=None, description="Directory for JSON log files")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("oracle_test_mode", mode="before")
    @classmethod
    def parse_test_mode(cls, v: Any) -> bool:
        """Only 1/true/yes/on enable test mode; anything else disables it."""
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() in TRUTHY_FLAG_VALUES

    @field_validator("openai_api_key", "openai_base_url", "oracle_log_dir", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to ensure we only load and validate settings once.
    """
    return Settings()

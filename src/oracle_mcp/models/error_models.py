"""
Error taxonomy for Oracle.

Every failure of a logical call is one of the exceptions below. They are
raised inside the pipeline and recovered at the call boundary, where they are
turned into a structured error result for the tool host or the CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Application-specific error codes for categorization."""

    CONFIGURATION_ERROR = "CFG_1001"
    TRANSPORT_ERROR = "EXT_2001"
    PROTOCOL_ERROR = "EXT_2002"
    POLL_TIMEOUT = "JOB_3001"
    TERMINAL_FAILURE = "JOB_3002"
    UNEXPECTED_STATUS = "JOB_3003"
    INCOMPLETE_NO_TEXT = "OUT_4001"
    NO_TEXT_EXTRACTED = "OUT_4002"
    INTERNAL_ERROR = "INT_9001"


class OracleError(Exception):
    """Base Oracle exception with error code support.

    Example:
        raise TerminalFailure(
            message="rate limited. Raw payload: {...}",
            status="failed",
            payload=payload,
        )
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, *, payload: Any = None):
        self.message = message
        self.payload = payload
        super().__init__(message)


class ConfigurationError(OracleError):
    """Required configuration (the API key) is missing."""

    code = ErrorCode.CONFIGURATION_ERROR


class TransportError(OracleError):
    """The request could not be sent or the API answered with a non-success status."""

    code = ErrorCode.TRANSPORT_ERROR

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProtocolError(OracleError):
    """The API answered, but the body was unusable (not JSON, no job id)."""

    code = ErrorCode.PROTOCOL_ERROR


class PollTimeout(OracleError):
    """The job was still running when the polling deadline expired."""

    code = ErrorCode.POLL_TIMEOUT


class TerminalFailure(OracleError):
    """The job ended failed, cancelled, or waiting on an action Oracle cannot take."""

    code = ErrorCode.TERMINAL_FAILURE

    def __init__(self, message: str, *, status: str, payload: Any = None):
        super().__init__(message, payload=payload)
        self.status = status


class UnexpectedStatus(OracleError):
    """The job reported a status outside the known set."""

    code = ErrorCode.UNEXPECTED_STATUS

    def __init__(self, message: str, *, status: str, payload: Any = None):
        super().__init__(message, payload=payload)
        self.status = status


class IncompleteNoText(OracleError):
    """The job ended incomplete without text and no further retry is allowed."""

    code = ErrorCode.INCOMPLETE_NO_TEXT

    def __init__(self, message: str, *, reason: str, payload: Any = None):
        super().__init__(message, payload=payload)
        self.reason = reason


class NoTextExtracted(OracleError):
    """The job completed but no answer text could be found."""

    code = ErrorCode.NO_TEXT_EXTRACTED


__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "IncompleteNoText",
    "NoTextExtracted",
    "OracleError",
    "PollTimeout",
    "ProtocolError",
    "TerminalFailure",
    "TransportError",
    "UnexpectedStatus",
]

"""
Models Module - Request, Response and Error Types
=================================================

Modules:
    api_models: OracleRequest, FileContext and the ToolResponse envelope
    error_models: ErrorCode and the OracleError hierarchy
"""

from oracle_mcp.models.api_models import FileContext, OracleRequest, ToolResponse
from oracle_mcp.models.error_models import (
    ConfigurationError,
    ErrorCode,
    IncompleteNoText,
    NoTextExtracted,
    OracleError,
    PollTimeout,
    ProtocolError,
    TerminalFailure,
    TransportError,
    UnexpectedStatus,
)

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FileContext",
    "IncompleteNoText",
    "NoTextExtracted",
    "OracleError",
    "OracleRequest",
    "PollTimeout",
    "ProtocolError",
    "TerminalFailure",
    "ToolResponse",
    "TransportError",
    "UnexpectedStatus",
]

"""
Request and response models for the Oracle tool.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from oracle_mcp.models.error_models import ErrorCode


class OracleRequest(BaseModel):
    """One logical Oracle call."""

    problem: str = Field(description="Natural-language description of the coding problem you want help with.")
    files: list[str] | None = Field(
        default=None,
        description="List of file paths to include as context. Paths are resolved relative to the working dir.",
    )
    extra_context: str | None = Field(default=None, description="Optional extra context or notes.")


@dataclass(frozen=True, slots=True)
class FileContext:
    """Content of one requested file, or the reason it could not be read."""

    path: str
    content: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ToolResponse(BaseModel):
    """Standardized result of a tool call: the final answer or an error message."""

    success: bool
    answer: str | None = None
    error: str | None = None
    code: ErrorCode | None = None


__all__ = ["FileContext", "OracleRequest", "ToolResponse"]

"""
MCP (Model Context Protocol) server exposing Oracle as a tool.

One tool, ``solve_coding_problem``. Failures come back to the host as MCP
error results (ToolError), never as a crashed server.
"""

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field

from oracle_mcp.core.oracle import OracleService
from oracle_mcp.models.api_models import OracleRequest
from oracle_mcp.utils.logger import logger

SERVER_NAME = "oracle"

TOOL_NAME = "solve_coding_problem"

TOOL_DESCRIPTION = (
    "Analyze a difficult coding problem (optionally using local project files) and return "
    "a detailed solution and suggested code changes."
)

SERVER_INSTRUCTIONS = (
    "Oracle is a coding-focused MCP server that uses OpenAI's gpt-5-pro model with high reasoning "
    "to answer questions about your code. Use the `solve_coding_problem` tool with a coding problem "
    "and optional file paths; it will analyze the problem and files and propose concrete fixes."
)


async def solve_coding_problem(service: OracleService, request: OracleRequest) -> str:
    """Run one Oracle call for the tool host.

    Returns:
        The final answer text

    Raises:
        ToolError: With the human-readable error message; FastMCP reports it
            as an error result
    """
    response = await service.solve(request)
    logger.log_tool_call(
        TOOL_NAME,
        request.model_dump(exclude_none=True),
        response.answer if response.success else response.error,
    )
    if not response.success:
        raise ToolError(response.error or "Oracle encountered an error")
    return response.answer or ""


def create_mcp_server(service: OracleService) -> FastMCP:
    """Build the FastMCP app with the Oracle tool bound to ``service``."""
    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    @mcp.tool(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        annotations=ToolAnnotations(
            title="Oracle: Solve coding problems",
            readOnlyHint=True,
            idempotentHint=True,
        ),
    )
    async def _tool(
        problem: Annotated[str, Field(description="Natural-language description of the coding problem.")],
        files: Annotated[
            list[str] | None,
            Field(description="File paths to include as context, relative to the working dir."),
        ] = None,
        extra_context: Annotated[str | None, Field(description="Optional extra context or notes.")] = None,
    ) -> str:
        request = OracleRequest(problem=problem, files=files, extra_context=extra_context)
        return await solve_coding_problem(service, request)

    return mcp


def run_stdio(app: FastMCP) -> None:
    logger.info(f"Starting {SERVER_NAME} MCP server over stdio")
    app.run(transport="stdio")

"""
Integrations Module - External Services
=======================================

Modules:
    responses_transport: Raw-JSON Responses API access over a shared AsyncOpenAI client
    mcp_server: FastMCP server exposing the solve_coding_problem tool
"""

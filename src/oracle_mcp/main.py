"""
Oracle - coding-problem solver backed by OpenAI's Responses API, served over MCP.

Main entry point: parses the command line, bootstraps the shared service and
either runs one call or starts the stdio MCP server.
"""

from __future__ import annotations

import asyncio

from collections.abc import Sequence

from oracle_mcp.app.bootstrap import initialize_service
from oracle_mcp.app.cli import build_parser, run_call
from oracle_mcp.integrations.mcp_server import create_mcp_server, run_stdio


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    service = initialize_service()

    if args.command == "call":
        return asyncio.run(run_call(args, service))

    run_stdio(create_mcp_server(service))
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()

"""Command-line interface for Oracle.

Subcommands:
    serve  Start the MCP server over stdio (default)
    call   Run one Oracle request and print the answer
"""

from __future__ import annotations

import argparse
import sys

from pathlib import Path
from typing import TextIO

import aiofiles

from oracle_mcp.core.oracle import OracleService
from oracle_mcp.models.api_models import OracleRequest

STDIN_MARKER = "-"


class CliError(Exception):
    """Invalid command-line input."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oracle-mcp", description="Oracle MCP server and CLI helper")
    subparsers = parser.add_subparsers(dest="command")

    call = subparsers.add_parser("call", help="Run a one-off Oracle request from the command line")
    source = call.add_mutually_exclusive_group()
    source.add_argument("--problem", metavar="TEXT", help="Problem text passed inline")
    source.add_argument(
        "--problem-file",
        metavar="PATH",
        help="Read problem text from a file (use '-' for stdin)",
    )
    call.add_argument("--extra", dest="extra_context", metavar="TEXT", help="Extra context or notes")
    call.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        default=[],
        metavar="PATH",
        help="File path to include as context (repeatable)",
    )

    subparsers.add_parser("serve", help="Start the Oracle MCP server over stdio (default)")
    return parser


async def load_problem_text(
    inline: str | None,
    problem_file: str | None,
    stdin: TextIO | None = None,
) -> str:
    """Resolve the problem text from ``--problem`` or ``--problem-file``.

    Raises:
        CliError: No source given, the source is blank, or the file cannot be read
    """
    if inline is not None:
        if not inline.strip():
            raise CliError("Problem text cannot be empty")
        return inline

    if problem_file is not None:
        if problem_file == STDIN_MARKER:
            text = (stdin or sys.stdin).read()
            if not text.strip():
                raise CliError("Problem text read from stdin is empty")
            return text

        try:
            async with aiofiles.open(Path(problem_file), encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise CliError(f"Failed to read problem file {problem_file}: {e}") from e
        if not text.strip():
            raise CliError("Problem text file is empty")
        return text

    raise CliError("Provide --problem TEXT or --problem-file PATH (use '-' for stdin)")


async def run_call(
    args: argparse.Namespace,
    service: OracleService,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Execute the ``call`` subcommand and return the process exit code."""
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    try:
        try:
            problem = await load_problem_text(args.problem, args.problem_file)
        except CliError as e:
            err.write(f"Error: {e}\n")
            return 2

        request = OracleRequest(
            problem=problem,
            files=list(args.files) or None,
            extra_context=args.extra_context,
        )
        response = await service.solve(request)
    finally:
        await service.aclose()

    if not response.success:
        err.write(f"{response.error}\n")
        return 1

    out.write(f"{response.answer}\n")
    return 0

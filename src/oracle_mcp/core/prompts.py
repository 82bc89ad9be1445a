"""
Prompt texts and prompt assembly for Oracle.

build_prompt() is a pure function of the request and the already-read file
contexts. Lengths are counted in characters (str code points), so a cut can
never land inside a multi-byte UTF-8 sequence.
"""

from __future__ import annotations

from collections.abc import Sequence

from oracle_mcp.core.constants import MAX_PROMPT_CHARS
from oracle_mcp.models.api_models import FileContext

PROMPT_PREAMBLE = (
    "You are Oracle, a senior software engineer MCP tool.\n"
    "You will be given a coding problem and optional project files.\n"
    "Carefully analyze the problem, read the files, reason step-by-step, "
    "and produce a clear, actionable answer.\n\n"
)

CONTEXT_BUDGET_NOTICE = (
    "Context is constrained to stay under roughly 256k tokens. "
    "If you see '[truncated]' markers, some content was cut to fit the budget.\n\n"
)

PROBLEM_HEADER = "### Coding problem\n"
EXTRA_CONTEXT_HEADER = "### Extra context\n"
PROJECT_FILES_HEADER = "### Project files\n"

TRUNCATION_NOTICE = "\n\n...[truncated project file content to respect ~256k-token context budget]...\n"


def format_file_block(context: FileContext) -> str:
    """Render one file as a labeled block, or its read error."""
    if not context.ok:
        return f"\n\n===== FILE: {context.path} (error reading) =====\n{context.error}\n"
    return f"\n\n===== FILE: {context.path} =====\n{context.content or ''}\n"


def build_prompt(
    problem: str,
    extra_context: str | None = None,
    file_contexts: Sequence[FileContext] = (),
    max_chars: int = MAX_PROMPT_CHARS,
) -> str:
    """Assemble the user prompt, truncating file context to fit ``max_chars``.

    Args:
        problem: The coding problem
        extra_context: Optional notes, skipped when blank
        file_contexts: Files in request order
        max_chars: Hard cap on the prompt length

    Returns:
        A prompt no longer than ``max_chars`` characters
    """
    parts = [PROMPT_PREAMBLE, CONTEXT_BUDGET_NOTICE, PROBLEM_HEADER, problem, "\n\n"]

    if extra_context is not None and extra_context.strip():
        parts.extend([EXTRA_CONTEXT_HEADER, extra_context, "\n\n"])

    context_blocks = "".join(format_file_block(context) for context in file_contexts)

    if context_blocks:
        base_len = sum(len(part) for part in parts) + len(PROJECT_FILES_HEADER) + len(TRUNCATION_NOTICE)
        available = max(0, max_chars - base_len)

        parts.append(PROJECT_FILES_HEADER)
        if available == 0:
            parts.append(TRUNCATION_NOTICE)
        elif len(context_blocks) > available:
            parts.extend([context_blocks[:available], TRUNCATION_NOTICE])
        else:
            parts.append(context_blocks)

    return _clamp("".join(parts), max_chars)


def _clamp(prompt: str, max_chars: int) -> str:
    # Only reached when the fixed sections plus problem/extra context exceed the cap.
    if len(prompt) <= max_chars:
        return prompt
    if max_chars <= len(TRUNCATION_NOTICE):
        return prompt[:max_chars]
    return prompt[: max_chars - len(TRUNCATION_NOTICE)] + TRUNCATION_NOTICE

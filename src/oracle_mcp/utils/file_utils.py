"""
File reading utilities for Oracle.
Turns the file paths of a request into FileContext entries for the prompt.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import aiofiles

from oracle_mcp.models.api_models import FileContext


async def read_file_content(target_path: Path) -> tuple[str, str | None]:
    """
    Read text content from a file asynchronously.

    Args:
        target_path: Path object to read from

    Returns:
        Tuple of (content, error_message)
        If error_message is None, read was successful
    """
    try:
        async with aiofiles.open(target_path, encoding="utf-8") as f:
            content = await f.read()
        return content, None
    except UnicodeDecodeError:
        return "", "File is not text/UTF-8 encoded"
    except FileNotFoundError:
        return "", f"File not found: {target_path}"
    except IsADirectoryError:
        return "", f"Is a directory: {target_path}"
    except PermissionError:
        return "", f"Permission denied: {target_path}"
    except OSError as e:
        return "", f"Failed to read file: {e!s}"
    except ValueError as e:
        return "", f"Invalid path: {e!s}"


async def read_file_contexts(paths: Sequence[str]) -> list[FileContext]:
    """Read every requested path, relative to the working directory, preserving order.

    A file that cannot be read yields a FileContext carrying the error text
    instead of failing the whole request.
    """
    contexts: list[FileContext] = []
    for path in paths:
        content, error = await read_file_content(Path(path))
        if error is None:
            contexts.append(FileContext(path=path, content=content))
        else:
            contexts.append(FileContext(path=path, error=error))
    return contexts

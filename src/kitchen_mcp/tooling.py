"""Helpers shared by the FastMCP servers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from .core.errors import KitchenError

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
WRITE = ToolAnnotations(readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=True)
DESTRUCTIVE = ToolAnnotations(readOnlyHint=False, destructiveHint=True, idempotentHint=False, openWorldHint=True)


@contextmanager
def tool_errors(tool_name: str) -> Iterator[None]:
    """Turn any failure inside a tool body into a ToolError.

    FastMCP reports ToolError as an `isError` result, so the caller always
    gets a readable message and the server keeps running.
    """
    try:
        yield
    except KitchenError as exc:
        logger.warning("Tool %s failed: %s", tool_name, exc)
        raise ToolError(str(exc)) from exc
    except Exception as exc:
        logger.error("Tool %s raised unexpectedly: %s", tool_name, exc, exc_info=True)
        raise ToolError(str(exc)) from exc

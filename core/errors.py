"""Error taxonomy shared by every projects tool.

Soft errors (`ProjectsToolError` and subclasses) are legitimate external or
caller conditions and are returned to the MCP client as in-band error text.
`SerializationError` signals an internal defect and is allowed to escape.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable

from core.models import ToolResult

logger = logging.getLogger(__name__)


class ProjectsToolError(Exception):
    """Base for errors reported in-band as a tool result."""


class ParameterError(ProjectsToolError):
    pass


class MissingParameterError(ParameterError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing required parameter: {name}")


class WrongTypeError(ParameterError):
    def __init__(self, name: str, expected: str):
        self.name = name
        self.expected = expected
        super().__init__(f"parameter {name} is not of type {expected}")


class ValidationError(ProjectsToolError):
    pass


class TransportError(ProjectsToolError):
    """The request never reached the API or never came back."""

    def __init__(self, failure: str, cause: Any):
        self.failure = failure
        self.cause = cause
        super().__init__(f"{failure}: {cause}")


class APIStatusError(ProjectsToolError):
    """The API answered with a status other than the one the operation expects."""

    def __init__(self, failure: str, status_code: int, body: str):
        self.failure = failure
        self.status_code = status_code
        self.body = body
        super().__init__(f"{failure}: {body}")


class SerializationError(Exception):
    """Encoding a request or decoding a successful response failed."""


def in_band_errors(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[ToolResult]]:
    """Wrap a tool coroutine so soft errors become an error `ToolResult`."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        try:
            text = await func(*args, **kwargs)
        except ProjectsToolError as e:
            logger.info(f"{func.__name__} returned an error result: {e}")
            return ToolResult(text=str(e), is_error=True)
        return ToolResult(text=text)

    return wrapper

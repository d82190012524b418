"""Errors raised while invoking a Jina API operation."""

from typing import Optional


class JinaToolError(Exception):
    """Base class for failed operation invocations"""

    kind = "error"

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class InvalidInputError(JinaToolError):
    """A parameter is missing, unknown or of the wrong kind.

    Raised before any network call is made.
    """

    kind = "invalid_input"

    def __init__(self, operation: str, parameter: str, reason: str):
        self.parameter = parameter
        super().__init__(operation, f"{reason}: {parameter}")


class RemoteCallError(JinaToolError):
    """The service answered with a non-2xx status, or could not be reached"""

    kind = "remote_call_failure"

    def __init__(self, operation: str, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            message = f"request failed: {body}"
        else:
            message = f"API call failed with status {status}: {body}"
        super().__init__(operation, message)


class MalformedResponseError(JinaToolError):
    """The response decoded but lacks a field the projection needs"""

    kind = "malformed_response"

    def __init__(self, operation: str, field: str, reason: str = "missing field"):
        self.field = field
        super().__init__(operation, f"malformed response, {reason}: {field}")


__all__ = [
    "JinaToolError",
    "InvalidInputError",
    "RemoteCallError",
    "MalformedResponseError",
]

"""Error types raised while executing a Port node."""

from typing import List, Optional


class PortNodeError(Exception):
    """
    Base error for node execution.

    Carries a short user-facing message and an optional description
    with a hint on how to fix the problem.
    """

    def __init__(self, message: str, description: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.description = description

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "description": self.description,
        }


class AuthenticationError(PortNodeError):
    """Token exchange failed or returned no access token."""

    def __init__(self, message: str, url: str, description: Optional[str] = None):
        super().__init__(message, description)
        self.url = url


class ValidationError(PortNodeError):
    """A node parameter failed local validation before any request was sent."""


class UpstreamError(PortNodeError):
    """An invocation or fetch-result call to the Port API failed."""

    def __init__(
        self,
        message: str,
        description: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message, description)
        self.status_code = status_code
        self.context = context or {}


class UnknownOperationError(PortNodeError):
    """The selected operation is not one the node knows."""

    def __init__(self, operation: str, available: List[str]):
        super().__init__(
            f"Unknown operation: {operation}",
            f"Please select a valid operation. Available operations: {', '.join(available)}",
        )
        self.operation = operation
        self.available = list(available)

"""
Exceptions raised by the bizcomms clients.

RemoteOperationError wraps the googleapiclient HttpError so callers can
branch on status without importing googleapiclient themselves.
"""
from __future__ import annotations

from typing import Any, Optional

from googleapiclient.errors import HttpError


class BusinessCommunicationsError(Exception):
    """Base class for all bizcomms errors."""


class AuthenticationError(BusinessCommunicationsError):
    """Service-account credentials are invalid or the handshake was rejected."""


class RemoteOperationError(BusinessCommunicationsError):
    """A remote call was rejected by the service or never reached it."""

    def __init__(self, operation: str, target: str, cause: Exception) -> None:
        self.operation = operation
        self.target = target
        self.cause = cause
        # Transport failures carry no HTTP response
        resp = getattr(cause, "resp", None)
        self.status: Optional[int] = getattr(resp, "status", None)
        self.reason: str = getattr(cause, "reason", None) or str(cause)
        super().__init__(f"{operation} {target} failed ({self.status}): {self.reason}")


def execute(request: Any, operation: str, target: str) -> dict:
    """Run a googleapiclient request, converting HttpError to RemoteOperationError."""
    try:
        return request.execute() or {}
    except HttpError as exc:
        raise RemoteOperationError(operation, target, exc) from exc

from __future__ import annotations

from typing import Any, Dict, Optional


class ServiceUnavailable(Exception):
    """Raised when the local LLM runtime cannot produce a completion.

    Attributes:
        message: human-readable message
        http_status: suggested HTTP status code for handlers (503)
    """

    http_status = 503

    def __init__(self, message: str = "AI service temporarily unavailable"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}

    def __str__(self) -> str:
        return self.message


class NetworkFailure(ServiceUnavailable):
    """The LLM runtime could not be reached (connection refused, DNS, reset...)."""


class UpstreamError(ServiceUnavailable):
    """The LLM runtime answered with a non-success status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

"""Error types raised by the helpdesk client."""
from asyncio import CancelledError
from typing import Any, Dict, Optional


class HelpdeskError(Exception):
    """Base class for every error raised by the client."""


class ConfigurationError(HelpdeskError):
    """Site or credentials are unusable. Raised before any network call."""


class TransportError(HelpdeskError):
    """The request never completed (connection refused, timeout, DNS...)."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url


class ServiceError(HelpdeskError):
    """The service answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        payload: Optional[Dict[str, Any]] = None,
        body: str = "",
        method: str = "",
        url: str = "",
    ):
        self.status_code = status_code
        self.payload = payload
        self.body = body
        self.method = method
        self.url = url
        super().__init__(self._describe())

    def _describe(self) -> str:
        detail = ""
        if isinstance(self.payload, dict):
            detail = self.payload.get("description") or self.payload.get("error") or ""
            if isinstance(detail, dict):
                detail = detail.get("message") or detail.get("title") or ""
        text = f"{self.method} {self.url} failed with HTTP {self.status_code}".strip()
        if detail:
            text = f"{text}: {detail}"
        return text


class ValidationError(ServiceError):
    """The service rejected the payload (duplicate unique field, missing value...)."""

    @property
    def details(self) -> Dict[str, Any]:
        if isinstance(self.payload, dict):
            return self.payload.get("details") or {}
        return {}


class NotFoundError(ServiceError):
    """The addressed record does not exist."""


__all__ = [
    "HelpdeskError",
    "ConfigurationError",
    "TransportError",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "CancelledError",
]

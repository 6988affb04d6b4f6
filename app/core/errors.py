from __future__ import annotations

from typing import Any

_NO_DETAILS = object()


class ProxyError(Exception):
    """Base for errors rendered to clients as ``{"message": ..., "details": ...}``."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = _NO_DETAILS,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self._details = details

    @property
    def has_details(self) -> bool:
        return self._details is not _NO_DETAILS

    @property
    def details(self) -> Any:
        return None if self._details is _NO_DETAILS else self._details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.has_details:
            body["details"] = self._details
        return body


class ConfigurationError(ProxyError):
    status_code = 503


class InvalidRequestError(ProxyError):
    status_code = 400


class UpstreamError(ProxyError):
    """Non-2xx response or transport failure while talking to TMDb."""

    status_code = 500

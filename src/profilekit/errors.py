from __future__ import annotations

from enum import Enum

class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"

DEFAULT_MESSAGES = {
    ErrorKind.VALIDATION: "Widget configuration is incomplete",
    ErrorKind.NETWORK: "Network request failed",
    ErrorKind.RATE_LIMITED: "GitHub API rate limit exceeded. Please try again later.",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.UNKNOWN: "Unknown error occurred",
}

class WidgetError(Exception):
    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self.detail or DEFAULT_MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"WidgetError({self.kind.value!r}, {self.detail!r})"

def error_for_status(status: int, reason: str = "", *, not_found: str | None = None) -> WidgetError:
    if status == 404:
        return WidgetError(ErrorKind.NOT_FOUND, not_found or f"Not found: {status} {reason}".strip())
    if status in (403, 429):
        return WidgetError(ErrorKind.RATE_LIMITED)
    return WidgetError(ErrorKind.UNKNOWN, f"API returned {status}: {reason}".rstrip(": "))

def as_widget_error(exc: BaseException) -> WidgetError:
    if isinstance(exc, WidgetError):
        return exc
    return WidgetError(ErrorKind.UNKNOWN, str(exc) or type(exc).__name__)

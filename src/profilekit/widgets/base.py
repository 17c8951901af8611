from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Any, Mapping

from ..endpoints import DEFAULT_BASE_URL, ImageEndpoint
from ..errors import ErrorKind, WidgetError
from ..github import GitHubClient

@dataclass(frozen=True)
class WidgetResult:
    name: str
    title: str
    markdown: str
    status: str = "ready"
    artifact: Any = None
    error: WidgetError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class Services:
    endpoint: ImageEndpoint
    github: GitHubClient

    @property
    def base_url(self) -> str:
        return self.endpoint.base_url

class MarkdownKind(Protocol):
    """A widget that only renders markdown from its config."""

    name: str
    title: str
    PLACEHOLDER: str

    def parse(self, raw: Mapping[str, Any]) -> Any:
        ...

    def synthesize(self, config: Any, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
        ...

class WidgetKind(MarkdownKind, Protocol):
    """A widget whose artifact is generated and cached by a store."""

    TTL: float
    KEY_FIELDS: tuple[str, ...]

    def validate(self, config: Any) -> None:
        ...

    async def produce(self, config: Any, services: Services) -> Any:
        ...

def option(raw: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Read ``key`` from a widget mapping, accepting the camelCase spelling too."""
    if key in raw:
        return raw[key]
    head, *rest = key.split("_")
    camel = head + "".join(part.title() for part in rest)
    return raw.get(camel, default)

def require(ok: bool, message: str) -> None:
    if not ok:
        raise WidgetError(ErrorKind.VALIDATION, message)

def flag(value: Any) -> str:
    return "true" if value else "false"

def heading(title: str, hide: bool) -> str:
    return "" if hide else f"## {title}\n\n"

def text(value: Any) -> str | None:
    return None if value is None else str(value)

def integer(value: Any, default: int | None = None) -> int | None:
    """``int(value)``, or ``default`` when the value is missing or not a number."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

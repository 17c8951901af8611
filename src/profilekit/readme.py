from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import asyncio
import logging

from .config import Config
from .errors import as_widget_error
from .storage import ConfigStorage
from .store import Status, WidgetStore
from .widgets import REGISTRY
from .widgets.base import MarkdownKind, Services, WidgetKind, WidgetResult

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ReadmeData:
    results: list[WidgetResult]
    header: str = ""

    @property
    def markdown(self) -> str:
        blocks = [self.header.strip()] if self.header.strip() else []
        blocks.extend(r.markdown.strip() for r in self.results if r.markdown.strip())
        return "\n\n".join(blocks) + "\n"

def make_store(kind: WidgetKind, services: Services, **kwargs) -> WidgetStore:
    return WidgetStore(kind, partial(kind.produce, services=services), **kwargs)

def storage_key(name: str) -> str:
    return f"profilekit.widget.{name}"

async def collect_widget(
    kind: MarkdownKind,
    options: dict,
    services: Services,
    *,
    offline: bool = False,
    **store_opts,
) -> WidgetResult:
    config = kind.parse(options)
    markdown = kind.synthesize(config, base_url=services.base_url)
    if offline or getattr(kind, "produce", None) is None:
        return WidgetResult(name=kind.name, title=kind.title, markdown=markdown, status=Status.IDLE.value)

    store = make_store(kind, services, **store_opts)
    store.mount()
    try:
        store.generate(config)
        state = await store.settle()
    finally:
        store.unmount()
    summarize = getattr(kind, "summarize", None)
    if summarize is not None and state.status is Status.READY:
        markdown = markdown.rstrip("\n") + "\n\n" + summarize(config, state.artifact)
    return WidgetResult(
        name=kind.name,
        title=kind.title,
        markdown=markdown,
        status=state.status.value,
        artifact=state.artifact,
        error=state.error,
    )

async def collect_all(
    cfg: Config,
    services: Services,
    *,
    storage: ConfigStorage | None = None,
    offline: bool = False,
) -> ReadmeData:
    store_opts = {
        "quiet_period": cfg.debounce_seconds,
        "max_retries": cfg.max_retries,
        "backoff_base": cfg.backoff_seconds,
    }

    async def one(name: str) -> WidgetResult:
        kind = REGISTRY.get(name)
        if kind is None:
            return WidgetResult(name=name, title=name, markdown="", status=Status.ERROR.value,
                                error=as_widget_error(ValueError(f"Unknown widget: {name}")))
        opts = dict(store_opts)
        if hasattr(kind, "MAX_RETRIES"):
            # kinds that pin their retry count keep it
            opts["max_retries"] = None
        try:
            options = cfg.widget_options(name)
            if storage is not None:
                if options:
                    storage.save(storage_key(name), options)
                else:
                    options = storage.load(storage_key(name), {}) or {}
            return await collect_widget(kind, options, services, offline=offline, **opts)
        except Exception as e:
            logger.exception("widget %s failed", name)
            return WidgetResult(name=name, title=kind.title, markdown=kind.PLACEHOLDER,
                                status=Status.ERROR.value, error=as_widget_error(e))

    results = await asyncio.gather(*(one(name) for name in cfg.widget_order))
    return ReadmeData(results=list(results), header=cfg.header)

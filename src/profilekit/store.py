from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from typing import Any
import asyncio
import logging

from .cache import TTLCache
from .errors import ErrorKind, WidgetError, as_widget_error
from .generator import DEFAULT_BACKOFF, DEFAULT_MAX_RETRIES, DEFAULT_QUIET_PERIOD, DebouncedGenerator, Producer
from .hashing import config_hash
from .widgets.base import WidgetKind

logger = logging.getLogger(__name__)

class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"

@dataclass(frozen=True)
class WidgetState:
    status: Status = Status.IDLE
    artifact: Any = None
    error: WidgetError | None = None
    last_config_hash: str = ""
    mounted: bool = False

    @property
    def loading(self) -> bool:
        return self.status is Status.LOADING

class WidgetStore:
    """Generation state for one widget kind.

    At most one generation is in flight. Each dispatch carries a sequence
    number and a completion is committed only while that number is still
    current and the store is mounted.
    """

    def __init__(
        self,
        kind: WidgetKind,
        produce: Producer,
        *,
        cache: TTLCache | None = None,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        max_retries: int | None = None,
        backoff_base: float = DEFAULT_BACKOFF,
    ) -> None:
        self.kind = kind
        if cache is None:
            cache = TTLCache(kind.TTL, capacity=getattr(kind, "CACHE_CAPACITY", None))
        self.cache = cache
        if max_retries is None:
            max_retries = getattr(kind, "MAX_RETRIES", DEFAULT_MAX_RETRIES)
        self._generator = DebouncedGenerator(
            produce, quiet_period=quiet_period, max_retries=max_retries, backoff_base=backoff_base
        )
        self.state = WidgetState()
        self._seq = 0
        self._config: Any = None
        self._task: asyncio.Task | None = None

    @property
    def artifact(self) -> Any:
        return self.state.artifact

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> WidgetError | None:
        return self.state.error

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def sequence(self) -> int:
        return self._seq

    def mount(self) -> None:
        self.state = replace(self.state, mounted=True)

    def unmount(self) -> None:
        self._supersede()
        status = Status.IDLE if self.state.loading else self.state.status
        # a generation cut short must run again after remount
        key = "" if self.state.loading else self.state.last_config_hash
        self.state = replace(self.state, mounted=False, status=status, last_config_hash=key)

    def reset(self) -> None:
        self._supersede()
        self._config = None
        self.state = WidgetState(mounted=self.state.mounted)

    def generate(self, config: Any) -> bool:
        """Request an artifact for ``config``. Returns True if a generation was dispatched."""
        if not self.state.mounted:
            logger.debug("%s: dropping generate() while unmounted", self.kind.name)
            return False

        try:
            self.kind.validate(config)
        except WidgetError as e:
            if e.kind is not ErrorKind.VALIDATION:
                raise
            logger.debug("%s: %s", self.kind.name, e.message)
            self.reset()
            return False

        key = config_hash(config, self.kind.KEY_FIELDS)
        if key == self.state.last_config_hash and self.state.status is not Status.IDLE:
            return False

        self._config = config
        cached = self.cache.get(key)
        if cached is not None:
            self._supersede()
            self.state = replace(
                self.state, status=Status.READY, artifact=cached.artifact, error=None, last_config_hash=key
            )
            return False

        self._dispatch(config, key, immediate=False)
        return True

    def refresh(self) -> bool:
        """Regenerate the last config now, skipping the quiet period and the cache."""
        if not self.state.mounted or self._config is None:
            return False
        self._dispatch(self._config, config_hash(self._config, self.kind.KEY_FIELDS), immediate=True)
        return True

    async def settle(self) -> WidgetState:
        while self._task is not None and not self._task.done():
            await asyncio.wait([self._task])
            # let the done-callback commit before reading state
            await asyncio.sleep(0)
        return self.state

    def _supersede(self) -> None:
        self._generator.cancel()
        self._task = None
        self._seq += 1

    def _dispatch(self, config: Any, key: str, *, immediate: bool) -> None:
        self._seq += 1
        self.state = replace(self.state, status=Status.LOADING, error=None, last_config_hash=key)
        if immediate:
            task = self._generator.refresh(config)
        else:
            task = self._generator.schedule(config)
        task.add_done_callback(partial(self._complete, self._seq, key))
        self._task = task

    def _complete(self, seq: int, key: str, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if seq != self._seq or not self.state.mounted:
            logger.debug("%s: discarding stale completion #%d (current #%d)", self.kind.name, seq, self._seq)
            return
        if exc is not None:
            error = as_widget_error(exc)
            logger.warning("%s: generation failed: %s", self.kind.name, error.message)
            self.state = replace(self.state, status=Status.ERROR, error=error)
            return
        artifact = task.result()
        self.cache.put(key, artifact)
        self.state = replace(self.state, status=Status.READY, artifact=artifact, error=None)

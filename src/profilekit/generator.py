from __future__ import annotations

from typing import Any, Awaitable, Callable
import asyncio
import logging

from .errors import ErrorKind, WidgetError

logger = logging.getLogger(__name__)

Producer = Callable[[Any], Awaitable[Any]]

DEFAULT_QUIET_PERIOD = 0.3
DEFAULT_MAX_RETRIES = 2
DEFAULT_BACKOFF = 1.0

class DebouncedGenerator:
    """Coalesces rapid config changes into one ``produce`` call.

    ``schedule`` restarts the quiet-period countdown on every call; only the
    last config scheduled inside the window is produced. Failures are retried
    ``max_retries`` times with a ``2**attempt * backoff_base`` second delay,
    then re-raised from the task. ``attempt`` is back at zero after every
    logical request, whether it succeeded or not.
    """

    def __init__(
        self,
        produce: Producer,
        *,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_base: float = DEFAULT_BACKOFF,
    ) -> None:
        self._produce = produce
        self.quiet_period = quiet_period
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.attempt = 0
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, config: Any) -> asyncio.Task:
        return self._start(config, self.quiet_period)

    def refresh(self, config: Any) -> asyncio.Task:
        return self._start(config, 0)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.attempt = 0

    def _start(self, config: Any, delay: float) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(config, delay))
        return self._task

    def backoff_delay(self, attempt: int) -> float:
        return (2 ** attempt) * self.backoff_base

    async def _run(self, config: Any, delay: float) -> Any:
        if delay > 0:
            await asyncio.sleep(delay)
        self.attempt = 0
        while True:
            try:
                artifact = await self._produce(config)
            except Exception as e:
                permanent = isinstance(e, WidgetError) and e.kind is ErrorKind.VALIDATION
                if permanent or self.attempt >= self.max_retries:
                    logger.debug("giving up after %d retries: %s", self.attempt, e)
                    self.attempt = 0
                    raise
                self.attempt += 1
                wait = self.backoff_delay(self.attempt)
                logger.info("generation failed (%s), retry %d/%d in %.1fs", e, self.attempt, self.max_retries, wait)
                await asyncio.sleep(wait)
                continue
            self.attempt = 0
            return artifact

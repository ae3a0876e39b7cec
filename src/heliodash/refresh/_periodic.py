"""Periodic refresh with teardown-safe result application.

Each load cycle captures the current generation number before it starts.
Its result is applied only if the generation is unchanged when the load
finishes; :meth:`PeriodicRefresh.stop` bumps the generation, so a cycle
that completes after teardown is discarded instead of mutating state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_error(exc: Exception) -> None:
    logger.warning("Refresh cycle failed: %s", exc, exc_info=exc)


class PeriodicRefresh(Generic[T]):
    """Re-run a loader on a fixed interval and apply its results.

    Args:
        load: Zero-argument coroutine function producing a result.
        apply: Callback receiving each current-generation result.
        interval: Seconds between the end of one cycle and the start of
            the next.
        on_error: Callback receiving a load failure. Defaults to logging
            a warning. Previously applied state is left untouched.

    Raises:
        ValueError: If *interval* is not positive.
    """

    def __init__(
        self,
        load: Callable[[], Awaitable[T]],
        apply: Callable[[T], None],
        interval: float,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._load = load
        self._apply = apply
        self._interval = float(interval)
        self._on_error = on_error or _log_error
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        """Seconds between cycles."""
        return self._interval

    @property
    def generation(self) -> int:
        """Current generation; bumped by every :meth:`stop`."""
        return self._generation

    @property
    def running(self) -> bool:
        """True while the background task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background loop; the first cycle runs immediately.

        Must be called from a running event loop. Calling it while
        already running does nothing.
        """
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Invalidate outstanding cycles and cancel the background loop."""
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def refresh_now(self) -> bool:
        """Run one guarded cycle outside the schedule.

        Returns:
            True if a result was applied, False if the load failed or the
            result was stale.
        """
        generation = self._generation
        try:
            result = await self._load()
        except Exception as exc:
            if generation == self._generation:
                self._on_error(exc)
            return False

        if generation != self._generation:
            logger.debug("Discarding stale refresh result (generation %d)", generation)
            return False
        self._apply(result)
        return True

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh_now()
            except Exception as exc:
                logger.warning("Refresh cycle aborted: %s", exc, exc_info=True)
            await asyncio.sleep(self._interval)

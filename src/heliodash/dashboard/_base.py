"""Shared plumbing for periodically refreshed views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Generic, TypeVar

from heliodash.refresh import PeriodicRefresh

U = TypeVar("U")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Timeframe:
    """A selectable chart window."""

    label: str
    hours: float

    @property
    def window(self) -> timedelta:
        return timedelta(hours=self.hours)


TIMEFRAMES: tuple[Timeframe, ...] = (
    Timeframe("Full (2 day)", 48),
    Timeframe("12 hours", 12),
    Timeframe("3 hours", 3),
    Timeframe("1 hour", 1),
)

DEFAULT_TIMEFRAME: Timeframe = TIMEFRAMES[1]

KP_WINDOW: Timeframe = TIMEFRAMES[0]
"""The Kp chart always spans the full two days."""


def get_timeframe(label: str) -> Timeframe:
    """Look up a timeframe by its label.

    Raises:
        ValueError: If no timeframe carries *label*.
    """
    for frame in TIMEFRAMES:
        if frame.label == label:
            return frame
    known = ", ".join(repr(f.label) for f in TIMEFRAMES)
    raise ValueError(f"Unknown timeframe {label!r}; expected one of {known}")


class RefreshingView(Generic[U]):
    """Base class for a view that reloads itself on an interval.

    Subclasses implement :meth:`load` (fetch, never mutating state) and
    :meth:`apply` (mutate state from a loaded update). Updates from a
    cycle that finishes after :meth:`stop` are discarded.
    """

    def __init__(self, interval: float) -> None:
        self.loading = True
        self._refresh: PeriodicRefresh[U] = PeriodicRefresh(self.load, self._apply, interval)

    @property
    def interval(self) -> float:
        return self._refresh.interval

    @property
    def running(self) -> bool:
        return self._refresh.running

    def start(self) -> None:
        """Load immediately, then every :attr:`interval` seconds."""
        self._refresh.start()

    def stop(self) -> None:
        """Stop refreshing; results still in flight are dropped."""
        self._refresh.stop()

    async def refresh(self) -> bool:
        """Run one load/apply cycle now.

        Returns:
            True if the update was applied.
        """
        return await self._refresh.refresh_now()

    async def load(self) -> U:
        raise NotImplementedError

    def apply(self, update: U) -> None:
        raise NotImplementedError

    def _apply(self, update: U) -> None:
        self.apply(update)
        self.loading = False

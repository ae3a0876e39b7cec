"""Fan-out / fan-in helpers for concurrent feed fetches.

Two disciplines are provided:

- :func:`gather_all` (all-or-fail): every result is required; the first
  failure cancels the rest of the group and is raised.
- :func:`gather_best_effort`: each fetch succeeds or fails on its own;
  failures are logged and reported per name.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one fetch in a best-effort group.

    Attributes:
        value: The fetched value, or None on failure.
        error: The exception raised, or None on success.
    """

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """True when the fetch succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Run *aws* concurrently and return every result, in argument order.

    On the first exception the remaining tasks are cancelled and awaited,
    then the exception is raised.

    Args:
        *aws: Coroutines or other awaitables.

    Returns:
        Results in the order the awaitables were given.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failed = next(
        (t for t in tasks if t in done and not t.cancelled() and t.exception() is not None),
        None,
    )
    if failed is not None:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed.exception()  # type: ignore[misc]
    return [task.result() for task in tasks]


async def gather_best_effort(**named: Awaitable[Any]) -> dict[str, FetchResult[Any]]:
    """Run the named awaitables concurrently, isolating failures.

    Args:
        **named: Awaitables keyed by a name used in logs and the result.

    Returns:
        Mapping of name to :class:`FetchResult`, in argument order.
    """
    names = list(named)
    outcomes = await asyncio.gather(*named.values(), return_exceptions=True)

    results: dict[str, FetchResult[Any]] = {}
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, Exception):
            logger.warning("Fetch %r failed: %s", name, outcome, exc_info=outcome)
            results[name] = FetchResult(error=outcome)
        else:
            results[name] = FetchResult(value=outcome)
    return results

"""Concurrent fetch groups and periodic refresh.

- :func:`gather_all`: all-or-fail group; the first failure cancels the rest.
- :func:`gather_best_effort`: independent fetches with per-name results.
- :class:`PeriodicRefresh`: interval loop whose results are dropped once
  it has been stopped.
"""

from heliodash.refresh._groups import FetchResult, gather_all, gather_best_effort
from heliodash.refresh._periodic import PeriodicRefresh

__all__ = [
    "FetchResult",
    "PeriodicRefresh",
    "gather_all",
    "gather_best_effort",
]

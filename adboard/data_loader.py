"""
Loading dashboard data and guarding against stale responses
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import date, datetime, time as dtime
from typing import Callable, Hashable, Optional, Tuple

from .config import DashboardConfig
from .errors import FetchError
from .mock_data import DashboardData, fetch_dashboard

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Start and end (inclusive, to the millisecond) of a calendar day."""
    start = datetime.combine(day, dtime.min)
    end = datetime.combine(day, dtime(23, 59, 59, 999_000))
    return start, end


@dataclass(frozen=True)
class LoadState:
    data: Optional[DashboardData] = None
    error: Optional[str] = None
    loading: bool = False
    key: Optional[Hashable] = None          # key of the data currently shown
    pending_key: Optional[Hashable] = None  # key of the newest request in flight
    failed_key: Optional[Hashable] = None


class LoadTracker:
    """
    Issues a token per load; only the newest token may publish.

    A response for an older token (one overtaken by a later date or window
    change) is dropped so it cannot overwrite newer data.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._issued = 0
        self.state = LoadState()

    def begin(self, key: Hashable) -> int:
        with self._lock:
            self._issued += 1
            self.state = replace(self.state, loading=True, error=None, pending_key=key, failed_key=None)
            return self._issued

    def resolve(self, token: int, data: DashboardData) -> bool:
        with self._lock:
            if token != self._issued:
                logger.info("Dropping stale load result (token %s, newest %s)", token, self._issued)
                return False
            self.state = LoadState(data=data, loading=False, key=self.state.pending_key)
            return True

    def fail(self, token: int, error: str) -> bool:
        with self._lock:
            if token != self._issued:
                logger.info("Dropping stale load error (token %s, newest %s): %s", token, self._issued, error)
                return False
            # Previous data stays available but the error is what gets shown
            self.state = replace(
                self.state, error=error, loading=False,
                failed_key=self.state.pending_key, pending_key=None,
            )
            return True

    def needs_load(self, key: Hashable) -> bool:
        """True unless ``key`` is already shown or its last attempt failed."""
        return key not in (self.state.key, self.state.failed_key)


def load_dashboard(
    tracker: LoadTracker,
    day: date,
    window_minutes: int,
    cfg: Optional[DashboardConfig] = None,
    fetch: Callable[..., DashboardData] = fetch_dashboard,
    **fetch_kwargs,
) -> LoadState:
    """
    Run one load for ``day``, single attempt.

    A FetchError is recorded on the tracker instead of raised; the page shows
    it in place of the table.
    """
    key = (day.isoformat(), window_minutes)
    token = tracker.begin(key)
    start, end = day_bounds(day)
    try:
        data = fetch(start, end, cfg=cfg, **fetch_kwargs)
    except FetchError as e:
        logger.warning("Load %s failed: %s", key, e)
        tracker.fail(token, str(e))
        return tracker.state
    tracker.resolve(token, data)
    return tracker.state

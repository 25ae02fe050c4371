"""Performance monitoring utilities for report generation."""
import time
import logging
import threading
import functools
from typing import Any, Callable, Dict, List

logger = logging.getLogger("workforce-reports.perf")


def timed(func: Callable) -> Callable:
    """
    Decorator that measures and logs execution time for synchronous functions.

    Usage::

        @timed
        def contractor_summary(self, contractors):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.debug(
                "function timed",
                extra={
                    "function": func.__qualname__,
                    "duration_ms": duration_ms,
                },
            )
    return wrapper


class PerformanceTracker:
    """
    Thread-safe in-memory tracker for report-generation metrics.

    Tracks:
    - Reports generated, per report type
    - Average build duration per report type
    - Timesheet fallback activations
    - Error count broken down by report type
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._durations: Dict[str, List[float]] = {}   # report_type -> [duration_ms, ...]
        self._error_counts: Dict[str, int] = {}         # report_type -> count
        self._fallbacks: int = 0

    # ------------------------------------------------------------------
    # Public write API
    # ------------------------------------------------------------------

    def record_report(self, report_type: str, duration_ms: float) -> None:
        """Call once per successfully built report."""
        with self._lock:
            self._durations.setdefault(report_type, []).append(duration_ms)

    def record_fallback(self) -> None:
        """Timesheet feed was unavailable and synthetic records were used."""
        with self._lock:
            self._fallbacks += 1

    def record_error(self, report_type: str) -> None:
        with self._lock:
            self._error_counts[report_type] = self._error_counts.get(report_type, 0) + 1

    # ------------------------------------------------------------------
    # Public read API
    # ------------------------------------------------------------------

    def get_metrics(self) -> Dict[str, Any]:
        """
        Return a snapshot of all collected metrics.

        Returns
        -------
        dict with keys:
            reports_generated          : int
            reports_by_type            : dict  {report_type: count}
            avg_duration_ms_by_type    : dict  {report_type: avg_ms}
            timesheet_fallbacks        : int
            error_count                : int
            error_count_by_type        : dict  {report_type: count}
        """
        with self._lock:
            by_type = {rt: len(d) for rt, d in self._durations.items()}
            avgs = {
                rt: round(sum(d) / len(d), 2) if d else 0.0
                for rt, d in self._durations.items()
            }
            return {
                "reports_generated": sum(by_type.values()),
                "reports_by_type": by_type,
                "avg_duration_ms_by_type": avgs,
                "timesheet_fallbacks": self._fallbacks,
                "error_count": sum(self._error_counts.values()),
                "error_count_by_type": dict(self._error_counts),
            }

    def reset(self) -> None:
        """Reset all counters (useful in tests)."""
        with self._lock:
            self._durations.clear()
            self._error_counts.clear()
            self._fallbacks = 0


# Module-level singleton; import this instance everywhere else.
tracker = PerformanceTracker()

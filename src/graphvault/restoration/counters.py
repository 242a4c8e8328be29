"""Thread-safe per-type counters for restore runs."""

import threading
import time
from dataclasses import dataclass, field

from graphvault.graph.models import RestoreType


@dataclass
class RestoreCounters:
    """Thread-safe restored-record counters, one slot per restore type.

    Every file-processing worker increments its type's slot after a successful
    upload, so all mutation goes through ``threading.Lock``. The counters also
    carry the run timer used for the final summary.

    Attributes:
        counts: Records restored per restore type
        started_at: ``time.monotonic()`` value when the run timer started
        _lock: Thread synchronization lock (private)

    Example:
        >>> counters = RestoreCounters()
        >>> counters.start_timer()
        >>> # From worker thread, after a batch of 500 vertices was accepted:
        >>> counters.increment(RestoreType.VERTEX, 500)
        >>> counters.get(RestoreType.VERTEX)
        500
    """

    counts: dict[RestoreType, int] = field(
        default_factory=lambda: {restore_type: 0 for restore_type in RestoreType}
    )
    started_at: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def start_timer(self) -> None:
        """Reset all counters and start the run timer."""
        with self._lock:
            self.counts = {restore_type: 0 for restore_type in RestoreType}
            self.started_at = time.monotonic()

    def increment(self, restore_type: RestoreType, count: int = 1) -> None:
        """Thread-safe increment of a type's counter.

        Args:
            restore_type: Type whose records were restored
            count: Number of records restored (default: 1)
        """
        if count < 0:
            raise ValueError(f"Counters only increase, got count={count}")
        with self._lock:
            self.counts[restore_type] = self.counts.get(restore_type, 0) + count

    def get(self, restore_type: RestoreType) -> int:
        """Return the current count for a type."""
        with self._lock:
            return self.counts.get(restore_type, 0)

    def elapsed(self) -> float:
        """Seconds since ``start_timer()``; 0.0 if the timer never started."""
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at

    def snapshot(self) -> dict[RestoreType, int]:
        """Thread-safe copy of all counters."""
        with self._lock:
            return dict(self.counts)

    def __str__(self) -> str:
        """Return human-readable counters summary."""
        parts = ", ".join(f"{t.tag}={n}" for t, n in self.snapshot().items())
        return f"RestoreCounters({parts}, elapsed={self.elapsed():.1f}s)"

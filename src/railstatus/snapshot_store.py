"""In-memory holder for the latest published snapshot."""

import logging
import threading
from typing import Any, Optional, Tuple

from .models import Snapshot, primed_snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Holds the current snapshot and the raw payload it came from.

    One writer (the poller) replaces both values together; any number of
    readers get them back without touching the network.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._current: Tuple[Snapshot, Optional[Any]] = (primed_snapshot(), None)
        self._publish_count = 0

    def publish(self, snapshot: Snapshot, raw_payload: Optional[Any] = None) -> None:
        """
        Replace the cached snapshot and raw payload in one step.

        Args:
            snapshot: Result of the latest successful cycle.
            raw_payload: Upstream data for debugging, or None.
        """
        with self._lock:
            self._current = (snapshot, raw_payload)
            self._publish_count += 1
        logger.debug(f"Published snapshot with {snapshot.fetch_count} trains")

    def read_pair(self) -> Tuple[Snapshot, Optional[Any]]:
        """Return the snapshot and raw payload from the same publish."""
        with self._lock:
            return self._current

    def read_current(self) -> Snapshot:
        """Return the latest snapshot, or the primed placeholder if none was published."""
        return self.read_pair()[0]

    def read_raw(self) -> Optional[Any]:
        """Return the latest raw payload, if any. Mostly for debugging."""
        return self.read_pair()[1]

    @property
    def publish_count(self) -> int:
        """Number of snapshots published since startup."""
        with self._lock:
            return self._publish_count

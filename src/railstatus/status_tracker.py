"""Main SEPTA late train tracker class."""

import logging
import time
from typing import Any, Optional

from . import config
from .models import Severity, Snapshot, StatusSummary
from .poller import SnapshotPoller
from .septa_client import SEPTAClient
from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def is_stale(snapshot: Snapshot, now: float, max_age: int = config.MAX_AGE_SECONDS) -> bool:
    """True if the snapshot is older than max_age seconds. The primed placeholder always is."""
    return round(now) - snapshot.fetch_time_epoch_seconds > max_age


def apply_staleness(snapshot: Snapshot, now: float, max_age: int = config.MAX_AGE_SECONDS) -> StatusSummary:
    """
    Status to show for a snapshot at a given time.

    Args:
        snapshot: Snapshot read from the store.
        now: Current epoch time in seconds.
        max_age: Maximum age in seconds before the data is ignored.

    Returns:
        The stored status, or an unknown status with no late trains if the
        snapshot is too old.
    """
    if is_stale(snapshot, now, max_age):
        return StatusSummary(severity=Severity.UNKNOWN, message=snapshot.status.message)
    return snapshot.status


class LateTrainTracker:
    """
    Tracks how late SEPTA Regional Rail is running.

    This class provides methods to:
    - Start and stop background polling of the TrainView feed
    - Read the latest snapshot without blocking on the network
    - Get a status that accounts for how old the snapshot is
    """

    def __init__(
        self,
        client: Optional[SEPTAClient] = None,
        store: Optional[SnapshotStore] = None,
        interval: Optional[float] = None,
        max_age: int = config.MAX_AGE_SECONDS,
    ):
        """
        Initialize the tracker.

        Args:
            client: Upstream client. A SEPTAClient with default settings if None.
            store: Snapshot store shared with any other readers. A new one if None.
            interval: Seconds between polling cycles.
            max_age: Seconds after which a snapshot is reported as unknown.
        """
        self.client = client or SEPTAClient()
        self.store = store or SnapshotStore()
        self.max_age = max_age
        self.poller = SnapshotPoller(self.client, self.store, interval=interval)

    def start(self) -> None:
        """Begin polling in the background."""
        logger.info(f"Starting to poll {getattr(self.client, 'feed_url', 'upstream')}")
        self.poller.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop polling after the current cycle and release the client.

        Args:
            timeout: Seconds to wait for the polling thread to exit. Waits
                for the current cycle to finish if None.
        """
        self.poller.stop()
        self.poller.join(timeout)
        close = getattr(self.client, "close", None)
        if close is not None:
            close()
        logger.info("Stopped polling")

    def get_current_snapshot(self) -> Snapshot:
        """Latest published snapshot, or the primed placeholder. Never does I/O."""
        return self.store.read_current()

    def get_raw_payload(self) -> Optional[Any]:
        """Raw upstream data from the latest successful cycle, for debugging."""
        return self.store.read_raw()

    def get_status(self, now: Optional[float] = None) -> StatusSummary:
        """
        Get the status to show right now.

        Args:
            now: Epoch seconds to evaluate at. Defaults to the current time.

        Returns:
            StatusSummary, downgraded to unknown if the data is too old.
        """
        if now is None:
            now = time.time()
        return apply_staleness(self.store.read_current(), now, self.max_age)

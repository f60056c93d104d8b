"""Background loop that fetches, classifies and publishes train status."""

import logging
import threading
import time
from typing import Callable, Optional

from . import config
from .classifier import classify
from .septa_client import FetchError, SEPTAClient
from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SnapshotPoller:
    """
    Runs the fetch -> classify -> publish cycle on a background thread.

    The wait between cycles starts when a cycle finishes, so a slow fetch
    pushes the next one back by the same amount. Cycles never overlap.
    """

    def __init__(
        self,
        client: SEPTAClient,
        store: SnapshotStore,
        interval: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the poller.

        Args:
            client: Anything with a fetch() method returning a payload.
            store: Where successful cycles are published.
            interval: Seconds to wait between cycles. Defaults to config.POLL_INTERVAL_SECONDS.
            clock: Returns the current epoch time; used to stamp snapshots.
        """
        self.client = client
        self.store = store
        self.interval = config.POLL_INTERVAL_SECONDS if interval is None else interval
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> bool:
        """
        Run a single cycle.

        Returns:
            True if a new snapshot was published, False if the cycle failed
            and the previous snapshot was left in place.
        """
        try:
            payload = self.client.fetch()
        except FetchError as e:
            logger.error(f"Fetch failed, keeping previous snapshot: {e}")
            return False
        except Exception:
            logger.exception("Unexpected error while fetching, keeping previous snapshot")
            return False

        try:
            snapshot, raw_data = classify(payload, int(self._clock()))
        except Exception:
            logger.exception("Failed to classify payload, keeping previous snapshot")
            return False

        self.store.publish(snapshot, raw_data)
        logger.info(
            f"Fetched {snapshot.fetch_count} trains, status is {snapshot.status.severity.value}"
        )
        return True

    def start(self) -> None:
        """Start the background polling thread. Does nothing if it is already running."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="railstatus-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the loop to exit once the current cycle is done."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """
        Wait for the polling thread to exit.

        Args:
            timeout: Seconds to wait, or None to wait until it exits.
        """
        if self._thread:
            self._thread.join(timeout)

    @property
    def is_running(self) -> bool:
        """True while the polling thread is alive."""
        return bool(self._thread and self._thread.is_alive())

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            self.run_once()
            logger.info(f"Will fetch data again in {self.interval:g} seconds.")
            self._stop_event.wait(timeout=self.interval)

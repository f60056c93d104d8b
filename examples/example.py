"""Example usage of LateTrainTracker."""

import logging
import sys
import time
from pathlib import Path

# Add src to path so we can import railstatus
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from railstatus.status_tracker import LateTrainTracker

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_status(tracker: LateTrainTracker):
    """
    Display the current Regional Rail status.

    Args:
        tracker: A started LateTrainTracker.
    """
    snapshot = tracker.get_current_snapshot()
    status = tracker.get_status()

    print(f"\n{'='*70}")
    print(f"Regional Rail is: {status.severity.label}")
    print(f"Trains seen: {snapshot.fetch_count}")
    print(f"Last updated: {snapshot.fetch_time_display}")
    print(f"{'='*70}")

    if status.message:
        print(f"  {status.message}")
    for line in status.late_messages:
        print(f"  {line}")
    print()


def main():
    tracker = LateTrainTracker()
    tracker.start()

    try:
        while True:
            # Give the first fetch a moment before printing
            time.sleep(5)
            print_status(tracker)
            time.sleep(55)
    except KeyboardInterrupt:
        print("\nExiting...")
    finally:
        tracker.stop()


if __name__ == "__main__":
    main()

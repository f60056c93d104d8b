"""railstatus - Is SEPTA Regional Rail running late?"""

__version__ = "0.1.0"

from .models import Severity, VehicleRecord, StatusSummary, Snapshot, primed_snapshot
from .classifier import classify
from .septa_client import SEPTAClient, FetchError
from .snapshot_store import SnapshotStore
from .poller import SnapshotPoller
from .status_tracker import LateTrainTracker, apply_staleness, is_stale

__all__ = [
    "LateTrainTracker",
    "SnapshotPoller",
    "SnapshotStore",
    "SEPTAClient",
    "FetchError",
    "classify",
    "apply_staleness",
    "is_stale",
    "Severity",
    "VehicleRecord",
    "StatusSummary",
    "Snapshot",
    "primed_snapshot",
]

"""Data models for the SEPTA late train tracker."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from . import config


class Severity(Enum):
    """How late Regional Rail is running overall."""
    UNKNOWN = "unknown"
    OK = "ok"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _SEVERITY_LABELS[self]


_SEVERITY_LABELS = {
    Severity.UNKNOWN: "(not sure)",
    Severity.OK: "on time",
    Severity.MINOR: "a little late",
    Severity.MAJOR: "late",
}


@dataclass(frozen=True)
class VehicleRecord:
    """Represents one train observed in a single fetch."""
    id: str
    origin: str
    destination: str
    late_minutes: int  # Negative or zero when on time


@dataclass(frozen=True)
class StatusSummary:
    """Severity plus the messages shown alongside it."""
    severity: Severity
    late_messages: Tuple[str, ...] = ()
    message: Optional[str] = None  # Advisory, only set when there is no data


@dataclass(frozen=True)
class Snapshot:
    """The published result of one polling cycle."""
    fetch_count: int
    fetch_time_epoch_seconds: int  # -1 until the first successful fetch
    late_buckets: Mapping[str, Tuple[VehicleRecord, ...]] = field(default_factory=dict)
    status: StatusSummary = field(default_factory=lambda: StatusSummary(Severity.UNKNOWN))

    def __post_init__(self):
        # Readers share one instance, so the buckets are read-only
        frozen = MappingProxyType({name: tuple(records) for name, records in self.late_buckets.items()})
        object.__setattr__(self, "late_buckets", frozen)

    @property
    def fetch_time_display(self) -> str:
        """Local fetch time as text, or "never" for the primed placeholder."""
        if self.fetch_time_epoch_seconds < 0:
            return "never"
        return datetime.fromtimestamp(self.fetch_time_epoch_seconds).strftime("%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> Dict:
        """
        Convert to plain Python types.

        Returns:
            JSON-serializable dictionary of the snapshot.
        """
        return {
            "num": self.fetch_count,
            "time": self.fetch_time_display,
            "time_t": self.fetch_time_epoch_seconds,
            "late": {
                name: [
                    {
                        "id": record.id,
                        "from": record.origin,
                        "to": record.destination,
                        "late": record.late_minutes,
                    }
                    for record in records
                ]
                for name, records in self.late_buckets.items()
            },
            "status": {
                "status": self.status.severity.value,
                "label": self.status.severity.label,
                "late": list(self.status.late_messages),
                "message": self.status.message,
            },
        }


PRIMED_MESSAGE = "No data retrieved yet"


def primed_snapshot() -> Snapshot:
    """Placeholder snapshot served before the first cycle completes."""
    return Snapshot(
        fetch_count=0,
        fetch_time_epoch_seconds=-1,
        late_buckets={name: () for name, _, _ in config.LATE_BUCKETS},
        status=StatusSummary(severity=Severity.UNKNOWN, message=PRIMED_MESSAGE),
    )

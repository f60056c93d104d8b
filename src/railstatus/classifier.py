"""Classifies trains by lateness and builds the published snapshot."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import config
from .models import Severity, Snapshot, StatusSummary, VehicleRecord

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Unable to retrieve train status in the last few minutes."

REQUIRED_FIELDS = ("id", "from", "to", "late")


def split_payload(payload: Optional[Mapping[str, Any]]) -> Tuple[List[Any], Any]:
    """
    Separate the train rows from the diagnostic raw data.

    Args:
        payload: Dictionary as returned by SEPTAClient.fetch().

    Returns:
        (rows, raw_data). raw_data is None when the payload carries none.
    """
    if not payload:
        return [], None
    return list(payload.get("data") or []), payload.get("raw_data")


def parse_records(rows: Iterable[Any]) -> List[VehicleRecord]:
    """
    Convert rows into VehicleRecords, skipping malformed ones.

    Args:
        rows: Dictionaries with id, from, to and late keys.

    Returns:
        List of VehicleRecord objects in input order.
    """
    records: List[VehicleRecord] = []
    for row in rows:
        if not isinstance(row, Mapping) or any(row.get(key) is None for key in REQUIRED_FIELDS):
            logger.warning(f"Skipping malformed train record: {row!r}")
            continue
        try:
            late_minutes = int(row["late"])
        except (TypeError, ValueError):
            logger.warning(f"Skipping train record with bad lateness: {row!r}")
            continue

        records.append(
            VehicleRecord(
                id=str(row["id"]),
                origin=str(row["from"]),
                destination=str(row["to"]),
                late_minutes=late_minutes,
            )
        )
    return records


def get_late(records: Iterable[VehicleRecord], minimum: int, maximum: int) -> Tuple[VehicleRecord, ...]:
    """
    Return trains which are late within a range.

    Args:
        records: Trains to check.
        minimum: The minimum minutes a train must be late before we care.
        maximum: The maximum minutes late after which we DON'T care.

    Returns:
        Matching trains, in the order received.
    """
    return tuple(r for r in records if minimum <= r.late_minutes <= maximum)


def get_severity(late_buckets: Mapping[str, Sequence[VehicleRecord]]) -> Severity:
    """Major if anything is in the major bucket, else minor if anything is in the minor bucket."""
    if late_buckets.get(config.MAJOR_BUCKET):
        return Severity.MAJOR
    if late_buckets.get(config.MINOR_BUCKET):
        return Severity.MINOR
    return Severity.OK


def format_late_message(record: VehicleRecord) -> str:
    """
    Convert a late train into a human-readable status line.

    Args:
        record: A train from one of the late buckets.

    Returns:
        Message such as "Train #101 from A to B is 15 minutes late".
    """
    return (
        f"Train #{record.id} from {record.origin} to {record.destination} "
        f"is {record.late_minutes} minutes late"
    )


def classify(payload: Optional[Mapping[str, Any]], fetch_time: int) -> Tuple[Snapshot, Any]:
    """
    Turn one fetched payload into a snapshot.

    Args:
        payload: Dictionary as returned by SEPTAClient.fetch().
        fetch_time: Epoch seconds to stamp on the snapshot.

    Returns:
        (snapshot, raw_data). raw_data is kept out of the snapshot.
    """
    rows, raw_data = split_payload(payload)
    records = parse_records(rows)

    late_buckets: Dict[str, Tuple[VehicleRecord, ...]] = {
        name: get_late(records, minimum, maximum) for name, minimum, maximum in config.LATE_BUCKETS
    }

    if not records:
        status = StatusSummary(severity=Severity.UNKNOWN, message=NO_DATA_MESSAGE)
    else:
        # Minor bucket first, then major, upstream order within each
        late_messages = tuple(
            format_late_message(record)
            for name, _, _ in config.LATE_BUCKETS
            for record in late_buckets[name]
        )
        status = StatusSummary(severity=get_severity(late_buckets), late_messages=late_messages)

    snapshot = Snapshot(
        fetch_count=len(records),
        fetch_time_epoch_seconds=int(fetch_time),
        late_buckets=late_buckets,
        status=status,
    )
    return snapshot, raw_data

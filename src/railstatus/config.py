"""Configuration constants for the SEPTA late train tracker."""

import os

# SEPTA Regional Rail TrainView feed (JSON list of trains currently running)
FEED_URL = os.getenv("RAILSTATUS_FEED_URL", "https://www3.septa.org/api/TrainView/index.php")

# Seconds of idle time between the end of one cycle and the start of the next
POLL_INTERVAL_SECONDS = int(os.getenv("RAILSTATUS_POLL_INTERVAL", "300"))

# Snapshots older than this are reported as unknown
MAX_AGE_SECONDS = int(os.getenv("RAILSTATUS_MAX_AGE", "600"))

HTTP_TIMEOUT_SECONDS = float(os.getenv("RAILSTATUS_HTTP_TIMEOUT", "10"))

# (bucket name, min minutes late, max minutes late), inclusive, in message order.
# Anything over 60 days late is treated as bad data.
MINOR_BUCKET = "minor"
MAJOR_BUCKET = "major"
LATE_BUCKETS = (
    (MINOR_BUCKET, 10, 29),
    (MAJOR_BUCKET, 30, 86400),
)

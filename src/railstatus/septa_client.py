"""SEPTA TrainView data fetcher."""

import logging
from typing import Any, Dict, List, Optional

import requests

from . import config

logger = logging.getLogger(__name__)

# TrainView field -> our field
FIELD_MAP = {
    "trainno": "id",
    "SOURCE": "from",
    "dest": "to",
    "late": "late",
}


class FetchError(Exception):
    """Raised when the TrainView feed could not be retrieved or understood."""


class SEPTAClient:
    """Fetches the current list of Regional Rail trains from SEPTA."""

    def __init__(self, feed_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the SEPTA client.

        Args:
            feed_url: TrainView URL. Defaults to config.FEED_URL.
            timeout: Request timeout in seconds. Defaults to config.HTTP_TIMEOUT_SECONDS.
        """
        self.feed_url = feed_url or config.FEED_URL
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS
        self._session = requests.Session()

    def fetch(self) -> Dict[str, Any]:
        """
        Make a single request to the TrainView feed.

        Returns:
            Dictionary with "data" (list of rows keyed id/from/to/late) and
            "raw_data" (the decoded response body, for debugging).

        Raises:
            FetchError: On network errors, non-2xx responses or a body that
                is not a JSON list.
        """
        logger.debug(f"Fetching {self.feed_url}")
        try:
            response = self._session.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {self.feed_url}: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {self.feed_url}: {e}") from e

        if not isinstance(body, list):
            raise FetchError(f"Expected a list of trains, got {type(body).__name__}")

        rows = self._normalize_rows(body)
        logger.debug(f"Fetched {len(rows)} trains")
        return {"data": rows, "raw_data": body}

    @staticmethod
    def _normalize_rows(body: List[Any]) -> List[Dict[str, Any]]:
        """Rename TrainView fields. Missing fields are left out for the classifier to reject."""
        rows = []
        for entry in body:
            if not isinstance(entry, dict):
                logger.warning(f"Skipping non-object entry in feed: {entry!r}")
                continue
            rows.append({ours: entry[theirs] for theirs, ours in FIELD_MAP.items() if theirs in entry})
        return rows

    def close(self) -> None:
        """Release the HTTP session."""
        self._session.close()

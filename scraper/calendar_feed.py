"""HTTP fetcher for location calendar feeds."""
import logging

import requests

from processor.exceptions import FetchError
from processor.models import Location

logger = logging.getLogger(__name__)


class CalendarFeedFetcher:
    """Downloads the iCalendar feed of a location."""

    def __init__(self, timeout: int = 30, session: requests.Session = None):
        """
        Initialize the feed fetcher.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
            session: Optional requests session to reuse connections
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, location: Location) -> bytes:
        """
        Fetch the raw body of a location's feed.

        Args:
            location: Location whose calendar_url is fetched

        Returns:
            Feed body as served

        Raises:
            FetchError: If the request fails or returns a non-success status
        """
        logger.info(f"Fetching calendar feed for {location.name}")

        try:
            response = self.session.get(location.calendar_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch feed for {location.short_name}: {e}")
            raise FetchError(
                f"Failed to fetch calendar for {location.short_name} "
                f"({location.calendar_url}): {e}"
            ) from e

        return response.content

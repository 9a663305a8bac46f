"""Keyword filtering and location enrichment of calendar events."""
import logging
from typing import List

from processor.ical_codec import CalendarEvent
from processor.models import Location

logger = logging.getLogger(__name__)


class EventFilter:
    """Keeps events mentioning a keyword and tags them with their location."""

    DEFAULT_KEYWORD = 'yoga'

    def __init__(self, keyword: str = DEFAULT_KEYWORD):
        """
        Initialize the event filter.

        Args:
            keyword: Case-insensitive text to look for in summary or description
        """
        self.keyword = keyword.lower()

    def process(self, events: List[CalendarEvent], location: Location) -> List[CalendarEvent]:
        """
        Filter a location's events and enrich the ones that are kept.

        Args:
            events: Events parsed from the location's feed
            location: Location the feed belongs to

        Returns:
            New list of enriched events, in feed order
        """
        matched = self.filter_events(events)
        logger.info(
            f"Kept {len(matched)} of {len(events)} events for {location.name}"
        )
        return self.enrich_events(matched, location)

    def filter_events(self, events: List[CalendarEvent]) -> List[CalendarEvent]:
        """Return the events that mention the keyword, preserving order."""
        return [event for event in events if self.is_match(event)]

    def is_match(self, event: CalendarEvent) -> bool:
        """
        Check whether the keyword appears in the event summary or description.

        Missing properties are treated as empty text.
        """
        summary = ''
        description = ''

        if event.has_property('SUMMARY'):
            summary = (event.get_property('SUMMARY') or '').lower()
        if event.has_property('DESCRIPTION'):
            description = (event.get_property('DESCRIPTION') or '').lower()

        return self.keyword in summary or self.keyword in description

    def enrich_events(self, events: List[CalendarEvent], location: Location) -> List[CalendarEvent]:
        """
        Tag events with their location.

        Each event is copied; the copy gets the location name appended as a
        category and its LOCATION replaced by the location address. The
        events passed in are left unchanged.

        Args:
            events: Events to enrich
            location: Source location

        Returns:
            List of enriched copies
        """
        enriched = []

        for event in events:
            annotated = event.copy()
            annotated.add_category(location.name)
            annotated.set_location(location.address)
            enriched.append(annotated)

        return enriched

"""Builds merged calendars from per-location event lists."""
from typing import Dict, List, Sequence

from processor.ical_codec import CalendarEvent
from processor.models import MergedCalendar


class CalendarMerger:
    """Combines the events of several locations into one calendar."""

    DEFAULT_CALENDAR_NAME = 'Triangle Rock Club Yoga'

    def __init__(self, calendar_name: str = DEFAULT_CALENDAR_NAME):
        self.calendar_name = calendar_name

    def build_calendar(
        self,
        events_by_location: Dict[str, List[CalendarEvent]],
        location_keys: Sequence[str]
    ) -> MergedCalendar:
        """
        Build the merged calendar for one combination of locations.

        Events are concatenated in the order of location_keys and keep their
        feed order within a location. Event objects are shared, not copied.

        Args:
            events_by_location: Enriched events keyed by location short name
            location_keys: Short names of the locations to include

        Returns:
            MergedCalendar for the combination
        """
        events = []
        for key in location_keys:
            events.extend(events_by_location.get(key, []))

        return MergedCalendar(
            name=self.calendar_name,
            location_keys=list(location_keys),
            events=events
        )


def calendar_key(folder: str, location_keys: Sequence[str]) -> str:
    """
    Object key for a combination, e.g. ``calendars/A_B.ical``.

    Keys are sorted so the name depends only on which locations are included.
    """
    return f"{folder}/{'_'.join(sorted(location_keys))}.ical"

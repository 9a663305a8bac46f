"""iCalendar parsing and serialization behind a narrow interface."""
import logging
from typing import List, Optional, Protocol

from icalendar import Calendar, Event

from processor.exceptions import ParseError
from processor.models import MergedCalendar

logger = logging.getLogger(__name__)


class CalendarEvent(Protocol):
    """Single calendar entry as seen by the filter and merger."""

    def has_property(self, name: str) -> bool:
        ...

    def get_property(self, name: str) -> Optional[str]:
        ...

    def categories(self) -> List[str]:
        ...

    def add_category(self, category: str) -> None:
        ...

    def set_location(self, location: str) -> None:
        ...

    def set_summary(self, summary: str) -> None:
        ...

    def set_description(self, description: str) -> None:
        ...

    def copy(self) -> 'CalendarEvent':
        ...


class CalendarCodec(Protocol):
    """Converts feed bytes to events and merged calendars to bytes."""

    def parse(self, data: bytes) -> List[CalendarEvent]:
        ...

    def serialize(self, calendar: MergedCalendar) -> bytes:
        ...


class ICalendarEvent:
    """CalendarEvent backed by an ``icalendar.Event`` component."""

    def __init__(self, component: Event):
        self.component = component

    def has_property(self, name: str) -> bool:
        return name in self.component

    def get_property(self, name: str) -> Optional[str]:
        value = self.component.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            value = value[0]
        if hasattr(value, 'to_ical') and not isinstance(value, str):
            return value.to_ical().decode('utf-8')
        return str(value)

    def categories(self) -> List[str]:
        value = self.component.get('CATEGORIES')
        if value is None:
            return []
        if not isinstance(value, list):
            value = [value]
        return [str(cat) for entry in value for cat in entry.cats]

    def add_category(self, category: str) -> None:
        self.component.add('CATEGORIES', [category])

    def set_location(self, location: str) -> None:
        self._replace('LOCATION', location)

    def set_summary(self, summary: str) -> None:
        self._replace('SUMMARY', summary)

    def set_description(self, description: str) -> None:
        self._replace('DESCRIPTION', description)

    def copy(self) -> 'ICalendarEvent':
        """
        Return an independent event with the same properties.

        Property values are shared; multi-valued properties get their own
        list so that adding to the copy leaves the original untouched.
        """
        clone = Event()
        for name, value in self.component.items():
            clone[name] = list(value) if isinstance(value, list) else value
        clone.subcomponents = list(self.component.subcomponents)
        return ICalendarEvent(clone)

    def _replace(self, name: str, value: str) -> None:
        self.component.pop(name, None)
        self.component.add(name, value)

    def __repr__(self) -> str:
        return f"ICalendarEvent(summary={self.get_property('SUMMARY')!r})"


class ICalendarCodec:
    """CalendarCodec implemented with the ``icalendar`` library."""

    PRODID = '-//Triangle Rock Club Yoga//Calendar Sync//EN'

    def parse(self, data: bytes) -> List[ICalendarEvent]:
        """
        Parse iCalendar text into events.

        Args:
            data: Feed body with LF line endings

        Returns:
            List of ICalendarEvent objects in feed order

        Raises:
            ParseError: If the feed is not valid iCalendar text
        """
        try:
            calendar = Calendar.from_ical(data)
        except ValueError as e:
            raise ParseError(f"Invalid iCalendar data: {e}") from e

        events = [ICalendarEvent(component) for component in calendar.walk('VEVENT')]
        logger.debug(f"Parsed {len(events)} events")
        return events

    def serialize(self, calendar: MergedCalendar) -> bytes:
        """
        Serialize a merged calendar to iCalendar bytes.

        Args:
            calendar: MergedCalendar whose events are ICalendarEvent objects

        Returns:
            Encoded VCALENDAR document
        """
        document = Calendar()
        document.add('prodid', self.PRODID)
        document.add('version', '2.0')
        document.add('x-wr-calname', calendar.name)

        for event in calendar.events:
            document.add_component(event.component)

        return document.to_ical()

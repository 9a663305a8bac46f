"""Shared fixtures and in-memory test doubles."""
import pytest

from processor.exceptions import FetchError, ParseError
from processor.models import Location


class MemoryEvent:
    """In-memory CalendarEvent used in place of an icalendar component."""

    def __init__(self, uid, summary=None, description=None, location=None, categories=None):
        self.uid = uid
        self.properties = {}
        self._categories = list(categories or [])
        if summary is not None:
            self.properties['SUMMARY'] = summary
        if description is not None:
            self.properties['DESCRIPTION'] = description
        if location is not None:
            self.properties['LOCATION'] = location

    def has_property(self, name):
        return name.upper() in self.properties

    def get_property(self, name):
        return self.properties.get(name.upper())

    def categories(self):
        return list(self._categories)

    def add_category(self, category):
        self._categories.append(category)

    def set_location(self, location):
        self.properties['LOCATION'] = location

    def set_summary(self, summary):
        self.properties['SUMMARY'] = summary

    def set_description(self, description):
        self.properties['DESCRIPTION'] = description

    def copy(self):
        clone = MemoryEvent(self.uid, categories=self._categories)
        clone.properties = dict(self.properties)
        return clone


class MemoryCodec:
    """CalendarCodec returning canned events for known feed bodies."""

    def __init__(self, feeds):
        self.feeds = feeds

    def parse(self, data):
        if data not in self.feeds:
            raise ParseError(f"Unknown feed: {data!r}")
        return list(self.feeds[data])

    def serialize(self, calendar):
        uids = ','.join(event.uid for event in calendar.events)
        return f"{calendar.name}|{uids}".encode('utf-8')


class MemoryStorage:
    """Object store keeping objects in a dict."""

    def __init__(self, objects=None, fail_on=None):
        self.objects = dict(objects or {})
        self.fail_on = fail_on
        self.uploads = []

    def download(self, key):
        if key not in self.objects:
            raise KeyError(key)
        return self.objects[key]

    def upload(self, data, key):
        if key == self.fail_on:
            raise IOError(f"write refused for {key}")
        self.uploads.append(key)
        self.objects[key] = data


class MemoryFetcher:
    """Feed fetcher returning canned bodies keyed by short name."""

    def __init__(self, feeds, failing=()):
        self.feeds = feeds
        self.failing = set(failing)
        self.fetched = []

    def fetch(self, location):
        self.fetched.append(location.short_name)
        if location.short_name in self.failing:
            raise FetchError(f"Failed to fetch calendar for {location.short_name}")
        return self.feeds[location.short_name]


@pytest.fixture
def make_event():
    """Factory for in-memory events."""
    return MemoryEvent


@pytest.fixture
def memory_codec():
    return MemoryCodec


@pytest.fixture
def memory_storage():
    return MemoryStorage


@pytest.fixture
def memory_fetcher():
    return MemoryFetcher


@pytest.fixture
def studio_a():
    return Location(
        name='Studio A',
        short_name='A',
        address='123 Main St',
        calendar_url='https://example.com/a.ics'
    )


@pytest.fixture
def studio_b():
    return Location(
        name='Studio B',
        short_name='B',
        address='456 Oak Ave',
        calendar_url='https://example.com/b.ics'
    )


SAMPLE_ICAL = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test Calendar//EN
BEGIN:VEVENT
UID:1
SUMMARY:Morning Yoga
DTSTART:20250921T080000Z
DTEND:20250921T090000Z
DESCRIPTION:A relaxing yoga class
END:VEVENT
BEGIN:VEVENT
UID:2
SUMMARY:Spin Class
DTSTART:20250921T100000Z
DTEND:20250921T110000Z
DESCRIPTION:High intensity spin
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def sample_ical():
    """Feed with one yoga event and one spin event, using CRLF line endings."""
    return SAMPLE_ICAL.replace('\n', '\r\n').encode('utf-8')

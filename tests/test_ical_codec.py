"""Unit tests for the icalendar-backed codec."""
import pytest
from icalendar import Calendar, Event

from processor.exceptions import ParseError
from processor.ical_codec import ICalendarCodec, ICalendarEvent
from processor.models import MergedCalendar
from scraper.line_endings import clean_line_endings


class TestICalendarEvent:
    """Test cases for ICalendarEvent accessors."""

    def test_property_access(self):
        component = Event()
        component.add('summary', 'Morning Yoga')

        event = ICalendarEvent(component)

        assert event.has_property('SUMMARY')
        assert event.get_property('SUMMARY') == 'Morning Yoga'
        assert not event.has_property('DESCRIPTION')
        assert event.get_property('DESCRIPTION') is None

    def test_setters_replace_values(self):
        component = Event()
        event = ICalendarEvent(component)

        event.set_summary('First')
        event.set_summary('Second')
        event.set_description('Flow class')
        event.set_location('123 Main St')
        event.set_location('456 Oak Ave')

        assert event.get_property('SUMMARY') == 'Second'
        assert event.get_property('DESCRIPTION') == 'Flow class'
        assert event.get_property('LOCATION') == '456 Oak Ave'

    def test_add_category_appends(self):
        component = Event()
        component.add('categories', ['Fitness'])
        event = ICalendarEvent(component)

        event.add_category('Studio A')

        assert event.categories() == ['Fitness', 'Studio A']

    def test_copy_is_independent(self):
        component = Event()
        component.add('summary', 'Morning Yoga')
        component.add('categories', ['Fitness'])
        event = ICalendarEvent(component)

        clone = event.copy()
        clone.add_category('Studio A')
        clone.set_location('123 Main St')

        assert clone.get_property('SUMMARY') == 'Morning Yoga'
        assert clone.categories() == ['Fitness', 'Studio A']
        assert event.categories() == ['Fitness']
        assert not event.has_property('LOCATION')


class TestICalendarCodec:
    """Test cases for ICalendarCodec."""

    def test_parse_events(self, sample_ical):
        events = ICalendarCodec().parse(clean_line_endings(sample_ical))

        assert len(events) == 2
        assert events[0].get_property('SUMMARY') == 'Morning Yoga'
        assert events[0].get_property('DESCRIPTION') == 'A relaxing yoga class'
        assert events[1].get_property('SUMMARY') == 'Spin Class'

    def test_parse_calendar_without_events(self):
        data = b"BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:-//Test//EN\nEND:VCALENDAR\n"
        assert ICalendarCodec().parse(data) == []

    def test_parse_invalid_data(self):
        with pytest.raises(ParseError):
            ICalendarCodec().parse(b"this is not a calendar\n")

    def test_serialize_merged_calendar(self, sample_ical):
        codec = ICalendarCodec()
        events = codec.parse(clean_line_endings(sample_ical))
        yoga = events[0].copy()
        yoga.add_category('Studio A')
        yoga.set_location('123 Main St')

        data = codec.serialize(
            MergedCalendar(name='Triangle Rock Club Yoga', location_keys=['A'], events=[yoga])
        )

        calendar = Calendar.from_ical(data)
        assert str(calendar['X-WR-CALNAME']) == 'Triangle Rock Club Yoga'
        assert str(calendar['VERSION']) == '2.0'

        output_events = calendar.walk('VEVENT')
        assert len(output_events) == 1
        assert str(output_events[0]['SUMMARY']) == 'Morning Yoga'
        assert str(output_events[0]['LOCATION']) == '123 Main St'
        assert b'CATEGORIES:Studio A' in data
        assert b'DTSTART:20250921T080000Z' in data

    def test_serialize_empty_calendar(self):
        data = ICalendarCodec().serialize(
            MergedCalendar(name='Empty', location_keys=['A'])
        )

        assert data.startswith(b'BEGIN:VCALENDAR')
        assert b'X-WR-CALNAME:Empty' in data
        assert b'BEGIN:VEVENT' not in data

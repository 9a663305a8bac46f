"""Orchestrates loading, filtering, merging and writing of calendars."""
import logging
from typing import Dict, List

from processor.calendar_merger import CalendarMerger, calendar_key
from processor.combinations import generate_combinations
from processor.event_filter import EventFilter
from processor.exceptions import ParseError, PersistError
from processor.ical_codec import CalendarCodec, CalendarEvent
from processor.locations import load_locations
from processor.models import Location, MergedCalendar, PipelineResult
from scraper.line_endings import clean_line_endings

logger = logging.getLogger(__name__)


class CalendarPipeline:
    """
    Runs one full calendar sync.

    The run has four phases: load locations, fetch and filter each
    location's events, merge one calendar per combination of locations,
    and write every merged calendar. The first error aborts the run;
    calendars written before the failure are left in place.
    """

    def __init__(
        self,
        storage,
        fetcher,
        codec: CalendarCodec,
        event_filter: EventFilter,
        merger: CalendarMerger,
        locations_key: str,
        calendar_folder: str
    ):
        """
        Initialize the pipeline with its collaborators.

        Args:
            storage: Object store with ``download(key)`` and ``upload(data, key)``
            fetcher: Feed fetcher with ``fetch(location)`` returning bytes
            codec: Calendar parser/serializer
            event_filter: Keyword filter and enricher
            merger: Builder for merged calendars
            locations_key: Object key of the locations config
            calendar_folder: Prefix for written calendar keys
        """
        self.storage = storage
        self.fetcher = fetcher
        self.codec = codec
        self.event_filter = event_filter
        self.merger = merger
        self.locations_key = locations_key
        self.calendar_folder = calendar_folder

    def run(self) -> PipelineResult:
        """
        Execute all phases in order.

        Returns:
            PipelineResult describing the run

        Raises:
            CalendarSyncError: On the first failure of any phase
        """
        locations = self.load_locations()
        events_by_location = self.load_calendar_events(locations)
        calendars = self.build_calendars(events_by_location)
        written = self.write_calendars(calendars)

        return PipelineResult(
            locations_loaded=len(locations),
            events_by_location={
                key: len(events) for key, events in events_by_location.items()
            },
            calendars_written=written
        )

    def load_locations(self) -> List[Location]:
        return load_locations(self.storage, self.locations_key)

    def load_calendar_events(self, locations: List[Location]) -> Dict[str, List[CalendarEvent]]:
        """
        Fetch, normalize, parse, filter and enrich the events of every location.

        Args:
            locations: Locations in load order

        Returns:
            Enriched events keyed by location short name
        """
        events_by_location = {}

        for location in locations:
            logger.info(f"Getting events for {location.name}")
            feed = clean_line_endings(self.fetcher.fetch(location))

            try:
                events = self.codec.parse(feed)
            except ParseError as e:
                raise ParseError(
                    f"Failed to parse calendar for {location.short_name}: {e}"
                ) from e

            events_by_location[location.short_name] = self.event_filter.process(
                events, location
            )

        return events_by_location

    def build_calendars(
        self,
        events_by_location: Dict[str, List[CalendarEvent]]
    ) -> List[MergedCalendar]:
        """
        Merge one calendar per non-empty combination of locations.

        Args:
            events_by_location: Enriched events keyed by location short name

        Returns:
            MergedCalendar objects in combination order
        """
        keys = sorted(events_by_location)
        combinations = generate_combinations(keys)
        logger.info(
            f"Building {len(combinations)} calendars for {len(keys)} locations"
        )

        return [
            self.merger.build_calendar(events_by_location, combination)
            for combination in combinations
        ]

    def write_calendars(self, calendars: List[MergedCalendar]) -> List[str]:
        """
        Serialize and upload each calendar.

        Args:
            calendars: Merged calendars to write

        Returns:
            Object keys written, in write order

        Raises:
            PersistError: If serialization or upload of a calendar fails
        """
        written = []

        for calendar in calendars:
            key = calendar_key(self.calendar_folder, calendar.location_keys)
            logger.info(f"Writing calendar file: {key}")

            try:
                self.storage.upload(self.codec.serialize(calendar), key)
            except Exception as e:
                raise PersistError(f"Failed to write calendar {key!r}: {e}") from e

            written.append(key)

        return written

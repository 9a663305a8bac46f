"""Data models for calendar aggregation."""
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class Location:
    """One calendar source loaded from the locations config."""
    name: str
    short_name: str
    address: str
    calendar_url: str


@dataclass
class MergedCalendar:
    """Combined calendar for one subset of locations."""
    name: str
    location_keys: List[str]
    events: list = field(default_factory=list)


@dataclass
class PipelineResult:
    """Summary of a completed sync run."""
    locations_loaded: int
    events_by_location: Dict[str, int]
    calendars_written: List[str]

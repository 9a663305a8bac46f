"""Error types raised by the calendar sync pipeline."""


class CalendarSyncError(Exception):
    """Base class for errors that abort a calendar sync run."""


class ConfigLoadError(CalendarSyncError):
    """Location configuration could not be read or is malformed."""


class FetchError(CalendarSyncError):
    """A location's calendar feed could not be fetched."""


class ParseError(CalendarSyncError):
    """A fetched feed is not valid iCalendar text."""


class PersistError(CalendarSyncError):
    """A merged calendar could not be written to the object store."""

"""Loading and validation of the locations config."""
import json
import logging
from typing import List

from processor.exceptions import ConfigLoadError
from processor.models import Location

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'shortName', 'address')
URL_FIELDS = ('iCalendarUrl', 'calendarUrl')
# Characters used to build calendar object keys
RESERVED_SHORT_NAME_CHARS = ('_', '/')


def parse_locations(data: bytes) -> List[Location]:
    """
    Parse the locations JSON document.

    The document is an array of objects with ``name``, ``shortName``,
    ``address`` and ``iCalendarUrl`` (``calendarUrl`` is also accepted),
    all non-empty strings. Short names must be unique and may not contain
    ``_`` or ``/``, since they are joined into calendar object keys.

    Args:
        data: Raw JSON bytes

    Returns:
        Locations in document order

    Raises:
        ConfigLoadError: If the document is malformed or short names repeat
    """
    try:
        items = json.loads(data)
    except ValueError as e:
        raise ConfigLoadError(f"Locations config is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise ConfigLoadError("Locations config must be a JSON array")

    locations = []
    seen = set()

    for index, item in enumerate(items):
        location = _item_to_location(index, item)

        if location.short_name in seen:
            raise ConfigLoadError(
                f"Duplicate location short name: {location.short_name}"
            )
        seen.add(location.short_name)
        locations.append(location)

    return locations


def load_locations(storage, key: str) -> List[Location]:
    """
    Download and parse the locations config.

    Args:
        storage: Object store with a ``download(key)`` method
        key: Object key of the locations JSON

    Returns:
        List of Location objects

    Raises:
        ConfigLoadError: If the object cannot be read or parsed
    """
    logger.info(f"Loading locations from {key}")

    try:
        data = storage.download(key)
    except Exception as e:
        raise ConfigLoadError(f"Failed to read locations config {key!r}: {e}") from e

    locations = parse_locations(data)
    logger.info(f"Loaded {len(locations)} locations")
    return locations


def _item_to_location(index: int, item) -> Location:
    if not isinstance(item, dict):
        raise ConfigLoadError(f"Location #{index} is not an object")

    missing = [name for name in REQUIRED_FIELDS if _text_field(item, name) is None]
    url = next(
        (_text_field(item, name) for name in URL_FIELDS if _text_field(item, name)),
        None
    )
    if url is None:
        missing.append(URL_FIELDS[0])

    if missing:
        raise ConfigLoadError(
            f"Location #{index} missing required text fields: {', '.join(missing)}"
        )

    short_name = item['shortName']
    if any(char in short_name for char in RESERVED_SHORT_NAME_CHARS):
        raise ConfigLoadError(
            f"Location #{index} short name {short_name!r} may not contain "
            f"{' or '.join(RESERVED_SHORT_NAME_CHARS)}"
        )

    return Location(
        name=item['name'],
        short_name=short_name,
        address=item['address'],
        calendar_url=url
    )


def _text_field(item: dict, name: str):
    value = item.get(name)
    if isinstance(value, str) and value:
        return value
    return None

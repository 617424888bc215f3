from datetime import datetime
from dateutil import parser as dateparser
from ministry_scheduler.constants import DATE_KEY_FORMAT

# Leap year so "02/29" parses no matter which month is being planned
_PARSE_DEFAULT = datetime(2000, 1, 1)


def strip_date_label(token: str) -> str:
    """Drop a trailing " - <label>" from a date token ("06/06 - Corporate Prayer" -> "06/06")."""
    return token.split(" -", 1)[0].strip()


def normalize_date_key(token: str) -> str:
    """
    Normalize a raw date token to an MM/dd key.

    Accepts labelled headers ("06/06 - Corporate Prayer"), free-text dates
    ("June 8, 2025", "6/8/2025") and keys that are already short. Text that
    does not parse as a date falls back to its first five characters, so the
    result may not match any service date.

    Examples:
        "06/06 - Corporate Prayer" -> "06/06"
        "6/8/2025" -> "06/08"
        "someday" -> "somed"
    """
    text = strip_date_label(str(token or ""))
    try:
        parsed = dateparser.parse(text, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return text[:5]
    return parsed.strftime(DATE_KEY_FORMAT)


def split_list_field(value) -> list[str]:
    """Split a comma-separated cell (or pass through a list) into trimmed, non-empty parts."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        parts = [str(item) for item in value]
    else:
        parts = str(value).split(",")
    return [part.strip() for part in parts if part.strip()]


def parse_roles(value) -> tuple[str, ...]:
    """
    Parse a roles cell into upper-cased role names.

    Duplicates are dropped case-insensitively, first occurrence wins.

    Examples:
        "WL, Singer" -> ("WL", "SINGER")
        "bass,Bass" -> ("BASS",)
    """
    roles = []
    for part in split_list_field(value):
        role = part.upper()
        if role not in roles:
            roles.append(role)
    return tuple(roles)


def parse_unavailable_dates(value) -> tuple[str, ...]:
    """Parse an unavailable-dates cell or list of form choices into MM/dd keys."""
    return tuple(normalize_date_key(part) for part in split_list_field(value))


def parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    value = str(value).strip()
    if not value:
        return None
    for fmt in ("%m/%d/%Y %H:%M:%S", "%Y-%m-%d %H:%M:%S"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Timestamp format not recognized: {value}")

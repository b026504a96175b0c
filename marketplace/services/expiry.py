"""Expiry date parsing and the lenient expiry filter.

Expiry values reach the database in many shapes: native datetimes from the
admin API, ISO strings, spreadsheet dates such as ``31/12/2026``, epoch
numbers, and ``{"seconds": ..., "nanoseconds": ...}`` objects left over from
the document-store migration. The filter is biased towards inclusion: a
coupon is hidden only when its expiry parses to a real date in the past.

Slash dates are read day-first, so ``01/02/2026`` is 1 February. A JavaScript
``Date`` reads the same string month-first (2 January); month-first only
applies here when day-first cannot parse, e.g. ``12/31/2026``.
"""

import logging
import re
from collections.abc import Mapping
from datetime import UTC, date, datetime, time
from typing import Any

logger = logging.getLogger(__name__)

# Dates before this year are import artifacts (epoch zero, 1900-01-01, ...)
MIN_REAL_EXPIRY_YEAR = 2000

# Epoch values above this are milliseconds
_MILLISECONDS_THRESHOLD = 10**11

_ABSENT_SENTINELS = {"", "0000-00-00", "0000-00-00 00:00:00", "null", "none", "invalid", "n/a"}
_NUMERIC_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")

# Day-first formats are tried before month-first ones.
_STRING_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _from_epoch(seconds: float) -> datetime:
    if abs(seconds) > _MILLISECONDS_THRESHOLD:
        seconds = seconds / 1000
    try:
        return datetime.fromtimestamp(seconds, UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"Epoch value out of range: {seconds}") from exc


def _parse_string(text: str) -> datetime | None:
    if text.lower() in _ABSENT_SENTINELS:
        return None
    if _NUMERIC_PATTERN.match(text):
        return _from_epoch(float(text))
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _STRING_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    raise ValueError(f"Unrecognised expiry date: {text!r}")


def parse_expiry(value: Any) -> datetime | None:
    """Parse a raw expiry value into an aware UTC datetime.

    Returns None when no expiry is set. Raises ValueError when a value is
    present but cannot be understood.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, bool):
        raise ValueError(f"Unrecognised expiry value: {value!r}")
    if isinstance(value, int | float):
        return _from_epoch(float(value))
    if isinstance(value, str):
        return _parse_string(value.strip())
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            raise ValueError(f"Timestamp object without seconds: {value!r}")
        nanoseconds = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        return _from_epoch(float(seconds) + float(nanoseconds) / 1e9)
    for method in ("to_datetime", "toDate"):
        convert = getattr(value, method, None)
        if callable(convert):
            return parse_expiry(convert())
    raise ValueError(f"Unrecognised expiry value of type {type(value).__name__}")


def safe_parse_expiry(value: Any) -> datetime | None:
    """Parse an expiry value, returning None when it is missing or malformed."""
    try:
        return parse_expiry(value)
    except (ValueError, TypeError):
        return None


def is_unexpired(value: Any, now: datetime | None = None) -> bool:
    """Decide whether a record with expiry ``value`` should be shown.

    Missing, pre-2000 and unparseable expiries all count as "no expiry".
    """
    try:
        expiry = parse_expiry(value)
    except (ValueError, TypeError):
        logger.warning("Could not parse expiry value %r, keeping record", value)
        return True

    if expiry is None:
        return True
    if expiry.year < MIN_REAL_EXPIRY_YEAR:
        return True

    current = _as_utc(now) if now is not None else datetime.now(UTC)
    return expiry >= current

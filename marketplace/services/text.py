"""Small text helpers shared by the normalizers."""

import re
from collections.abc import Mapping
from typing import Any

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_TAG_PATTERN = re.compile(r"<[^>]+>")

# Entities seen in the spreadsheet imports. Not a general HTML decoder.
HTML_ENTITIES: dict[str, str] = {
    "&pound;": "£",
    "&euro;": "€",
    "&dollar;": "$",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&lt;": "<",
    "&gt;": ">",
    "&nbsp;": " ",
    "&ndash;": "–",
    "&mdash;": "—",
    "&rsquo;": "’",
    "&lsquo;": "‘",
    "&rdquo;": "”",
    "&ldquo;": "“",
    "&hellip;": "…",
    "&reg;": "®",
    "&trade;": "™",
    "&copy;": "©",
}


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def first_present(row: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value under ``keys`` that is not blank, else None."""
    for key in keys:
        value = row.get(key)
        if not is_blank(value):
            return value
    return None


def normalize_url(value: Any) -> str | None:
    """Trim a URL and add ``https://`` to bare domains."""
    if is_blank(value):
        return None
    trimmed = str(value).strip()
    if trimmed.startswith(("http://", "https://")):
        return trimmed
    if "." in trimmed and " " not in trimmed:
        return f"https://{trimmed}"
    return trimmed


def decode_entities(text: str | None) -> str | None:
    """Replace the known HTML entities in ``text``.

    ``&amp;`` is decoded last so ``&amp;pound;`` becomes ``&pound;``
    rather than ``£``.
    """
    if not text or "&" not in text:
        return text
    for entity, char in HTML_ENTITIES.items():
        text = text.replace(entity, char)
    return text.replace("&amp;", "&")


def strip_tags(text: str | None) -> str:
    if not text:
        return ""
    return _TAG_PATTERN.sub("", text).strip()


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(UUID_PATTERN.match(value.strip()))


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def format_number(value: float) -> str:
    """Render ``20.0`` as ``20`` and ``12.5`` as ``12.5``."""
    if value == int(value):
        return str(int(value))
    return f"{value:g}"

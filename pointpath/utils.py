from __future__ import annotations

import re as _re
from datetime import date, datetime
from typing import Optional, Pattern, Tuple

_WEEKDAY_PREFIX_RE: Pattern[str] = _re.compile(
    r"^(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?,?\s+", _re.I
)
_SEPT_RE: Pattern[str] = _re.compile(r"\bSept\b", _re.I)

_DATED_FORMATS: Tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
    "%b %d %Y",
    "%B %d %Y",
    "%b %d %y",
    "%B %d %y",
    "%d %b %Y",
    "%d %B %Y",
    "%d %b %y",
    "%d %B %y",
)
# Shapes without a year; the year is appended before parsing
_YEARLESS_FORMATS: Tuple[str, ...] = ("%b %d %Y", "%B %d %Y")


def _clean(text: str) -> str:
    text = _WEEKDAY_PREFIX_RE.sub("", text.strip())
    text = _SEPT_RE.sub("Sep", text)
    text = text.replace(",", " ").replace(".", " ")
    return " ".join(text.split())


def _parse(text: str, formats: Tuple[str, ...]) -> Optional[datetime]:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_display_date(text: Optional[str], today: Optional[date] = None) -> str:
    """
    Render an extracted date as MM/DD/YY.

    "Dec 15, 2024" -> "12/15/24", "Mon, Jun 3" -> "06/03/<this year>".
    Text that is not a recognisable date comes back unchanged.
    """
    if not text or not text.strip():
        return ""

    cleaned = _clean(text)
    parsed = _parse(cleaned, _DATED_FORMATS)
    if parsed is None:
        year = (today or date.today()).year
        parsed = _parse(f"{cleaned} {year}", _YEARLESS_FORMATS)
    if parsed is None:
        return text
    return parsed.strftime("%m/%d/%y")

# patterns.py
import re
from re import Match, Pattern
from typing import Callable, Tuple

from .airlines import AIRLINE_ALIASES, AIRLINE_NAMES, FLIGHT_CODE_AIRLINES, IATA_CODES

# (pattern, result) pairs are evaluated in order; the first match wins.
Rule = Tuple[Pattern[str], Callable[[Match[str]], str]]

_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?"
    r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_WEEKDAYS = (
    r"(?:Mon(?:day)?|Tue(?:s(?:day)?)?|Wed(?:nesday)?|Thu(?:r(?:s(?:day)?)?)?"
    r"|Fri(?:day)?|Sat(?:urday)?|Sun(?:day)?)"
)
_CODES = "|".join(FLIGHT_CODE_AIRLINES)


def _with_flight_number(name: str, code: str, number: str) -> str:
    return f"{name} {code} {number}"


def _fixed(value: str) -> Callable[[Match[str]], str]:
    return lambda m: value


def _alias_with_number(name: str) -> Callable[[Match[str]], str]:
    code = IATA_CODES.get(name, "")
    return lambda m: _with_flight_number(name, code, m.group(2)) if code else f"{name} {m.group(2)}"


def _code_with_number(m: Match[str]) -> str:
    code = m.group(1).upper()
    return _with_flight_number(FLIGHT_CODE_AIRLINES[code], code, m.group(2))


def _airline_rules() -> Tuple[Rule, ...]:
    rules = []
    # 1. full names
    for name in AIRLINE_NAMES:
        rules.append((re.compile(rf"\b{re.escape(name)}\b", re.I), _fixed(name)))
    # 2. short name directly followed by a flight number ("Delta 456")
    for alias, name in AIRLINE_ALIASES:
        rules.append(
            (re.compile(rf"\b({re.escape(alias)})\s*(\d{{1,4}})\b", re.I), _alias_with_number(name))
        )
    # 3. short names on their own
    for alias, name in AIRLINE_ALIASES:
        rules.append((re.compile(rf"\b{re.escape(alias)}\b", re.I), _fixed(name)))
    # 4. "Flight UA 789"
    rules.append((re.compile(rf"\bFlight\s+({_CODES})\s*(\d{{1,4}})\b", re.I), _code_with_number))
    # 5. bare "UA789" / "UA 789" (uppercase only)
    rules.append((re.compile(rf"\b({_CODES})\s?(\d{{1,4}})\b"), _code_with_number))
    # 6. British Airways OCR misreads
    rules.append(
        (re.compile(r"\bBr[i1l|]t[i1l|]sh\s*A[i1l|]r\s?ways\b", re.I), _fixed("British Airways"))
    )
    rules.append(
        (
            re.compile(r"\b8A\s?(\d{1,4})\b"),
            lambda m: _with_flight_number("British Airways", "BA", m.group(1)),
        )
    )
    return tuple(rules)


class Patterns:
    GOOGLE_FLIGHTS_URL = re.compile(r"google\.com/travel/flights", re.I)

    AIRLINE_RULES = _airline_rules()

    AIRPORT = re.compile(r"\b[A-Z]{3}\b")
    NEXT_WORD = re.compile(r"\s+([A-Z]+)\b")
    DATE_CONTEXT_AFTER_MONTH = re.compile(r"\s*\.?\s*\d")
    DATE_CONTEXT_AFTER_WEEKDAY = re.compile(rf"\s*,|\s+{_MONTHS}\b", re.I)
    ROUTE_CODES = re.compile(
        r"\b([A-Za-z]{3})(?:\s+to\s+|\s*(?:→|->|–|—|-)\s*)([A-Za-z]{3})\b", re.I
    )
    ROUTE_PLACES = re.compile(
        r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)*)\s+(?:to|→)\s+([A-Z][a-z]+(?: [A-Z][a-z]+)*)"
    )

    # Ordered: literal date text, first pattern to match wins.
    DATES: Tuple[Tuple[str, Pattern[str]], ...] = (
        ("numeric_slash", re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b")),
        ("numeric_dash", re.compile(r"\b\d{1,2}-\d{1,2}-\d{2,4}\b")),
        ("month_day_year", re.compile(rf"\b{_MONTHS}\.?\s+\d{{1,2}},?\s+\d{{2,4}}\b", re.I)),
        ("day_month_year", re.compile(rf"\b\d{{1,2}}\s+{_MONTHS}\.?,?\s+\d{{2,4}}\b", re.I)),
        (
            "departing",
            re.compile(rf"Departing flight.*?\b({_WEEKDAYS},?\s+{_MONTHS}\.?\s+\d{{1,2}})\b", re.I),
        ),
        ("weekday", re.compile(rf"\b{_WEEKDAYS},?\s+{_MONTHS}\.?\s+\d{{1,2}}\b", re.I)),
        ("month_day", re.compile(rf"\b{_MONTHS}\.?\s+\d{{1,2}}\b", re.I)),
    )
    # Screenshots label the outbound leg; that date beats any other one on the page
    OCR_DATES: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
        sorted(DATES, key=lambda tier: tier[0] != "departing")
    )

    PRICE = re.compile(r"\$\s?((?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?)")

    CABINS: Tuple[Tuple[Pattern[str], str], ...] = (
        (re.compile(r"\bpremium\s+economy\b", re.I), "Premium Economy"),
        (re.compile(r"\bfirst\s+(?:class|cabin)\b", re.I), "First"),
        (re.compile(r"\bbusiness\s+(?:class|cabin)\b", re.I), "Business"),
        (re.compile(r"\b(?:economy|coach)\s+(?:class|cabin)\b|\bmain\s+cabin\b", re.I), "Economy"),
        (re.compile(r"\bF\s+[Cc]lass\b"), "First"),
        (re.compile(r"\bJ\s+[Cc]lass\b"), "Business"),
        (re.compile(r"\bW\s+[Cc]lass\b"), "Premium Economy"),
        (re.compile(r"\bY\s+[Cc]lass\b"), "Economy"),
        (re.compile(r"\bbusiness\b", re.I), "Business"),
        (re.compile(r"\b(?:economy|coach)\b", re.I), "Economy"),
        (re.compile(r"\bpremium\b", re.I), "Premium Economy"),
        (re.compile(r"\bfirst\b", re.I), "First"),
        (re.compile(r"\bmain\b", re.I), "Economy"),
    )

    # OCR clean-up
    OCR_ARROWS = re.compile(r"\s*(?:->|=>|[➔➝➜⟶⇒►▶])\s*")
    OCR_NOISE = re.compile(r"(?<!\S)[|¦•·]+(?!\S)")


patterns = Patterns()

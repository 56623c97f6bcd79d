# extraction_engine.py
from __future__ import annotations

import logging
from re import Pattern
from typing import List, Optional, Tuple

from .airlines import (
    AIR_NAME_FOLLOWERS,
    AIRPORT_STOPWORDS,
    MONTH_TOKENS,
    WEEKDAY_TOKENS,
)
from .logging_utils import get_logger
from .models import FlightData
from .patterns import patterns

logger = get_logger("pointpath.extraction")

GOOGLE_FLIGHTS_SENTINEL = FlightData(
    airline="Google Flights URL detected - fetching details...",
    origin="Processing...",
    destination="Processing...",
    departure_date="",
    cabin_class="",
    cash_price=None,
)

# Capitalised words that start a "<place> to <place>" phrase without being a place
_ROUTE_PLACE_STOPWORDS = frozenset({
    "Flight", "Flights", "Fly", "Trip", "Travel", "Return", "Ticket", "Tickets",
    "Nonstop", "Connecting", "Welcome", "Back", "Up", "Departing", "Returning",
})


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def clean_ocr_text(text: str) -> str:
    """Undo the usual screenshot OCR noise before field extraction."""
    text = text.replace("\u00a0", " ").replace("\u2019", "'").replace("\u2018", "'")
    text = patterns.OCR_ARROWS.sub(" → ", text)
    text = patterns.OCR_NOISE.sub(" ", text)
    return text


class FieldExtractor:
    """
    Best-effort flight field extraction from pasted text or OCR output.

    Each field is found independently by walking an ordered pattern table;
    the first match wins and a miss simply leaves the field unset.
    """

    def extract(self, text: str, source: str = "text") -> FlightData:
        if not text or not text.strip():
            return FlightData()

        if patterns.GOOGLE_FLIGHTS_URL.search(text):
            logger.event("google_flights_url_detected", source=source)
            return GOOGLE_FLIGHTS_SENTINEL.model_copy()

        text = normalize_whitespace(text)
        airline, airline_name = self._extract_airline(text)
        origin, destination = self._extract_route(text, airline_name)

        flight = FlightData(
            airline=airline,
            origin=origin,
            destination=destination,
            departure_date=self._extract_date(
                text, patterns.OCR_DATES if source == "ocr" else patterns.DATES
            ),
            cabin_class=self._extract_cabin(text),
            cash_price=self._extract_price(text),
        )

        logger.event(
            "flight_fields_extracted",
            level=logging.DEBUG,
            source=source,
            found=sorted(flight.to_payload()),
            chars=len(text),
        )
        return flight

    def extract_ocr(self, text: str) -> FlightData:
        return self.extract(clean_ocr_text(text or ""), source="ocr")

    # ---------------- fields ----------------

    def _extract_airline(self, text: str) -> Tuple[Optional[str], Optional[str]]:
        """Returns (display value, canonical airline name)."""
        for rule, result in patterns.AIRLINE_RULES:
            m = rule.search(text)
            if m:
                value = result(m)
                return value, _strip_flight_number(value)
        return None, None

    def _airport_candidates(self, text: str, airline_name: Optional[str]) -> List[str]:
        name_words = set(airline_name.upper().split()) if airline_name else set()
        candidates: List[str] = []

        for m in patterns.AIRPORT.finditer(text):
            token = m.group()
            rest = text[m.end():]
            if token in AIRPORT_STOPWORDS or token in name_words:
                continue
            if token == "AIR":
                nxt = patterns.NEXT_WORD.match(rest)
                if nxt and nxt.group(1) in AIR_NAME_FOLLOWERS:
                    continue
            if token in MONTH_TOKENS and patterns.DATE_CONTEXT_AFTER_MONTH.match(rest):
                continue
            if token in WEEKDAY_TOKENS and patterns.DATE_CONTEXT_AFTER_WEEKDAY.match(rest):
                continue
            candidates.append(token)

        return candidates

    def _extract_route(
        self, text: str, airline_name: Optional[str]
    ) -> Tuple[Optional[str], Optional[str]]:
        candidates = self._airport_candidates(text, airline_name)
        if len(candidates) >= 2:
            return candidates[0], candidates[1]

        # Fallbacks only run when no airport pair was found
        for m in patterns.ROUTE_CODES.finditer(text):
            origin, destination = m.group(1).upper(), m.group(2).upper()
            if origin in AIRPORT_STOPWORDS or destination in AIRPORT_STOPWORDS:
                continue
            if origin in MONTH_TOKENS | WEEKDAY_TOKENS or destination in MONTH_TOKENS | WEEKDAY_TOKENS:
                continue
            return origin, destination

        for m in patterns.ROUTE_PLACES.finditer(text):
            origin, destination = m.group(1).strip(), m.group(2).strip()
            if origin.split(" ")[0] in _ROUTE_PLACE_STOPWORDS:
                continue
            return origin, destination

        return None, None

    def _extract_date(
        self, text: str, tiers: Tuple[Tuple[str, Pattern[str]], ...]
    ) -> Optional[str]:
        for _, pattern in tiers:
            m = pattern.search(text)
            if m:
                # "departing" keeps only the captured date, not the context words
                return m.group(m.lastindex or 0)
        return None

    def _extract_price(self, text: str) -> Optional[float]:
        m = patterns.PRICE.search(text)
        if not m:
            return None
        return float(m.group(1).replace(",", ""))

    def _extract_cabin(self, text: str) -> Optional[str]:
        for pattern, cabin in patterns.CABINS:
            if pattern.search(text):
                return cabin
        return None


def _strip_flight_number(value: str) -> str:
    """'American Airlines AA 123' -> 'American Airlines'."""
    parts = value.split(" ")
    if len(parts) >= 3 and parts[-1].isdigit() and len(parts[-2]) == 2:
        return " ".join(parts[:-2])
    if len(parts) >= 2 and parts[-1].isdigit():
        return " ".join(parts[:-1])
    return value


extractor = FieldExtractor()


def extract(text: str) -> FlightData:
    return extractor.extract(text)


def extract_ocr(text: str) -> FlightData:
    return extractor.extract_ocr(text)

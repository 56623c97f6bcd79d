"""
PointPath: pull flight details out of pasted itinerary text or screenshots
and work out which Amex transfer partners can book the flight.
"""

__version__ = "1.0.0"

from .airlines import search_airlines
from .explainer import badges_for, emoji_legend, explain, format_airline_with_emojis
from .extraction_engine import FieldExtractor, extract, extract_ocr
from .models import (
    AirlineCategory,
    AirlineRecommendation,
    BookabilityResult,
    EmojiBadge,
    FlightData,
    PartnerMatch,
    PartnerProgram,
    Relationship,
)
from .partners import AMEX_PARTNERS, PartnerRegistry, registry
from .resolver import resolve
from .utils import format_display_date

__all__ = [
    "AMEX_PARTNERS",
    "AirlineCategory",
    "AirlineRecommendation",
    "BookabilityResult",
    "EmojiBadge",
    "FieldExtractor",
    "FlightData",
    "PartnerMatch",
    "PartnerProgram",
    "PartnerRegistry",
    "Relationship",
    "badges_for",
    "emoji_legend",
    "explain",
    "extract",
    "extract_ocr",
    "format_airline_with_emojis",
    "format_display_date",
    "registry",
    "resolve",
    "search_airlines",
]

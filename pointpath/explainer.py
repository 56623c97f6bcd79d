# explainer.py
# ---------------------------------------------------------------------
# Turns a bookability result into a display-ready recommendation:
# category, IATA code, preferred partner, booking steps, notes,
# comparative reasons and emoji badges.

import logging
from typing import Dict, List, Optional

from .airlines import CARGO_MARKERS, CHARTER_MARKERS, IATA_CODES, MAJOR_US_AIRLINES
from .logging_utils import log_event
from .models import (
    AirlineCategory,
    AirlineRecommendation,
    BookabilityResult,
    EmojiBadge,
    PartnerMatch,
    Relationship,
)
from .resolver import resolve

logger = logging.getLogger("pointpath.explainer")

BADGE_MEANINGS: Dict[Relationship, str] = {
    Relationship.DIRECT: "Direct Amex transfer partner",
    Relationship.ALLIANCE: "Bookable via alliance",
    Relationship.BILATERAL: "Bookable via bilateral partner",
}

# =================== BOOKING STEPS ===================

_RELATIONSHIP_STEPS: Dict[Relationship, List[str]] = {
    Relationship.DIRECT: [
        "Search for {airline} flights on the {partner} website",
        "Book using points and pay any taxes/fees with cash",
    ],
    Relationship.ALLIANCE: [
        "Search for {airline} flights (alliance partner) on the {partner} website",
        "Book the award ticket using points",
        "Pay taxes and fees with cash (may be higher for partner awards)",
    ],
    Relationship.BILATERAL: [
        "Search for {airline} flights on the {partner} website",
        "Look for partner award availability (may be limited)",
        "Book using points and pay taxes/fees with cash",
    ],
}

# =================== NOTES ===================

_RELATIONSHIP_NOTES: Dict[Relationship, List[str]] = {
    Relationship.DIRECT: [],
    Relationship.ALLIANCE: [
        "Alliance partner bookings may have limited award availability",
        "Expect higher taxes and fees compared to direct partner bookings",
    ],
    Relationship.BILATERAL: [
        "Bilateral partnership may have restricted routes and availability",
    ],
}

# (substrings of the partner name, notes)
_PARTNER_NOTES = (
    (
        ("British Airways",),
        [
            "British Airways uses distance-based pricing - excellent for short flights",
            "Low taxes and fees on domestic US flights",
        ],
    ),
    (("Air France", "KLM"), ["Flying Blue has dynamic pricing - book early for better rates"]),
    (("Singapore Airlines",), ["KrisFlyer has excellent premium cabin availability"]),
)

_GENERIC_NOTE = "Book well in advance for better award availability"

# =================== RECOMMENDATION REASONS ===================

# airline -> preferred partner -> reasons
_AIRLINE_REASONS: Dict[str, Dict[str, List[str]]] = {
    "Royal Air Maroc": {
        "Aer Lingus AerClub": [
            "Aer Lingus AerClub prices Royal Air Maroc flights with Avios on a distance-based chart",
            "AerClub usually charges lower surcharges than British Airways Executive Club on the same flights",
            "Avios can be moved between Aer Lingus and British Airways if another chart prices better",
        ],
    },
    "Virgin Atlantic": {
        "Virgin Atlantic Flying Club": [
            "Flying Club is the only program with full access to Virgin Atlantic Upper Class award space",
        ],
    },
}

_PARTNER_REASONS: Dict[str, List[str]] = {
    "Air Canada Aeroplan": [
        "Aeroplan does not pass on fuel surcharges for most Star Alliance partner awards",
        "Aeroplan allows a stopover on one-way international awards for a small fee",
    ],
    "Virgin Atlantic Flying Club": [
        "Flying Club often prices Delta and Air France-KLM flights below their own programs",
    ],
    "British Airways Executive Club": [
        "Avios distance-based pricing makes short nonstop flights very cheap",
    ],
    "Avianca LifeMiles": [
        "LifeMiles never adds fuel surcharges on Star Alliance partner awards",
    ],
    "Air France–KLM Flying Blue": [
        "Flying Blue publishes monthly Promo Rewards with discounted routes",
    ],
}


def categorize(airline_name: str) -> AirlineCategory:
    if airline_name in MAJOR_US_AIRLINES:
        return AirlineCategory.MAJOR_US
    if any(marker in airline_name for marker in CARGO_MARKERS):
        return AirlineCategory.CARGO
    if any(marker in airline_name for marker in CHARTER_MARKERS):
        return AirlineCategory.CHARTER
    return AirlineCategory.INTERNATIONAL


def booking_steps(airline_name: str, preferred: PartnerMatch) -> List[str]:
    partner = preferred.partner_name
    steps = [
        f"Transfer Amex points to {partner} at {preferred.transfer_ratio} ratio",
        f"Wait for transfer to complete ({preferred.transfer_time})",
        f"Log into your {partner} account",
    ]
    steps.extend(
        step.format(airline=airline_name, partner=partner)
        for step in _RELATIONSHIP_STEPS[preferred.relationship]
    )
    return steps


def booking_notes(preferred: PartnerMatch) -> List[str]:
    notes = list(_RELATIONSHIP_NOTES[preferred.relationship])
    for markers, partner_notes in _PARTNER_NOTES:
        if any(marker in preferred.partner_name for marker in markers):
            notes.extend(partner_notes)
    if not notes:
        notes.append(_GENERIC_NOTE)
    return notes


def recommendation_reasons(airline_name: str, preferred: PartnerMatch) -> List[str]:
    partner = preferred.partner_name

    by_partner = _AIRLINE_REASONS.get(airline_name, {})
    if partner in by_partner:
        return list(by_partner[partner])
    if partner in _PARTNER_REASONS:
        return list(_PARTNER_REASONS[partner])

    if preferred.relationship is Relationship.DIRECT:
        return [f"{partner} is the direct partner for {airline_name} - booking direct is usually best"]
    return [f"{partner} generally offers better pricing than alternatives for {airline_name}"]


def badges_for(result: BookabilityResult) -> List[EmojiBadge]:
    """One badge per relationship tier present in ``result``."""
    if not result.is_bookable:
        return []
    present = {p.relationship for p in result.partner_programs}
    return [
        EmojiBadge(emoji=rel.emoji, meaning=BADGE_MEANINGS[rel])
        for rel in Relationship
        if rel in present
    ]


def emoji_legend() -> List[EmojiBadge]:
    return [EmojiBadge(emoji=rel.emoji, meaning=BADGE_MEANINGS[rel]) for rel in Relationship]


def format_airline_with_emojis(airline_name: str) -> str:
    """'British Airways' -> 'British Airways ⭐🌐'; unbookable names come back bare."""
    emojis = "".join(b.emoji for b in badges_for(resolve(airline_name)))
    if not emojis:
        return airline_name
    return f"{airline_name} {emojis}"


def explain(
    airline_name: str, result: Optional[BookabilityResult] = None
) -> Optional[AirlineRecommendation]:
    """
    Build the recommendation card for ``airline_name``.

    ``result`` is resolved on demand when not supplied. Returns None when
    the airline cannot be booked with transfer points.
    """
    airline = (airline_name or "").strip()
    if result is None:
        result = resolve(airline)
    if not result.is_bookable or not result.partner_programs:
        return None

    # callers may hand over results built outside resolve()
    programs = sorted(result.partner_programs, key=lambda p: p.relationship.priority)
    preferred = programs[0]
    relationships = {p.relationship for p in programs}

    recommendation = AirlineRecommendation(
        name=airline,
        iata_code=IATA_CODES.get(airline),
        category=categorize(airline),
        is_direct_partner=Relationship.DIRECT in relationships,
        is_alliance_bookable=Relationship.ALLIANCE in relationships,
        is_bilateral_bookable=Relationship.BILATERAL in relationships,
        bookable_via=[p.partner_name for p in programs],
        partner_details=list(programs),
        preferred_partner=preferred.partner_name,
        transfer_ratio=preferred.transfer_ratio,
        transfer_time=preferred.transfer_time,
        how_to_book_steps=booking_steps(airline, preferred),
        notes=booking_notes(preferred),
        recommendation_reasons=recommendation_reasons(airline, preferred),
        badges=badges_for(result),
    )

    log_event(
        logger,
        "recommendation_built",
        level=logging.DEBUG,
        airline=airline,
        preferred_partner=preferred.partner_name,
        relationship=preferred.relationship.value,
    )
    return recommendation

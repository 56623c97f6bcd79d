# partners.py
# ---------------------------------------------------------------------
# Amex Membership Rewards airline transfer partners and the airlines each
# program can book. The airline -> partner index is derived once at import.

from typing import Dict, List, Mapping, Optional, Tuple

import logging
logger = logging.getLogger(__name__)

from .models import PartnerProgram, Relationship

_ONEWORLD = (
    "Aer Lingus",
    "American Airlines",
    "British Airways",
    "Cathay Pacific",
    "Finnair",
    "Iberia",
    "Japan Airlines",
    "Malaysia Airlines",
    "Qantas",
    "Qatar Airways",
    "Royal Air Maroc",
    "Royal Jordanian",
    "SriLankan Airlines",
)

_SKYTEAM = (
    "Aeromexico",
    "Aeroflot",
    "Air Europa",
    "Air France",
    "Alitalia",
    "China Airlines",
    "China Eastern Airlines",
    "China Southern Airlines",
    "Czech Airlines",
    "Delta Air Lines",
    "Garuda Indonesia",
    "Kenya Airways",
    "KLM Royal Dutch Airlines",
    "Korean Air",
    "Middle East Airlines",
    "Saudia",
    "TAROM",
    "Vietnam Airlines",
    "Xiamen Airlines",
)

_STAR_ALLIANCE = (
    "Aegean Airlines",
    "Air Canada",
    "Air China",
    "Air India",
    "Air New Zealand",
    "All Nippon Airways",
    "Asiana Airlines",
    "Austrian Airlines",
    "Avianca",
    "Brussels Airlines",
    "Copa Airlines",
    "Croatia Airlines",
    "EgyptAir",
    "Ethiopian Airlines",
    "EVA Air",
    "LOT Polish Airlines",
    "Lufthansa",
    "Scandinavian Airlines",
    "Shenzhen Airlines",
    "Singapore Airlines",
    "South African Airways",
    "Swiss International Air Lines",
    "TAP Air Portugal",
    "Thai Airways",
    "Turkish Airlines",
    "United Airlines",
)


def _home_first(home: str, members: Tuple[str, ...]) -> Tuple[str, ...]:
    """Alliance member list with the program's own carrier leading."""
    return (home,) + tuple(m for m in members if m != home)


def _program(
    name: str,
    alliance: str,
    bookable: Tuple[str, ...],
    bilateral: Tuple[str, ...] = (),
    ratio: str = "1:1",
    transfer_time: str = "Instant",
) -> PartnerProgram:
    return PartnerProgram(
        name=name,
        alliance=alliance,
        transfer_ratio=ratio,
        transfer_time=transfer_time,
        bookable_airlines=bookable,
        bilateral_partners=bilateral,
    )


# Insertion order is significant: equal-priority matches keep this order.
AMEX_PARTNERS: Dict[str, PartnerProgram] = {
    p.name: p
    for p in (
        # ==== ONEWORLD ====
        _program("Aer Lingus AerClub", "Oneworld", _ONEWORLD),
        # ==== SKYTEAM ====
        _program("Aeromexico Club Premier", "SkyTeam", _home_first("Aeromexico", _SKYTEAM)),
        # ==== STAR ALLIANCE ====
        _program("Air Canada Aeroplan", "Star Alliance", _home_first("Air Canada", _STAR_ALLIANCE)),
        _program(
            "Air France–KLM Flying Blue",
            "SkyTeam",
            ("Air France", "KLM Royal Dutch Airlines")
            + tuple(a for a in _SKYTEAM if a not in ("Air France", "KLM Royal Dutch Airlines")),
        ),
        _program(
            "All Nippon Airways Mileage Club",
            "Star Alliance",
            _home_first("All Nippon Airways", _STAR_ALLIANCE),
            bilateral=("Virgin Atlantic", "Philippine Airlines", "Garuda Indonesia"),
        ),
        _program("Avianca LifeMiles", "Star Alliance", _home_first("Avianca", _STAR_ALLIANCE)),
        _program(
            "British Airways Executive Club",
            "Oneworld",
            _home_first("British Airways", _ONEWORLD),
            bilateral=("Alaska Airlines", "LATAM Airlines"),
        ),
        _program(
            "Cathay Pacific Asia Miles",
            "Oneworld",
            _home_first("Cathay Pacific", _ONEWORLD),
            bilateral=("Alaska Airlines", "Bangkok Airways"),
        ),
        _program(
            "Delta SkyMiles",
            "SkyTeam",
            _home_first("Delta Air Lines", _SKYTEAM),
            bilateral=("Virgin Atlantic", "LATAM Airlines", "WestJet"),
        ),
        # ==== INDEPENDENT ====
        _program(
            "Emirates Skywards",
            "Independent",
            ("Emirates",),
            bilateral=("JetBlue Airways", "Alaska Airlines", "Qantas"),
        ),
        _program(
            "Etihad Guest",
            "Independent",
            ("Etihad Airways",),
            bilateral=("American Airlines", "Virgin Australia", "Air Serbia", "Royal Air Maroc"),
        ),
        _program(
            "Hawaiian Airlines HawaiianMiles",
            "Independent",
            ("Hawaiian Airlines",),
            bilateral=("JetBlue Airways", "Virgin Atlantic", "Korean Air"),
        ),
        _program(
            "Iberia Plus",
            "Oneworld",
            _home_first("Iberia", _ONEWORLD),
            bilateral=("Alaska Airlines", "LATAM Airlines"),
        ),
        _program(
            "JetBlue TrueBlue",
            "Independent",
            ("JetBlue Airways",),
            bilateral=(
                "Hawaiian Airlines",
                "Emirates",
                "Turkish Airlines",
                "Singapore Airlines",
                "Etihad Airways",
            ),
            ratio="1:1.6",
        ),
        _program(
            "Qantas Frequent Flyer",
            "Oneworld",
            _home_first("Qantas", _ONEWORLD),
            bilateral=("Emirates", "Alaska Airlines", "LATAM Airlines"),
        ),
        _program(
            "Singapore Airlines KrisFlyer",
            "Star Alliance",
            _home_first("Singapore Airlines", _STAR_ALLIANCE),
            bilateral=("Alaska Airlines", "Virgin Atlantic", "Virgin Australia"),
        ),
        _program(
            "Virgin Atlantic Flying Club",
            "SkyTeam",
            ("Virgin Atlantic", "Air France", "KLM Royal Dutch Airlines", "Delta Air Lines"),
            bilateral=(
                "All Nippon Airways",
                "Singapore Airlines",
                "Hawaiian Airlines",
                "South African Airways",
            ),
        ),
    )
}


def is_home_carrier(airline: str, partner_name: str) -> bool:
    """Name-prefix heuristic: the airline runs this program itself."""
    words = partner_name.split(" ")
    return (
        airline == words[0]
        or airline == " ".join(words[:2])
        or airline in partner_name
    )


class PartnerRegistry:
    """Read-only partner table plus the airline -> (partner, relationship) index."""

    def __init__(self, programs: Mapping[str, PartnerProgram]) -> None:
        self._programs: Dict[str, PartnerProgram] = dict(programs)
        self._index: Dict[str, Tuple[Tuple[str, Relationship], ...]] = self._build_index()
        logger.info(
            f"Partner registry: {len(self._programs)} programs, "
            f"{len(self._index)} bookable airlines"
        )

    def _build_index(self) -> Dict[str, Tuple[Tuple[str, Relationship], ...]]:
        index: Dict[str, List[Tuple[str, Relationship]]] = {}
        for partner_name, program in self._programs.items():
            for airline in program.bookable_airlines:
                relationship = (
                    Relationship.DIRECT
                    if is_home_carrier(airline, program.name)
                    else Relationship.ALLIANCE
                )
                index.setdefault(airline, []).append((partner_name, relationship))
            for airline in program.bilateral_partners:
                index.setdefault(airline, []).append((partner_name, Relationship.BILATERAL))
        return {airline: tuple(pairs) for airline, pairs in index.items()}

    def program(self, name: str) -> PartnerProgram:
        return self._programs[name]

    def programs(self) -> List[PartnerProgram]:
        return list(self._programs.values())

    def matches(self, airline: str) -> Tuple[Tuple[str, Relationship], ...]:
        return self._index.get(airline, ())

    def airlines(self) -> List[str]:
        return sorted(self._index)

    def canonical_name(self, text: Optional[str]) -> Optional[str]:
        """Longest bookable airline name that ``text`` starts with."""
        if not text:
            return None
        text = text.strip()
        best: Optional[str] = None
        for airline in self._index:
            if text == airline or text.startswith(airline + " "):
                if best is None or len(airline) > len(best):
                    best = airline
        return best

    def __contains__(self, airline: object) -> bool:
        return airline in self._index

    def __len__(self) -> int:
        return len(self._programs)


registry = PartnerRegistry(AMEX_PARTNERS)

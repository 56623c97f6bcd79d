# airlines.py
# ---------------------------------------------------------------------
# Static airline reference data: names the extractor recognises, the
# name -> IATA code table, category membership lists and the catalog of
# selectable airlines. Extend freely; the rest of the code never changes.

from typing import Dict, List, Tuple

# =================== IATA AIRLINE CODES ===================

IATA_CODES: Dict[str, str] = {
    # ==== U.S. ====
    "American Airlines": "AA",
    "Delta Air Lines": "DL",
    "United Airlines": "UA",
    "JetBlue Airways": "B6",
    "Alaska Airlines": "AS",
    "Hawaiian Airlines": "HA",
    "Southwest Airlines": "WN",
    "Frontier Airlines": "F9",
    "Spirit Airlines": "NK",
    "Allegiant Air": "G4",
    "Sun Country Airlines": "SY",
    # ==== EUROPE ====
    "British Airways": "BA",
    "Air France": "AF",
    "KLM Royal Dutch Airlines": "KL",
    "Lufthansa": "LH",
    "Virgin Atlantic": "VS",
    "Swiss International Air Lines": "LX",
    "Austrian Airlines": "OS",
    "Brussels Airlines": "SN",
    "Scandinavian Airlines": "SK",
    "Finnair": "AY",
    "Iberia": "IB",
    "Aer Lingus": "EI",
    "TAP Air Portugal": "TP",
    "LOT Polish Airlines": "LO",
    "Czech Airlines": "OK",
    "Croatia Airlines": "OU",
    "Turkish Airlines": "TK",
    # ==== ASIA / PACIFIC ====
    "Singapore Airlines": "SQ",
    "Cathay Pacific": "CX",
    "All Nippon Airways": "NH",
    "Japan Airlines": "JL",
    "Air China": "CA",
    "China Eastern Airlines": "MU",
    "China Southern Airlines": "CZ",
    "Korean Air": "KE",
    "Asiana Airlines": "OZ",
    "Thai Airways": "TG",
    "Malaysia Airlines": "MH",
    "Garuda Indonesia": "GA",
    "Philippine Airlines": "PR",
    "Vietnam Airlines": "VN",
    "Air India": "AI",
    "Qantas": "QF",
    "Virgin Australia": "VA",
    "Air New Zealand": "NZ",
    # ==== MIDDLE EAST / AFRICA ====
    "Emirates": "EK",
    "Qatar Airways": "QR",
    "Etihad Airways": "EY",
    "Oman Air": "WY",
    "Kuwait Airways": "KU",
    "Saudia": "SV",
    "Royal Jordanian": "RJ",
    "Middle East Airlines": "ME",
    "Ethiopian Airlines": "ET",
    "Kenya Airways": "KQ",
    "South African Airways": "SA",
    "EgyptAir": "MS",
    "Royal Air Maroc": "AT",
    # ==== AMERICAS ====
    "Air Canada": "AC",
    "WestJet": "WS",
    "Avianca": "AV",
    "LATAM Airlines": "LA",
    "Copa Airlines": "CM",
    "Aeromexico": "AM",
    # ==== CARGO ====
    "FedEx Express": "FX",
    "UPS Airlines": "5X",
    "Atlas Air": "5Y",
}

# Two-letter codes recognised in front of a flight number, in match order.
FLIGHT_CODE_AIRLINES: Dict[str, str] = {
    "AA": "American Airlines",
    "DL": "Delta Air Lines",
    "UA": "United Airlines",
    "WN": "Southwest Airlines",
    "B6": "JetBlue Airways",
    "AS": "Alaska Airlines",
    "NK": "Spirit Airlines",
    "F9": "Frontier Airlines",
    "G4": "Allegiant Air",
    "HA": "Hawaiian Airlines",
    "SY": "Sun Country Airlines",
    "BA": "British Airways",
    "AF": "Air France",
    "LH": "Lufthansa",
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "SQ": "Singapore Airlines",
    "CX": "Cathay Pacific",
    "VS": "Virgin Atlantic",
    "KL": "KLM Royal Dutch Airlines",
    "AC": "Air Canada",
    "IB": "Iberia",
    "TK": "Turkish Airlines",
    "EY": "Etihad Airways",
    "NH": "All Nippon Airways",
    "AV": "Avianca",
    "AM": "Aeromexico",
    "EI": "Aer Lingus",
    "AT": "Royal Air Maroc",
}

# =================== NAME MATCHING ===================

# Full names, tried in this order against the whole text.
AIRLINE_NAMES: Tuple[str, ...] = (
    "Royal Air Maroc",
    "Delta Air Lines",
    "United Airlines",
    "British Airways",
    "American Airlines",
    "Air France",
    "KLM Royal Dutch Airlines",
    "Lufthansa",
    "Emirates",
    "Qatar Airways",
    "Turkish Airlines",
    "Singapore Airlines",
    "Cathay Pacific",
    "Virgin Atlantic",
    "Virgin Australia",
    "Air Canada",
    "Iberia",
    "Etihad Airways",
    "All Nippon Airways",
    "Japan Airlines",
    "Aer Lingus",
    "Aeromexico",
    "Avianca",
    "Qantas",
    "Finnair",
    "Malaysia Airlines",
    "Royal Jordanian",
    "SriLankan Airlines",
    "Korean Air",
    "Air New Zealand",
    "Air India",
    "Air China",
    "Asiana Airlines",
    "Austrian Airlines",
    "Brussels Airlines",
    "Swiss International Air Lines",
    "Scandinavian Airlines",
    "TAP Air Portugal",
    "LOT Polish Airlines",
    "Thai Airways",
    "EgyptAir",
    "Ethiopian Airlines",
    "South African Airways",
    "Copa Airlines",
    "EVA Air",
    "China Airlines",
    "China Eastern Airlines",
    "China Southern Airlines",
    "Garuda Indonesia",
    "Vietnam Airlines",
    "Kenya Airways",
    "Middle East Airlines",
    "Saudia",
    "LATAM Airlines",
    "Philippine Airlines",
    "WestJet",
    "JetBlue Airways",
    "Alaska Airlines",
    "Hawaiian Airlines",
    "Southwest Airlines",
    "Spirit Airlines",
    "Frontier Airlines",
    "Allegiant Air",
    "Sun Country Airlines",
    "ExpressJet",
    "FedEx Express",
    "UPS Airlines",
    "Atlas Air",
    "NetJets",
    "Flexjet",
    "JSX",
)

# Short names and OCR fragments, tried after the full names.
AIRLINE_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("American Airline", "American Airlines"),
    ("American", "American Airlines"),
    ("Delta", "Delta Air Lines"),
    ("United", "United Airlines"),
    ("Southwest", "Southwest Airlines"),
    ("JetBlue", "JetBlue Airways"),
    ("Alaska", "Alaska Airlines"),
    ("Spirit", "Spirit Airlines"),
    ("Frontier", "Frontier Airlines"),
    ("Allegiant", "Allegiant Air"),
    ("Hawaiian", "Hawaiian Airlines"),
    ("Sun Country", "Sun Country Airlines"),
    ("British", "British Airways"),
    ("KLM", "KLM Royal Dutch Airlines"),
    ("Qatar", "Qatar Airways"),
    ("Singapore", "Singapore Airlines"),
    ("Cathay", "Cathay Pacific"),
    ("Virgin", "Virgin Atlantic"),
    ("Turkish", "Turkish Airlines"),
    ("Etihad", "Etihad Airways"),
    ("Nippon", "All Nippon Airways"),
    ("Swiss", "Swiss International Air Lines"),
    ("FedEx", "FedEx Express"),
)

# =================== CATEGORIES ===================

MAJOR_US_AIRLINES: Tuple[str, ...] = (
    "American Airlines",
    "Delta Air Lines",
    "United Airlines",
    "Southwest Airlines",
    "JetBlue Airways",
    "Alaska Airlines",
)

# Substring matches
CARGO_MARKERS: Tuple[str, ...] = ("FedEx", "UPS Airlines", "Atlas Air", "Kalitta Air")
CHARTER_MARKERS: Tuple[str, ...] = ("NetJets", "Flexjet", "VistaJet")

# =================== CATALOG ===================

AIRLINE_CATALOG: List[str] = sorted([
    # Major US
    "Alaska Airlines",
    "Allegiant Air",
    "American Airlines",
    "Delta Air Lines",
    "Frontier Airlines",
    "Hawaiian Airlines",
    "JetBlue Airways",
    "Southwest Airlines",
    "Spirit Airlines",
    "Sun Country Airlines",
    "United Airlines",
    # Regional
    "Air Wisconsin",
    "Cape Air",
    "Compass Airlines",
    "Endeavor Air",
    "Envoy Air",
    "ExpressJet",
    "GoJet Airlines",
    "Horizon Air",
    "Mesa Airlines",
    "Piedmont Airlines",
    "PSA Airlines",
    "Republic Airways",
    "SkyWest Airlines",
    # Cargo
    "Atlas Air",
    "FedEx Express",
    "UPS Airlines",
    # Charter
    "JSX",
    "NetJets",
    "Flexjet",
    # International with US operations
    "Aer Lingus",
    "Aeromexico",
    "Air Canada",
    "Air France",
    "All Nippon Airways",
    "Avianca",
    "British Airways",
    "Cathay Pacific",
    "Emirates",
    "Etihad Airways",
    "Iberia",
    "KLM Royal Dutch Airlines",
    "Lufthansa",
    "Qatar Airways",
    "Royal Air Maroc",
    "Singapore Airlines",
    "Turkish Airlines",
    "Virgin Atlantic",
])


def search_airlines(query: str = "") -> List[str]:
    """Catalog entries containing ``query`` (case-insensitive)."""
    q = (query or "").strip().lower()
    if not q:
        return list(AIRLINE_CATALOG)
    return [name for name in AIRLINE_CATALOG if q in name.lower()]


# =================== AIRPORT TOKEN FILTERS ===================

# Uppercase three-letter words that are never airports in itinerary text.
AIRPORT_STOPWORDS = frozenset({
    "THE", "AND", "FOR", "YOU", "ARE", "NOT", "BUT", "ALL", "ANY", "HAS",
    "HAD", "WAS", "ONE", "TWO", "OUR", "OUT", "DAY", "GET", "HOW", "NEW",
    "NOW", "OLD", "SEE", "WAY", "WHO", "ITS", "LET", "PUT", "SAY", "TOO",
    "USE", "FEE", "TAX", "VIA", "NON", "PER", "YES",
    "USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CHF", "MXN",
    "KLM", "ANA", "SAS", "TAP", "LOT", "EVA", "JSX", "UPS",
})

MONTH_TOKENS = frozenset({
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
})
WEEKDAY_TOKENS = frozenset({"MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"})

# Words that follow "AIR" when it is part of an airline name
AIR_NAME_FOLLOWERS = frozenset({
    "LINES", "FRANCE", "CANADA", "CHINA", "INDIA", "EUROPA", "SERBIA",
    "NEW", "WISCONSIN", "WAYS", "MAROC",
})

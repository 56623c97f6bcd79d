import pytest

from pointpath.extraction_engine import (
    GOOGLE_FLIGHTS_SENTINEL,
    FieldExtractor,
    clean_ocr_text,
    extract,
    extract_ocr,
)
from pointpath.models import FlightData


def test_empty_text_gives_empty_record():
    assert extract("") == FlightData()
    assert extract("").to_payload() == {}


def test_whitespace_only_gives_empty_record():
    assert extract("   \n\t  ").is_empty()


def test_google_flights_url_returns_sentinel():
    flight = extract("https://www.google.com/travel/flights?tfs=CBwQAhoeEgoyMDI1LTAxLTE1")
    assert flight.airline == "Google Flights URL detected - fetching details..."
    assert flight.origin == "Processing..."
    assert flight.destination == "Processing..."
    assert flight.departure_date == ""
    assert flight.cabin_class == ""
    assert flight.cash_price is None


def test_google_flights_sentinel_is_not_shared():
    flight = extract("google.com/travel/flights/search")
    flight.origin = "JFK"
    assert GOOGLE_FLIGHTS_SENTINEL.origin == "Processing..."


def test_full_itinerary_line():
    flight = extract("American Airlines AA123 JFK to LAX Dec 15, 2024 Economy $450")
    assert "American Airlines" in flight.airline
    assert flight.origin == "JFK"
    assert flight.destination == "LAX"
    assert flight.departure_date == "Dec 15, 2024"
    assert flight.cabin_class == "Economy"
    assert flight.cash_price == 450


def test_full_airline_name_wins():
    flight = extract("Delta Air Lines DL456 ATL LAX")
    assert flight.airline == "Delta Air Lines"
    assert flight.origin == "ATL"
    assert flight.destination == "LAX"


def test_alias_resolves_to_registry_spelling():
    flight = extract("United UA789 SFO-ORD 01/15/2025 First Class")
    assert flight.airline == "United Airlines"
    assert flight.origin == "SFO"
    assert flight.destination == "ORD"
    assert flight.departure_date == "01/15/2025"
    assert flight.cabin_class == "First"


def test_alias_followed_by_flight_number():
    assert extract("Delta 456 ATL SEA").airline == "Delta Air Lines DL 456"


def test_flight_code_with_number():
    flight = extract("Flight AA123 JFK LAX SFO")
    assert flight.airline == "American Airlines AA 123"
    # only the first two airports are kept
    assert (flight.origin, flight.destination) == ("JFK", "LAX")


def test_bare_uppercase_code():
    assert extract("UA789 SFO ORD").airline == "United Airlines UA 789"


def test_lowercase_route_fallback():
    flight = extract("american airlines aa123 jfk to lax")
    assert flight.airline == "American Airlines"
    assert flight.origin == "JFK"
    assert flight.destination == "LAX"


def test_place_name_fallback():
    flight = extract("Cheap fares from New York to London this summer")
    assert (flight.origin, flight.destination) == ("New York", "London")
    flight = extract("Trip: Boston to San Francisco")
    assert flight.origin == "Boston"
    assert flight.destination == "San Francisco"


def test_single_airport_leaves_route_unset():
    flight = extract("Arriving at JFK soon")
    assert flight.origin is None
    assert flight.destination is None


def test_stopwords_are_not_airports():
    flight = extract("THE flight AND fare: JFK LAX")
    assert (flight.origin, flight.destination) == ("JFK", "LAX")


def test_airline_name_words_are_not_airports():
    flight = extract("AIR FRANCE AF22 CDG JFK")
    assert flight.airline == "Air France"
    assert (flight.origin, flight.destination) == ("CDG", "JFK")


def test_month_token_in_date_context_is_not_airport():
    flight = extract("DEC 15 2024 JFK LAX")
    assert (flight.origin, flight.destination) == ("JFK", "LAX")
    assert flight.departure_date == "DEC 15 2024"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Depart 03-21-2025", "03-21-2025"),
        ("Leaving 15 Mar 2025 at noon", "15 Mar 2025"),
        ("on December 1, 2025", "December 1, 2025"),
        ("Sun, Jun 8 nonstop", "Sun, Jun 8"),
        ("Back home Jul 4", "Jul 4"),
    ],
)
def test_date_shapes(text, expected):
    assert extract(text).departure_date == expected


def test_numeric_date_beats_later_shapes():
    assert extract("Dec 15, 2024 or 01/02/2025").departure_date == "01/02/2025"


def test_departing_flight_date_preferred():
    flight = extract("Return Sat, Jun 14 Departing flight Mon, Jun 3 JFK LHR")
    assert flight.departure_date == "Mon, Jun 3"


def test_price_with_thousands_and_cents():
    flight = extract("Delta ATL to SEA $1,234.56 Premium")
    assert flight.airline == "Delta Air Lines"
    assert (flight.origin, flight.destination) == ("ATL", "SEA")
    assert flight.cash_price == 1234.56
    assert flight.cabin_class == "Premium Economy"


def test_first_price_wins():
    assert extract("Was $500 now $450").cash_price == 500
    assert extract("Total $450").cash_price == 450


@pytest.mark.parametrize(
    "text,cabin",
    [
        ("Premium Economy (Economy also available)", "Premium Economy"),
        ("Southwest WN100 DAL HOU Coach $99", "Economy"),
        ("Main Cabin saver", "Economy"),
        ("Business Class lie-flat", "Business"),
        ("J Class fare", "Business"),
        ("First", "First"),
    ],
)
def test_cabin_precedence(text, cabin):
    assert extract(text).cabin_class == cabin


def test_no_match_leaves_fields_unset():
    flight = extract("see you soon")
    assert flight.to_payload() == {}


def test_payload_uses_display_keys():
    payload = extract("Delta ATL to SEA $99 Economy 01/15/2025").to_payload()
    assert payload["cabinClass"] == "Economy"
    assert payload["cashPrice"] == 99
    assert payload["departureDate"] == "01/15/2025"


def test_extract_is_idempotent():
    text = "British Airways BA117 JFK LHR Dec 15, 2024 Business $2,450"
    assert extract(text) == extract(text)


def test_clean_ocr_text_drops_stray_separators():
    assert clean_ocr_text("BA 117 · Departing") == "BA 117   Departing"
    assert "Brit|sh" in clean_ocr_text("Brit|sh Airways")


def test_ocr_screenshot_text():
    text = (
        "Brit1sh Alrways\n"
        "BA 117 · Departing flight · Mon, Jun 3\n"
        "JFK → LHR\n"
        "Business\n"
        "$2,450"
    )
    flight = extract_ocr(text)
    assert flight.airline.startswith("British Airways")
    assert (flight.origin, flight.destination) == ("JFK", "LHR")
    assert flight.departure_date == "Mon, Jun 3"
    assert flight.cabin_class == "Business"
    assert flight.cash_price == 2450


def test_ocr_british_airways_misreads():
    assert extract_ocr("Brit1sh Alrways JFK LHR").airline == "British Airways"
    assert extract_ocr("8A 117 JFK LHR").airline == "British Airways BA 117"


def test_extractor_instance_matches_module_function():
    text = "Royal Air Maroc AT201 JFK CMN"
    assert FieldExtractor().extract(text) == extract(text)
    assert extract(text).airline == "Royal Air Maroc"


def test_ocr_departing_date_beats_later_return_date():
    text = "Departing flight Mon, Jun 3 JFK LHR\nReturn flight Jun 10, 2025"
    assert extract_ocr(text).departure_date == "Mon, Jun 3"
    # pasted text keeps fully dated shapes first
    assert extract(text).departure_date == "Jun 10, 2025"

import asyncio

import pytest

from pointpath import pipeline as pipeline_module
from pointpath.errors import OCRError
from pointpath.pipeline import FlightPointPipeline

SCREENSHOT_TEXT = (
    "Brit1sh Alrways\n"
    "BA 117 · Departing flight · Mon, Jun 3\n"
    "JFK → LHR\n"
    "Business\n"
    "$2,450"
)


class StubReader:
    def __init__(self, text=SCREENSHOT_TEXT, error=None):
        self.text = text
        self.error = error
        self.calls = 0

    async def transcribe(self, image_bytes):
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


def test_analyze_text_end_to_end():
    result = FlightPointPipeline().analyze_text(
        "American Airlines AA123 JFK to LAX Dec 15, 2024 Economy $450"
    )
    assert result.source == "text"
    assert result.flight.origin == "JFK"
    assert result.lookup_airline == "American Airlines"
    assert result.bookability.is_bookable
    assert result.recommendation.preferred_partner == "Aer Lingus AerClub"
    assert result.display_date == "12/15/24"
    assert set(result.processing_time) == {"extract", "resolve", "total"}
    assert result.ocr_text is None


def test_flight_number_is_dropped_for_lookup():
    result = FlightPointPipeline().analyze_text("Flight UA789 SFO ORD")
    assert result.flight.airline == "United Airlines UA 789"
    assert result.lookup_airline == "United Airlines"
    assert result.recommendation.preferred_partner == "Air Canada Aeroplan"


def test_analyze_text_without_airline():
    result = FlightPointPipeline().analyze_text("")
    assert result.flight.is_empty()
    assert result.lookup_airline is None
    assert result.bookability.message == "No airline specified"
    assert result.recommendation is None
    assert result.display_date == ""


def test_unknown_airline_is_not_bookable():
    result = FlightPointPipeline().analyze_text("Spirit Airlines NK100 FLL LGA")
    assert result.bookability.message == "No point path available."
    assert result.recommendation is None


def test_analyze_image_uses_ocr_text():
    reader = StubReader()
    pipeline = FlightPointPipeline(reader=reader)

    result = asyncio.run(pipeline.analyze_image(b"png-bytes"))

    assert reader.calls == 1
    assert result.source == "ocr"
    assert result.ocr_text == SCREENSHOT_TEXT
    assert result.lookup_airline == "British Airways"
    assert result.flight.cabin_class == "Business"
    assert result.recommendation.is_direct_partner
    assert "ocr" in result.processing_time
    assert result.processing_time["total"] >= result.processing_time["ocr"]


def test_failed_ocr_leaves_no_timer_behind():
    reader = StubReader(error=OCRError("OCR engine failed: timeout"))
    pipeline = FlightPointPipeline(reader=reader)

    with pytest.raises(OCRError):
        asyncio.run(pipeline.analyze_image(b"png-bytes"))

    assert reader.calls == 1
    assert not [key for key in pipeline_module.logger.timers if key.endswith(":ocr")]

# pipeline.py
from typing import Dict, Optional

from .explainer import explain
from .extraction_engine import FieldExtractor
from .logging_utils import get_logger
logger = get_logger("pointpath.pipeline")
from .models import AnalysisResult, FlightData
from .ocr import ScreenshotReader
from .partners import PartnerRegistry, registry as default_registry
from .resolver import resolve
from .utils import format_display_date


class FlightPointPipeline:
    """text or screenshot -> flight fields -> transfer partners -> recommendation"""

    def __init__(
        self,
        extractor: Optional[FieldExtractor] = None,
        reader: Optional[ScreenshotReader] = None,
        registry: PartnerRegistry = default_registry,
    ) -> None:
        self.extractor = extractor or FieldExtractor()
        self.reader = reader or ScreenshotReader()
        self.registry = registry

    def lookup_airline(self, flight: FlightData) -> Optional[str]:
        """Registry spelling of the extracted airline, flight number dropped."""
        if not flight.airline:
            return None
        return self.registry.canonical_name(flight.airline) or flight.airline.strip()

    def analyze_text(self, text: str) -> AnalysisResult:
        return self._analyze(text, source="text")

    async def analyze_image(self, image_bytes: bytes) -> AnalysisResult:
        logger.start_timer("ocr")
        try:
            ocr_text = await self.reader.transcribe(image_bytes)
        finally:
            ocr_time = logger.end_timer("ocr")

        result = self._analyze(ocr_text, source="ocr")
        result.ocr_text = ocr_text
        result.processing_time = {"ocr": ocr_time, **result.processing_time}
        result.processing_time["total"] += ocr_time
        return result

    def _analyze(self, text: str, source: str) -> AnalysisResult:
        timing: Dict[str, float] = {}

        logger.start_timer("extract")
        if source == "ocr":
            flight = self.extractor.extract_ocr(text)
        else:
            flight = self.extractor.extract(text)
        timing["extract"] = logger.end_timer("extract")

        logger.start_timer("resolve")
        airline = self.lookup_airline(flight)
        bookability = resolve(airline or "", registry=self.registry)
        recommendation = explain(airline, bookability) if bookability.is_bookable else None
        timing["resolve"] = logger.end_timer("resolve")
        timing["total"] = timing["extract"] + timing["resolve"]

        logger.event(
            "flight_analyzed",
            source=source,
            airline=airline,
            bookable=bookability.is_bookable,
            preferred_partner=recommendation.preferred_partner if recommendation else None,
            duration_ms=int(timing["total"] * 1000),
        )

        return AnalysisResult(
            source=source,
            flight=flight,
            lookup_airline=airline,
            bookability=bookability,
            recommendation=recommendation,
            display_date=format_display_date(flight.departure_date),
            processing_time=timing,
        )

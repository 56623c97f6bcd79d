# models.py
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


CABIN_CLASSES = ("Economy", "Premium Economy", "Business", "First")

_RATIO_RE = re.compile(r"^\d+:\d+(?:\.\d+)?$")


class Relationship(str, Enum):
    DIRECT = "Direct"
    ALLIANCE = "Alliance"
    BILATERAL = "Bilateral"

    @property
    def priority(self) -> int:
        return _RELATIONSHIP_PRIORITY[self]

    @property
    def emoji(self) -> str:
        return _RELATIONSHIP_EMOJI[self]


_RELATIONSHIP_PRIORITY = {
    Relationship.DIRECT: 0,
    Relationship.ALLIANCE: 1,
    Relationship.BILATERAL: 2,
}

_RELATIONSHIP_EMOJI = {
    Relationship.DIRECT: "⭐",
    Relationship.ALLIANCE: "🌐",
    Relationship.BILATERAL: "🔁",
}


class AirlineCategory(str, Enum):
    MAJOR_US = "Major US"
    REGIONAL = "Regional"
    CARGO = "Cargo"
    CHARTER = "Charter"
    INTERNATIONAL = "International"


class _Payload(BaseModel):
    """Camel-cased on the wire, snake_cased in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlightData(_Payload):
    """Partial flight record. A field left as None is unknown."""

    airline: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_date: Optional[str] = None
    cabin_class: Optional[str] = None
    cash_price: Optional[float] = Field(default=None, ge=0)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_payload()


class PartnerProgram(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    alliance: str
    transfer_ratio: str
    transfer_time: str
    bookable_airlines: Tuple[str, ...]
    bilateral_partners: Tuple[str, ...] = ()

    @field_validator("transfer_ratio")
    @classmethod
    def _validate_ratio(cls, v: str) -> str:
        if not _RATIO_RE.match(v):
            raise ValueError(f"transfer ratio must look like '1:1', got {v!r}")
        return v


class PartnerMatch(_Payload):
    partner_name: str
    relationship: Relationship
    transfer_ratio: str
    transfer_time: str


class BookabilityResult(_Payload):
    is_bookable: bool
    partner_programs: List[PartnerMatch] = Field(default_factory=list)
    message: str


class EmojiBadge(_Payload):
    emoji: str
    meaning: str


class AirlineRecommendation(_Payload):
    name: str
    iata_code: Optional[str] = None
    category: AirlineCategory
    is_direct_partner: bool
    is_alliance_bookable: bool
    is_bilateral_bookable: bool
    bookable_via: List[str]
    partner_details: List[PartnerMatch]
    preferred_partner: str
    transfer_ratio: str
    transfer_time: str
    how_to_book_steps: List[str]
    notes: List[str] = Field(default_factory=list)
    recommendation_reasons: Optional[List[str]] = None
    badges: List[EmojiBadge] = Field(default_factory=list)


class AnalysisResult(_Payload):
    source: str = "text"
    flight: FlightData
    lookup_airline: Optional[str] = None
    bookability: Optional[BookabilityResult] = None
    recommendation: Optional[AirlineRecommendation] = None
    display_date: str = ""
    ocr_text: Optional[str] = None
    processing_time: Dict[str, float] = Field(default_factory=dict)

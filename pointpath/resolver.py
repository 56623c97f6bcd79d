# resolver.py
import logging

from .logging_utils import log_event
from .models import BookabilityResult, PartnerMatch
from .partners import PartnerRegistry, registry as default_registry

logger = logging.getLogger("pointpath.resolver")

NO_AIRLINE_MESSAGE = "No airline specified"
NOT_BOOKABLE_MESSAGE = "No point path available."


def _summary(airline: str, count: int) -> str:
    plural = "s" if count > 1 else ""
    return f"{airline} is bookable through {count} Amex transfer partner{plural}."


def resolve(airline_name: str, registry: PartnerRegistry = default_registry) -> BookabilityResult:
    """
    Which transfer partners can book ``airline_name``.

    Lookup is exact after trimming (case-sensitive). Matches come back
    ordered Direct, Alliance, Bilateral; equal tiers keep registry order.
    """
    airline = (airline_name or "").strip()
    if not airline:
        return BookabilityResult(is_bookable=False, message=NO_AIRLINE_MESSAGE)

    pairs = registry.matches(airline)
    if not pairs:
        log_event(logger, "airline_not_bookable", level=logging.DEBUG, airline=airline)
        return BookabilityResult(is_bookable=False, message=NOT_BOOKABLE_MESSAGE)

    programs = []
    for partner_name, relationship in pairs:
        program = registry.program(partner_name)
        programs.append(
            PartnerMatch(
                partner_name=partner_name,
                relationship=relationship,
                transfer_ratio=program.transfer_ratio,
                transfer_time=program.transfer_time,
            )
        )
    # sorted() is stable
    programs = sorted(programs, key=lambda p: p.relationship.priority)

    log_event(
        logger,
        "airline_resolved",
        level=logging.DEBUG,
        airline=airline,
        partners=len(programs),
        preferred=programs[0].partner_name,
    )
    return BookabilityResult(
        is_bookable=True,
        partner_programs=programs,
        message=_summary(airline, len(programs)),
    )

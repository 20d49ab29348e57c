from games.domain.aggregation import aggregate, with_availability
from games.domain.discounts import check_applicable, quote
from games.domain.models import (
    AggregationResult,
    AttendanceRecord,
    DiscountCode,
    DiscountQuote,
    GameAvailability,
    GameListing,
    GameListingPage,
    GameSummary,
    PaymentOutcome,
)
from games.domain.value_objects import (
    Capacity,
    DiscountType,
    GameId,
    GroupId,
    Money,
    PaymentStatus,
    PlayerId,
)

__all__ = [
    "aggregate",
    "with_availability",
    "check_applicable",
    "quote",
    "AggregationResult",
    "AttendanceRecord",
    "DiscountCode",
    "DiscountQuote",
    "GameAvailability",
    "GameListing",
    "GameListingPage",
    "GameSummary",
    "PaymentOutcome",
    "Capacity",
    "DiscountType",
    "GameId",
    "GroupId",
    "Money",
    "PaymentStatus",
    "PlayerId",
]

"""Domain models for game listings and bookings.

These are pure domain objects with no API input rules.
Django ORM models are in games/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from games.domain.errors import InvalidRowError
from games.domain.value_objects import DiscountType, Money, PaymentStatus


@dataclass(frozen=True)
class GameSummary:
    """A game with its completed-attendee count.

    Derived on every read from join rows; never persisted. ``actual_attendees``
    is ``None`` when the count could not be determined.
    """

    id: str
    name: str | None = None
    description: str | None = None
    game_date: date | str | None = None
    game_time: time | str | None = None
    location: str | None = None
    price: Decimal | None = None
    total_tickets: int | None = None
    available_tickets: int | None = None
    duration_hours: Decimal | None = None
    created_at: datetime | str | None = None
    created_by: str | None = None
    groups: dict[str, Any] | None = None
    organizer: dict[str, Any] | None = None
    actual_attendees: int | None = 0


@dataclass(frozen=True)
class GameAvailability:
    """Remaining capacity of a game."""

    spots_left: int
    is_fully_booked: bool

    @property
    def display_spots_left(self) -> int | None:
        """Spots left as shown to players; hidden once the game is full."""
        if self.is_fully_booked:
            return None
        return self.spots_left


@dataclass(frozen=True)
class GameListing:
    """A summary paired with its availability, if it could be computed."""

    summary: GameSummary
    availability: GameAvailability | None


@dataclass(frozen=True)
class GameListingPage:
    """One page of upcoming games."""

    games: tuple[GameListing, ...]
    page: int | None = None
    page_size: int | None = None
    total: int | None = None

    @property
    def is_paginated(self) -> bool:
        return self.page is not None

    @property
    def total_pages(self) -> int | None:
        if self.page_size is None or self.total is None:
            return None
        return (self.total + self.page_size - 1) // self.page_size


@dataclass(frozen=True)
class AggregationResult:
    """Output of one aggregation pass: summaries plus the rows it skipped."""

    summaries: tuple[GameSummary, ...]
    errors: tuple[InvalidRowError, ...] = ()


@dataclass(frozen=True)
class PaymentOutcome:
    """A payment result as reported by the payment processor."""

    game_id: str
    player_id: str
    processor_status: str
    amount_paid: Decimal | None = None
    payment_intent_id: str | None = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain representation of a GameAttendee after reconciliation."""

    id: str
    game_id: str
    player_id: str
    payment_status: PaymentStatus
    amount_paid: Decimal | None = None
    available_tickets: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class DiscountCode:
    """A discount code as stored, with its scope and usage limits.

    ``game_id`` and ``season_id`` restrict the code when set; ``max_uses``
    of ``None`` or 0 means unlimited.
    """

    code: str
    discount_type: DiscountType
    discount_value: Decimal
    description: str = ""
    game_id: str | None = None
    season_id: str | None = None
    valid_until: datetime | None = None
    max_uses: int | None = None
    used_count: int = 0


@dataclass(frozen=True)
class DiscountQuote:
    """The price of a game after a discount code was applied."""

    code: str
    discount_type: DiscountType
    discount_value: Decimal
    amount: Money
    final_price: Money
    description: str = ""

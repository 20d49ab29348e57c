"""Store interfaces (repository pattern).

Stores must be swappable. Game stores return join rows as plain dicts so the
aggregation sees the same shape whatever backs the store.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Any

from games.domain import DiscountCode, GameId, GroupId, PaymentStatus, PlayerId

JoinRow = dict[str, Any]


class GameStore(ABC):
    """Interface for reading games with their attendees."""

    @abstractmethod
    def list_upcoming_game_rows(
        self,
        on_or_after: date,
        group_id: GroupId | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[JoinRow]:
        """Return join rows for games dated on or after ``on_or_after``.

        Rows are ordered by game_date ascending. Each row carries the game
        fields plus a ``game_attendees`` list of ``{id, payment_status}``.
        """
        ...

    @abstractmethod
    def count_upcoming_games(
        self, on_or_after: date, group_id: GroupId | None = None
    ) -> int:
        """Return how many games ``list_upcoming_game_rows`` would yield unpaged."""
        ...

    @abstractmethod
    def get_game_row(self, game_id: GameId) -> JoinRow | None:
        """Return the join row for a game, or None if not found."""
        ...


class AttendanceStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that commits the enclosed writes together."""
        ...

    @abstractmethod
    def lock_game(self, game_id: GameId) -> int | None:
        """Lock a game for the rest of the enclosing ``atomic()`` block.

        Writers for the same game run one after another while the lock is
        held. Returns the game's capacity, or None if the game does not exist.
        """
        ...

    @abstractmethod
    def find_attendee(self, game_id: GameId, player_id: PlayerId) -> JoinRow | None:
        """Return the booking of a player for a game, or None."""
        ...

    @abstractmethod
    def create_attendee(
        self,
        game_id: GameId,
        player_id: PlayerId,
        status: PaymentStatus,
        amount_paid: Decimal | None = None,
        payment_intent_id: str | None = None,
    ) -> JoinRow:
        """Create a booking and return it with ``created`` set.

        If the player already has a booking for the game, that booking is
        returned unchanged with ``created`` false.
        """
        ...

    @abstractmethod
    def set_payment_status(
        self,
        attendee_id: str,
        status: PaymentStatus,
        amount_paid: Decimal | None = None,
    ) -> None:
        """Durably update the payment status of a booking."""
        ...

    @abstractmethod
    def count_completed(self, game_id: GameId) -> int:
        """Return the number of completed bookings for a game."""
        ...

    @abstractmethod
    def set_available_tickets(self, game_id: GameId, value: int) -> None:
        """Store the denormalized remaining ticket count of a game."""
        ...


class DiscountCodeStore(ABC):
    """Interface for looking up discount codes."""

    @abstractmethod
    def find_active_code(self, code: str) -> DiscountCode | None:
        """Return the active discount code matching ``code`` exactly, or None."""
        ...

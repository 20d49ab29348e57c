"""Payment reconciliation service.

Turns payment processor outcomes into booking status transitions. Once a
payment is confirmed the booking is stored as completed before ``apply``
returns; failed or cancelled payments never leave a booking completed.
Bookings are never deleted, cancellation is a status transition.
"""

from decimal import Decimal

from loguru import logger

from games.domain import (
    AttendanceRecord,
    GameId,
    Money,
    PaymentOutcome,
    PaymentStatus,
    PlayerId,
)
from games.domain.errors import (
    AttendeeNotFoundError,
    GameNotFoundError,
    InvalidAmountError,
    InvalidGameIdError,
    InvalidPlayerIdError,
    UnknownPaymentStatusError,
)
from games.stores.interfaces import AttendanceStore

# Statuses reported by the payment processor for checkout sessions,
# payment intents and webhooks.
PROCESSOR_STATUSES: dict[str, PaymentStatus] = {
    "paid": PaymentStatus.COMPLETED,
    "succeeded": PaymentStatus.COMPLETED,
    "complete": PaymentStatus.COMPLETED,
    "completed": PaymentStatus.COMPLETED,
    "failed": PaymentStatus.FAILED,
    "canceled": PaymentStatus.CANCELLED,
    "cancelled": PaymentStatus.CANCELLED,
    "expired": PaymentStatus.CANCELLED,
    "unpaid": PaymentStatus.PENDING,
    "open": PaymentStatus.PENDING,
    "processing": PaymentStatus.PENDING,
}


def map_processor_status(status: str) -> PaymentStatus:
    """Map a processor status string onto a booking payment status.

    Raises:
        UnknownPaymentStatusError: If the status is not recognised.
    """
    try:
        return PROCESSOR_STATUSES[status.strip().lower()]
    except (KeyError, AttributeError):
        raise UnknownPaymentStatusError(str(status))


class PaymentReconciler:
    """Applies payment outcomes to bookings and keeps ticket counts current."""

    def __init__(self, store: AttendanceStore) -> None:
        self._store = store

    def apply(self, outcome: PaymentOutcome) -> AttendanceRecord:
        """Record a payment outcome for a player's booking of a game.

        Creates the booking when the player has none yet.

        Raises:
            InvalidGameIdError: If the game id is not a valid UUID.
            InvalidPlayerIdError: If the player id is not a valid UUID.
            GameNotFoundError: If the game does not exist.
            UnknownPaymentStatusError: If the processor status is not recognised.
            InvalidAmountError: If the amount paid is negative or not a number.
        """
        status = map_processor_status(outcome.processor_status)
        game_id, player_id = self._parse_ids(outcome.game_id, outcome.player_id)
        amount_paid = self._parse_amount(outcome.amount_paid)

        with self._store.atomic():
            total = self._store.lock_game(game_id)
            if total is None:
                raise GameNotFoundError(outcome.game_id)

            attendee = self._store.find_attendee(game_id, player_id)
            if attendee is None:
                attendee = self._store.create_attendee(
                    game_id,
                    player_id,
                    status,
                    amount_paid=amount_paid,
                    payment_intent_id=outcome.payment_intent_id,
                )
            if attendee.get("created"):
                previous = None
            else:
                previous = attendee["payment_status"]
                if status is PaymentStatus.PENDING and PaymentStatus.is_counted(
                    previous
                ):
                    # A late pending report never downgrades a confirmed payment.
                    status = PaymentStatus.COMPLETED
                self._store.set_payment_status(
                    attendee["id"], status, amount_paid=amount_paid
                )

            available = self._refresh_available_tickets(game_id, total)

        logger.info(
            "Booking {attendee_id} for game {game_id}: {previous} -> {status}",
            attendee_id=attendee["id"],
            game_id=outcome.game_id,
            previous=previous,
            status=status.value,
        )
        return AttendanceRecord(
            id=attendee["id"],
            game_id=str(game_id),
            player_id=str(player_id),
            payment_status=status,
            amount_paid=(
                amount_paid if amount_paid is not None else attendee.get("amount_paid")
            ),
            available_tickets=available,
        )

    def cancel(self, game_id: str, player_id: str) -> AttendanceRecord:
        """Cancel a player's booking of a game.

        Raises:
            InvalidGameIdError: If the game id is not a valid UUID.
            InvalidPlayerIdError: If the player id is not a valid UUID.
            AttendeeNotFoundError: If the player has no booking for the game.
        """
        game, player = self._parse_ids(game_id, player_id)

        with self._store.atomic():
            total = self._store.lock_game(game)
            existing = None
            if total is not None:
                existing = self._store.find_attendee(game, player)
            if existing is None:
                raise AttendeeNotFoundError(game_id, player_id)
            self._store.set_payment_status(existing["id"], PaymentStatus.CANCELLED)
            available = self._refresh_available_tickets(game, total)

        logger.info(
            "Booking {attendee_id} for game {game_id} cancelled",
            attendee_id=existing["id"],
            game_id=game_id,
        )
        return AttendanceRecord(
            id=existing["id"],
            game_id=str(game),
            player_id=str(player),
            payment_status=PaymentStatus.CANCELLED,
            amount_paid=existing.get("amount_paid"),
            available_tickets=available,
        )

    def _refresh_available_tickets(self, game_id: GameId, total: int) -> int:
        available = total - self._store.count_completed(game_id)
        self._store.set_available_tickets(game_id, available)
        return available

    def _parse_ids(self, game_id: str, player_id: str) -> tuple[GameId, PlayerId]:
        try:
            game = GameId.from_string(game_id)
        except (ValueError, TypeError, AttributeError):
            raise InvalidGameIdError()
        try:
            player = PlayerId.from_string(player_id)
        except (ValueError, TypeError, AttributeError):
            raise InvalidPlayerIdError()
        return game, player

    def _parse_amount(self, amount: Decimal | None) -> Decimal | None:
        if amount is None:
            return None
        try:
            return Money(Decimal(amount)).amount
        except (ArithmeticError, TypeError, ValueError):
            raise InvalidAmountError("amount paid")

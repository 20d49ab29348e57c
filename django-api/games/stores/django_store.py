"""Django ORM implementation of the game, attendance and discount code stores."""

from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Prefetch, QuerySet

from games.domain import (
    DiscountCode,
    DiscountType,
    GameId,
    GroupId,
    PaymentStatus,
    PlayerId,
)
from games.models import DiscountCode as DiscountCodeModel
from games.models import Game, GameAttendee
from games.stores.interfaces import (
    AttendanceStore,
    DiscountCodeStore,
    GameStore,
    JoinRow,
)


def _attendee_row(attendee: GameAttendee) -> JoinRow:
    return {"id": str(attendee.id), "payment_status": attendee.payment_status}


def _booking_row(attendee: GameAttendee, created: bool = False) -> JoinRow:
    return {
        "id": str(attendee.id),
        "payment_status": attendee.payment_status,
        "amount_paid": attendee.amount_paid,
        "created": created,
    }


def _game_row(game: Game) -> JoinRow:
    group = game.group
    organizer = game.created_by
    return {
        "id": str(game.id),
        "name": game.name,
        "description": game.description,
        "game_date": game.game_date,
        "game_time": game.game_time,
        "location": game.location,
        "price": game.price,
        "total_tickets": game.total_tickets,
        "available_tickets": game.available_tickets,
        "duration_hours": game.duration_hours,
        "created_at": game.created_at,
        "created_by": str(game.created_by_id) if game.created_by_id else None,
        "groups": (
            {"name": group.name, "whatsapp_group": group.whatsapp_group}
            if group is not None
            else None
        ),
        "organizer": (
            {
                "id": str(organizer.id),
                "name": organizer.name,
                "photo_url": organizer.photo_url,
            }
            if organizer is not None
            else None
        ),
        "game_attendees": [_attendee_row(a) for a in game.game_attendees.all()],
    }


class DjangoGameStore(GameStore):
    """Game store backed by the Django ORM.

    Attendees are prefetched, so each game yields exactly one row with all of
    its bookings nested.
    """

    def _games(self) -> QuerySet[Game]:
        return Game.objects.select_related("group", "created_by").prefetch_related(
            Prefetch(
                "game_attendees",
                queryset=GameAttendee.objects.only("id", "game_id", "payment_status"),
            )
        )

    def _upcoming(
        self, games: QuerySet[Game], on_or_after: date, group_id: GroupId | None
    ) -> QuerySet[Game]:
        games = games.filter(game_date__gte=on_or_after)
        if group_id is not None:
            games = games.filter(group_id=group_id.value)
        return games

    def list_upcoming_game_rows(
        self,
        on_or_after: date,
        group_id: GroupId | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[JoinRow]:
        games = self._upcoming(self._games(), on_or_after, group_id).order_by(
            "game_date", "game_time"
        )
        if limit is not None:
            games = games[offset : offset + limit]
        elif offset:
            games = games[offset:]
        return [_game_row(game) for game in games]

    def count_upcoming_games(
        self, on_or_after: date, group_id: GroupId | None = None
    ) -> int:
        return self._upcoming(Game.objects.all(), on_or_after, group_id).count()

    def get_game_row(self, game_id: GameId) -> JoinRow | None:
        game = self._games().filter(id=game_id.value).first()
        if game is None:
            return None
        return _game_row(game)


class DjangoAttendanceStore(AttendanceStore):
    """Booking store backed by the Django ORM.

    ``lock_game`` takes a row lock with ``SELECT ... FOR UPDATE`` and must be
    called inside ``atomic()``.
    """

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def lock_game(self, game_id: GameId) -> int | None:
        return (
            Game.objects.select_for_update()
            .filter(id=game_id.value)
            .values_list("total_tickets", flat=True)
            .first()
        )

    def find_attendee(self, game_id: GameId, player_id: PlayerId) -> JoinRow | None:
        attendee = GameAttendee.objects.filter(
            game_id=game_id.value, player_id=player_id.value
        ).first()
        if attendee is None:
            return None
        return _booking_row(attendee)

    def create_attendee(
        self,
        game_id: GameId,
        player_id: PlayerId,
        status: PaymentStatus,
        amount_paid: Decimal | None = None,
        payment_intent_id: str | None = None,
    ) -> JoinRow:
        try:
            with transaction.atomic():
                attendee = GameAttendee.objects.create(
                    game_id=game_id.value,
                    player_id=player_id.value,
                    payment_status=status.value,
                    amount_paid=amount_paid,
                    payment_intent_id=payment_intent_id,
                )
        except IntegrityError:
            # Another writer booked the same player first.
            attendee = GameAttendee.objects.filter(
                game_id=game_id.value, player_id=player_id.value
            ).first()
            if attendee is None:
                raise
            return _booking_row(attendee)
        return _booking_row(attendee, created=True)

    def set_payment_status(
        self,
        attendee_id: str,
        status: PaymentStatus,
        amount_paid: Decimal | None = None,
    ) -> None:
        attendee = GameAttendee.objects.get(id=attendee_id)
        attendee.payment_status = status.value
        update_fields = ["payment_status", "updated_at"]
        if amount_paid is not None:
            attendee.amount_paid = amount_paid
            update_fields.append("amount_paid")
        attendee.save(update_fields=update_fields)

    def count_completed(self, game_id: GameId) -> int:
        return GameAttendee.objects.filter(
            game_id=game_id.value, payment_status=PaymentStatus.COMPLETED.value
        ).count()

    def set_available_tickets(self, game_id: GameId, value: int) -> None:
        game = Game.objects.get(id=game_id.value)
        game.available_tickets = value
        game.save(update_fields=["available_tickets", "updated_at"])


class DjangoDiscountCodeStore(DiscountCodeStore):
    """Discount code store backed by the Django ORM."""

    def find_active_code(self, code: str) -> DiscountCode | None:
        row = DiscountCodeModel.objects.filter(code=code, is_active=True).first()
        if row is None:
            return None
        return DiscountCode(
            code=row.code,
            discount_type=DiscountType(row.discount_type),
            discount_value=row.discount_value,
            description=row.description,
            game_id=str(row.game_id) if row.game_id else None,
            season_id=str(row.season_id) if row.season_id else None,
            valid_until=row.valid_until,
            max_uses=row.max_uses,
            used_count=row.used_count,
        )

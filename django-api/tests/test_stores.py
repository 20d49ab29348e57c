"""Tests for the Django ORM stores and the booking signal.

Run with: pytest tests/test_stores.py -v
"""

from datetime import timedelta
from decimal import Decimal
import uuid

import pytest
from django.contrib import admin
from django.db import transaction
from django.utils import timezone

from games.domain import (
    DiscountType,
    GameId,
    GroupId,
    PaymentOutcome,
    PaymentStatus,
    PlayerId,
)
from games.models import DiscountCode, Game, GameAttendee, Group, Player
from games.services.payment_service import PaymentReconciler
from games.stores.django_store import (
    DjangoAttendanceStore,
    DjangoDiscountCodeStore,
    DjangoGameStore,
)


@pytest.mark.django_db
class TestDjangoGameStore:
    """Tests for join rows produced from the ORM."""

    def test_one_row_per_game_with_nested_attendees(self, make_game, make_booking):
        game = make_game()
        make_booking(game, "completed")
        make_booking(game, "pending")

        rows = DjangoGameStore().list_upcoming_game_rows(timezone.localdate())

        [row] = rows
        assert row["id"] == str(game.id)
        assert sorted(a["payment_status"] for a in row["game_attendees"]) == [
            "completed",
            "pending",
        ]
        assert row["groups"] == {
            "name": game.group.name,
            "whatsapp_group": game.group.whatsapp_group,
        }
        assert row["organizer"]["name"] == game.created_by.name
        assert row["created_by"] == str(game.created_by.id)

    def test_game_without_group_or_organizer(self, make_game):
        make_game(group=None, created_by=None)
        [row] = DjangoGameStore().list_upcoming_game_rows(timezone.localdate())
        assert row["groups"] is None
        assert row["organizer"] is None
        assert row["created_by"] is None
        assert row["game_attendees"] == []

    def test_filters_by_group_and_date(self, make_game):
        today = timezone.localdate()
        game = make_game()
        make_game(group=game.group, game_date=today - timedelta(days=3))
        make_game()

        store = DjangoGameStore()
        group_id = GroupId(game.group_id)
        rows = store.list_upcoming_game_rows(today, group_id=group_id)

        assert [r["id"] for r in rows] == [str(game.id)]
        assert store.count_upcoming_games(today, group_id=group_id) == 1
        assert store.count_upcoming_games(today) == 2

    def test_offset_and_limit(self, make_game):
        today = timezone.localdate()
        games = [make_game(game_date=today + timedelta(days=i)) for i in range(4)]

        rows = DjangoGameStore().list_upcoming_game_rows(today, offset=1, limit=2)

        assert [r["id"] for r in rows] == [str(games[1].id), str(games[2].id)]

    def test_get_game_row(self, make_game):
        game = make_game()
        store = DjangoGameStore()
        assert store.get_game_row(GameId(game.id))["name"] == game.name
        assert store.get_game_row(GameId(uuid.uuid4())) is None


@pytest.mark.django_db
class TestDjangoAttendanceStore:
    """Tests for booking writes through the reconciler."""

    def test_paid_outcome_is_visible_to_next_read(self, make_game):
        game = make_game(total_tickets=5, available_tickets=5)
        player = Player.objects.create(name="Alex", email="alex@example.com")

        record = PaymentReconciler(DjangoAttendanceStore()).apply(
            PaymentOutcome(
                game_id=str(game.id),
                player_id=str(player.id),
                processor_status="paid",
                amount_paid=Decimal("8.00"),
                payment_intent_id="pi_1",
            )
        )

        attendee = GameAttendee.objects.get(game=game, player=player)
        assert attendee.payment_status == PaymentStatus.COMPLETED.value
        assert attendee.amount_paid == Decimal("8.00")
        assert attendee.payment_intent_id == "pi_1"
        game.refresh_from_db()
        assert game.available_tickets == 4
        assert record.available_tickets == 4

        [row] = DjangoGameStore().list_upcoming_game_rows(timezone.localdate())
        assert row["game_attendees"][0]["payment_status"] == "completed"

    def test_cancel_updates_status_and_tickets(self, make_game, make_booking):
        game = make_game(total_tickets=5, available_tickets=4)
        booking = make_booking(game, "completed")

        PaymentReconciler(DjangoAttendanceStore()).cancel(
            str(game.id), str(booking.player_id)
        )

        booking.refresh_from_db()
        game.refresh_from_db()
        assert booking.payment_status == "cancelled"
        assert game.available_tickets == 5

    def test_store_queries(self, make_game, make_booking):
        game = make_game(total_tickets=7)
        booking = make_booking(game, "completed")
        make_booking(game, "failed")
        store = DjangoAttendanceStore()

        assert store.count_completed(GameId(game.id)) == 1
        with transaction.atomic():
            assert store.lock_game(GameId(game.id)) == 7
            assert store.lock_game(GameId(uuid.uuid4())) is None
        found = store.find_attendee(GameId(game.id), PlayerId(booking.player_id))
        assert found["id"] == str(booking.id)

    def test_repeated_confirmation_keeps_one_booking(self, make_game):
        game = make_game(total_tickets=5, available_tickets=5)
        player = Player.objects.create(name="Sam", email="sam@example.com")
        outcome = PaymentOutcome(
            game_id=str(game.id),
            player_id=str(player.id),
            processor_status="paid",
            amount_paid=Decimal("8.00"),
            payment_intent_id="pi_2",
        )
        reconciler = PaymentReconciler(DjangoAttendanceStore())

        first = reconciler.apply(outcome)
        second = reconciler.apply(outcome)

        assert first.id == second.id
        assert GameAttendee.objects.filter(game=game, player=player).count() == 1
        game.refresh_from_db()
        assert game.available_tickets == 4

    def test_create_attendee_returns_existing_booking(self, make_game, make_booking):
        game = make_game()
        booking = make_booking(game, "completed")
        store = DjangoAttendanceStore()

        row = store.create_attendee(
            GameId(game.id), PlayerId(booking.player_id), PaymentStatus.PENDING
        )

        assert row["id"] == str(booking.id)
        assert row["created"] is False
        assert row["payment_status"] == "completed"
        assert GameAttendee.objects.filter(game=game).count() == 1


@pytest.mark.django_db
class TestBookingSignal:
    def test_status_change_is_logged(self, make_game, make_booking, log_messages):
        booking = make_booking(make_game(), "pending")
        DjangoAttendanceStore().set_payment_status(
            str(booking.id), PaymentStatus.COMPLETED
        )
        assert any(
            "stored with payment status completed" in m for m in log_messages
        )

    def test_unrelated_update_is_not_logged(self, make_game, make_booking, log_messages):
        booking = make_booking(make_game(), "pending")
        log_messages.clear()
        booking.amount_paid = Decimal("1.00")
        booking.save(update_fields=["amount_paid"])
        assert log_messages == []


def test_models_are_registered_with_admin():
    for model in (DiscountCode, Game, GameAttendee, Group, Player):
        assert admin.site.is_registered(model)


@pytest.mark.django_db
class TestDjangoDiscountCodeStore:
    def test_finds_active_code(self, make_game, make_discount_code):
        game = make_game()
        make_discount_code("fiver", discount_type="fixed", discount_value=5, game=game)

        found = DjangoDiscountCodeStore().find_active_code("FIVER")

        assert found.code == "FIVER"
        assert found.discount_type is DiscountType.FIXED
        assert found.discount_value == Decimal("5")
        assert found.game_id == str(game.id)
        assert found.season_id is None

    def test_inactive_code_is_not_found(self, make_discount_code):
        make_discount_code(is_active=False)
        assert DjangoDiscountCodeStore().find_active_code("SAVE10") is None

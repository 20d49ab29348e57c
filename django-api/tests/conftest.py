"""Pytest configuration and shared fixtures."""

from contextlib import nullcontext
from datetime import date, time, timedelta
from decimal import Decimal
import uuid

import pytest
from django.utils import timezone
from loguru import logger
from rest_framework.test import APIClient

from games.stores.interfaces import AttendanceStore, DiscountCodeStore, GameStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]))
    yield messages
    logger.remove(handler_id)


def join_row(game_id=None, statuses=None, **fields) -> dict:
    """Build a join row; ``statuses=None`` leaves out the attendee collection."""
    row = {
        "id": game_id if game_id is not None else str(uuid.uuid4()),
        "name": "Tuesday 5-a-side",
        "description": "Astro pitch, bring bibs",
        "game_date": "2030-01-01",
        "game_time": "19:00:00",
        "location": "Hackney Marshes",
        "price": Decimal("8.00"),
        "total_tickets": 10,
        "available_tickets": 10,
        "duration_hours": Decimal("1.0"),
        "created_at": "2029-12-01T10:00:00Z",
        "created_by": None,
        "groups": None,
        "organizer": None,
    }
    row.update(fields)
    if statuses is not None:
        row["game_attendees"] = [
            {"id": str(uuid.uuid4()), "payment_status": status} for status in statuses
        ]
    return row


class FakeGameStore(GameStore):
    """In-memory game store holding join rows."""

    def __init__(self, rows=None, group_rows=None) -> None:
        self.rows = list(rows or [])
        self.group_rows = dict(group_rows or {})
        self.calls: list[dict] = []

    def _matching(self, on_or_after, group_id):
        rows = self.group_rows.get(str(group_id), []) if group_id else self.rows
        return [
            row
            for row in rows
            if str(row.get("game_date", "")) >= on_or_after.isoformat()
        ]

    def list_upcoming_game_rows(self, on_or_after, group_id=None, offset=0, limit=None):
        self.calls.append(
            {
                "on_or_after": on_or_after,
                "group_id": group_id,
                "offset": offset,
                "limit": limit,
            }
        )
        rows = self._matching(on_or_after, group_id)
        end = None if limit is None else offset + limit
        return rows[offset:end]

    def count_upcoming_games(self, on_or_after, group_id=None):
        return len({row.get("id") for row in self._matching(on_or_after, group_id)})

    def get_game_row(self, game_id):
        for row in self.rows:
            if row.get("id") == str(game_id):
                return row
        return None


class FakeAttendanceStore(AttendanceStore):
    """In-memory booking store."""

    def __init__(self, games=None) -> None:
        self.games = dict(games or {})
        self.attendees: dict[str, dict] = {}
        self.available: dict[str, int] = {}
        self.calls: list[str] = []

    def atomic(self):
        return nullcontext()

    def lock_game(self, game_id):
        self.calls.append("lock_game")
        return self.games.get(str(game_id))

    def find_attendee(self, game_id, player_id):
        self.calls.append("find_attendee")
        for attendee in self.attendees.values():
            if attendee["game_id"] == str(game_id) and attendee["player_id"] == str(
                player_id
            ):
                return dict(attendee)
        return None

    def create_attendee(
        self, game_id, player_id, status, amount_paid=None, payment_intent_id=None
    ):
        attendee = {
            "id": str(uuid.uuid4()),
            "game_id": str(game_id),
            "player_id": str(player_id),
            "payment_status": status.value,
            "amount_paid": amount_paid,
            "payment_intent_id": payment_intent_id,
        }
        self.attendees[attendee["id"]] = attendee
        return {**attendee, "created": True}

    def set_payment_status(self, attendee_id, status, amount_paid=None):
        self.attendees[attendee_id]["payment_status"] = status.value
        if amount_paid is not None:
            self.attendees[attendee_id]["amount_paid"] = amount_paid

    def count_completed(self, game_id):
        return sum(
            1
            for attendee in self.attendees.values()
            if attendee["game_id"] == str(game_id)
            and attendee["payment_status"] == "completed"
        )

    def set_available_tickets(self, game_id, value):
        self.available[str(game_id)] = value


class FakeDiscountCodeStore(DiscountCodeStore):
    """In-memory discount code store keyed by upper-case code."""

    def __init__(self, codes=()) -> None:
        self.codes = {code.code: code for code in codes}
        self.lookups: list[str] = []

    def find_active_code(self, code):
        self.lookups.append(code)
        return self.codes.get(code)


@pytest.fixture
def today() -> date:
    return date(2030, 1, 1)


@pytest.fixture
def upcoming_date() -> date:
    return timezone.localdate() + timedelta(days=7)


@pytest.fixture
def make_game(db, upcoming_date):
    """Create a Game (and its group and organizer) in the database."""
    from games.models import Game, Group, Player

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        if "created_by" not in overrides:
            overrides["created_by"] = Player.objects.create(
                name=f"Organizer {n}", email=f"organizer{n}@example.com"
            )
        if "group" not in overrides:
            overrides["group"] = Group.objects.create(
                name=f"Group {n}", whatsapp_group=f"https://chat.example.com/{n}"
            )
        fields = {
            "name": f"Game {n}",
            "description": "Weekly kickabout",
            "game_date": upcoming_date,
            "game_time": time(19, 0),
            "location": "Victoria Park",
            "price": Decimal("8.00"),
            "total_tickets": 10,
            "available_tickets": 10,
        }
        fields.update(overrides)
        return Game.objects.create(**fields)

    return _make


@pytest.fixture
def make_booking(db):
    """Create a Player booked onto a game with the given payment status."""
    from games.models import GameAttendee, Player

    counter = {"n": 0}

    def _make(game, payment_status="completed", player=None):
        counter["n"] += 1
        if player is None:
            player = Player.objects.create(
                name=f"Player {counter['n']}",
                email=f"player{counter['n']}-{uuid.uuid4().hex[:6]}@example.com",
            )
        return GameAttendee.objects.create(
            game=game, player=player, payment_status=payment_status
        )

    return _make


@pytest.fixture
def make_discount_code(db):
    """Create a DiscountCode in the database."""
    from games.models import DiscountCode

    def _make(code="SAVE10", **overrides):
        fields = {
            "code": code,
            "discount_type": "percentage",
            "discount_value": Decimal("10.00"),
            "description": "Ten percent off",
        }
        fields.update(overrides)
        return DiscountCode.objects.create(**fields)

    return _make

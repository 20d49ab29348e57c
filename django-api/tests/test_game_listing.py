"""Integration tests for the game listing endpoints.

Run with: pytest tests/test_game_listing.py -v
"""

from datetime import time, timedelta
import uuid

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from games.domain.errors import MissingFieldError


@pytest.mark.django_db
class TestGameList:
    """Tests for GET /api/games-with-attendees"""

    def test_list_games_with_attendee_counts(
        self, api_client: APIClient, make_game, make_booking
    ):
        game = make_game(total_tickets=3)
        make_booking(game, "completed")
        make_booking(game, "pending")
        make_booking(game, "cancelled")

        response = api_client.get("/api/games-with-attendees")

        assert response.status_code == 200
        [item] = response.json()["games"]
        assert item["id"] == str(game.id)
        assert item["actualAttendees"] == 1
        assert item["isFullyBooked"] is False
        assert item["spotsLeft"] == 2
        assert item["total_tickets"] == 3
        assert item["price"] == "8.00"
        assert item["groups"]["name"] == game.group.name
        assert item["organizer"]["id"] == str(game.created_by.id)
        assert "pagination" not in response.json()

    def test_list_games_empty(self, api_client: APIClient):
        response = api_client.get("/api/games-with-attendees")
        assert response.status_code == 200
        assert response.json() == {"games": []}

    def test_past_games_are_excluded(self, api_client: APIClient, make_game):
        make_game(game_date=timezone.localdate() - timedelta(days=1))
        today_game = make_game(game_date=timezone.localdate())

        response = api_client.get("/api/games-with-attendees")

        ids = [g["id"] for g in response.json()["games"]]
        assert ids == [str(today_game.id)]

    def test_games_are_ordered_by_date(self, api_client: APIClient, make_game):
        today = timezone.localdate()
        later = make_game(game_date=today + timedelta(days=10))
        sooner_evening = make_game(game_date=today + timedelta(days=2))
        sooner_morning = make_game(
            game_date=today + timedelta(days=2), game_time=time(9, 0)
        )

        response = api_client.get("/api/games-with-attendees")

        ids = [g["id"] for g in response.json()["games"]]
        assert ids == [str(sooner_morning.id), str(sooner_evening.id), str(later.id)]

    def test_fully_booked_game_hides_spots_left(
        self, api_client: APIClient, make_game, make_booking
    ):
        game = make_game(total_tickets=2)
        make_booking(game)
        make_booking(game)

        [item] = api_client.get("/api/games-with-attendees").json()["games"]

        assert item["actualAttendees"] == 2
        assert item["isFullyBooked"] is True
        assert item["spotsLeft"] is None

    def test_paginated_listing(self, api_client: APIClient, make_game):
        today = timezone.localdate()
        games = [make_game(game_date=today + timedelta(days=i)) for i in range(3)]

        response = api_client.get(
            "/api/games-with-attendees", {"page": 2, "pageSize": 2}
        )

        body = response.json()
        assert [g["id"] for g in body["games"]] == [str(games[2].id)]
        assert body["pagination"] == {
            "page": 2,
            "pageSize": 2,
            "total": 3,
            "totalPages": 2,
        }

    def test_invalid_page_returns_400(self, api_client: APIClient):
        response = api_client.get("/api/games-with-attendees", {"page": 0})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAGINATION"

    def test_non_numeric_page_returns_400(self, api_client: APIClient):
        response = api_client.get("/api/games-with-attendees", {"pageSize": "lots"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_QUERY"
        assert "pageSize" in response.json()["error"]["message"]

    def test_missing_capacity_returns_500_without_details(
        self, api_client: APIClient, monkeypatch
    ):
        from games.services.game_service import GameListingService

        def fail(self, **kwargs):
            raise MissingFieldError("total_tickets", game_id="g1")

        monkeypatch.setattr(GameListingService, "list_upcoming_games", fail)

        response = api_client.get("/api/games-with-attendees")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Failed to fetch games"


@pytest.mark.django_db
class TestGroupGameList:
    """Tests for GET /api/group-games"""

    def test_lists_only_the_groups_games(
        self, api_client: APIClient, make_game, make_booking
    ):
        game = make_game()
        make_game()
        make_booking(game)

        response = api_client.get("/api/group-games", {"groupId": str(game.group_id)})

        assert response.status_code == 200
        [item] = response.json()["games"]
        assert item["id"] == str(game.id)
        assert item["actualAttendees"] == 1

    def test_group_id_is_required(self, api_client: APIClient):
        response = api_client.get("/api/group-games")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "GROUP_ID_REQUIRED"

    def test_invalid_group_id_returns_400(self, api_client: APIClient):
        response = api_client.get("/api/group-games", {"groupId": "abc"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_GROUP_ID"

    def test_unknown_group_returns_empty_list(self, api_client: APIClient):
        response = api_client.get("/api/group-games", {"groupId": str(uuid.uuid4())})
        assert response.status_code == 200
        assert response.json()["games"] == []


@pytest.mark.django_db
class TestGameDetail:
    """Tests for GET /api/games/{id}"""

    def test_get_game_returns_details(
        self, api_client: APIClient, make_game, make_booking
    ):
        game = make_game(total_tickets=1)
        make_booking(game)
        make_booking(game)

        response = api_client.get(f"/api/games/{game.id}")

        assert response.status_code == 200
        body = response.json()["game"]
        assert body["name"] == game.name
        assert body["actualAttendees"] == 2
        assert body["isFullyBooked"] is True
        assert body["spotsLeft"] is None

    def test_get_game_not_found(self, api_client: APIClient):
        response = api_client.get(f"/api/games/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "GAME_NOT_FOUND"

    def test_get_game_invalid_id_format(self, api_client: APIClient):
        response = api_client.get("/api/games/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_GAME_ID"

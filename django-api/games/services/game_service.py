"""Game listing service - all listing business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Callable
from datetime import date

from django.utils import timezone
from loguru import logger

from games.domain import (
    GameId,
    GameListing,
    GameListingPage,
    GameSummary,
    GroupId,
    aggregate,
    with_availability,
)
from games.domain.errors import (
    GameNotFoundError,
    InvalidGameIdError,
    InvalidGroupIdError,
    InvalidPaginationError,
    InvalidRowError,
)
from games.stores.interfaces import GameStore, JoinRow

DEFAULT_MAX_PAGE_SIZE = 100


class GameListingService:
    """Service for listing upcoming games with attendance and availability."""

    def __init__(
        self,
        store: GameStore,
        today: Callable[[], date] = timezone.localdate,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        self._store = store
        self._today = today
        self._max_page_size = max_page_size

    def list_upcoming_games(
        self,
        group_id: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> GameListingPage:
        """Return upcoming games, optionally for one group and one page.

        Raises:
            InvalidGroupIdError: If group_id is not a valid UUID.
            InvalidPaginationError: If page or page_size is out of range.
            MissingFieldError: If a game has no total_tickets.
        """
        group = self._parse_group_id(group_id) if group_id is not None else None
        on_or_after = self._today()

        if page is None and page_size is None:
            rows = self._store.list_upcoming_game_rows(on_or_after, group_id=group)
            return GameListingPage(games=self._listings(rows))

        page, page_size = self._validate_page(page, page_size)
        offset = (page - 1) * page_size
        rows = self._store.list_upcoming_game_rows(
            on_or_after, group_id=group, offset=offset, limit=page_size
        )
        total = self._store.count_upcoming_games(on_or_after, group_id=group)
        return GameListingPage(
            games=self._listings(rows), page=page, page_size=page_size, total=total
        )

    def get_game(self, game_id: str) -> GameListing:
        """Return one game with attendance and availability.

        Raises:
            InvalidGameIdError: If the game_id is not a valid UUID.
            GameNotFoundError: If the game does not exist.
        """
        try:
            parsed = GameId.from_string(game_id)
        except (ValueError, TypeError, AttributeError):
            raise InvalidGameIdError()

        row = self._store.get_game_row(parsed)
        if row is None:
            raise GameNotFoundError(game_id)

        listings = self._listings([row])
        if not listings:
            raise GameNotFoundError(game_id)
        return listings[0]

    def _listings(self, rows: list[JoinRow]) -> tuple[GameListing, ...]:
        result = aggregate(rows)
        for error in result.errors:
            self._log_row_error(error)
        return tuple(self._listing(summary) for summary in result.summaries)

    def _listing(self, summary: GameSummary) -> GameListing:
        if summary.actual_attendees is None:
            return GameListing(summary=summary, availability=None)
        return GameListing(summary=summary, availability=with_availability(summary))

    def _log_row_error(self, error: InvalidRowError) -> None:
        logger.warning(
            "Skipped game row {index} (game={game_id}): {reason}",
            index=error.index,
            game_id=error.game_id,
            reason=error.reason,
        )

    def _parse_group_id(self, group_id: str) -> GroupId:
        try:
            return GroupId.from_string(group_id)
        except (ValueError, TypeError, AttributeError):
            raise InvalidGroupIdError()

    def _validate_page(
        self, page: int | None, page_size: int | None
    ) -> tuple[int, int]:
        page = 1 if page is None else page
        page_size = self._max_page_size if page_size is None else page_size
        if page < 1:
            raise InvalidPaginationError("Page must be 1 or greater")
        if not 1 <= page_size <= self._max_page_size:
            raise InvalidPaginationError(
                f"Page size must be between 1 and {self._max_page_size}"
            )
        return page, page_size

"""Attendance aggregation and capacity math.

``aggregate`` folds game/attendee join rows into one ``GameSummary`` per
game. ``with_availability`` derives remaining capacity from a summary.
Both are pure functions of their input.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from games.domain.errors import InvalidFieldError, InvalidRowError, MissingFieldError
from games.domain.models import AggregationResult, GameAvailability, GameSummary
from games.domain.value_objects import Capacity, PaymentStatus

GAME_FIELDS = (
    "name",
    "description",
    "game_date",
    "game_time",
    "location",
    "price",
    "total_tickets",
    "available_tickets",
    "duration_hours",
    "created_at",
    "created_by",
    "groups",
    "organizer",
)

ATTENDEES_KEY = "game_attendees"


def _game_id(row: Mapping[str, Any]) -> str | None:
    value = row.get("id")
    if value is None or value == "":
        return None
    return str(value)


def _completed_count(attendees: Any, game_id: str, index: int) -> int:
    if not isinstance(attendees, list):
        raise InvalidRowError("attendees is not a list", game_id=game_id, index=index)
    count = 0
    for attendee in attendees:
        if not isinstance(attendee, Mapping):
            raise InvalidRowError(
                "attendee is not a mapping", game_id=game_id, index=index
            )
        if PaymentStatus.is_counted(attendee.get("payment_status")):
            count += 1
    return count


def aggregate(rows: Iterable[Mapping[str, Any]]) -> AggregationResult:
    """Fold join rows into per-game summaries in first-seen order.

    The completed count is assigned from each row's attendee collection
    rather than accumulated, so when one game spans several rows the last
    row carrying attendees wins. Stores are expected to nest all of a
    game's attendees in a single row.

    Rows without a usable id are skipped. Rows with a malformed attendee
    collection mark their game's count as unknown (``None``). Both are
    reported in ``AggregationResult.errors``.
    """
    summaries: dict[str, GameSummary] = {}
    unknown: set[str] = set()
    errors: list[InvalidRowError] = []

    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            errors.append(InvalidRowError("row is not a mapping", index=index))
            continue
        game_id = _game_id(row)
        if game_id is None:
            errors.append(InvalidRowError("row has no game id", index=index))
            continue

        if game_id not in summaries:
            fields = {name: row.get(name) for name in GAME_FIELDS}
            summaries[game_id] = GameSummary(id=game_id, actual_attendees=0, **fields)

        attendees = row.get(ATTENDEES_KEY)
        if attendees is None or game_id in unknown:
            continue
        try:
            count = _completed_count(attendees, game_id, index)
        except InvalidRowError as exc:
            errors.append(exc)
            unknown.add(game_id)
            summaries[game_id] = replace(summaries[game_id], actual_attendees=None)
            continue
        summaries[game_id] = replace(summaries[game_id], actual_attendees=count)

    return AggregationResult(summaries=tuple(summaries.values()), errors=tuple(errors))


def with_availability(summary: GameSummary) -> GameAvailability:
    """Compute spots left and the fully-booked flag for a game.

    ``spots_left`` is not clamped and goes negative when a game is
    overbooked.

    Raises:
        MissingFieldError: If ``total_tickets`` or the attendee count is
            missing.
        InvalidFieldError: If ``total_tickets`` is not a non-negative
            integer.
    """
    if summary.total_tickets is None:
        raise MissingFieldError("total_tickets", game_id=summary.id)
    if summary.actual_attendees is None:
        raise MissingFieldError("actual_attendees", game_id=summary.id)

    try:
        total = Capacity(int(summary.total_tickets)).value
    except (TypeError, ValueError):
        raise InvalidFieldError("total_tickets", game_id=summary.id)
    attending = summary.actual_attendees
    return GameAvailability(
        spots_left=total - attending,
        is_fully_booked=attending >= total,
    )

"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from loguru import logger
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from games.domain import GameListingPage, PaymentOutcome
from games.domain.errors import (
    DomainError,
    ErrorCode,
    GameNotFoundError,
    GroupIdRequiredError,
)
from games.handlers.serializers import (
    AttendanceRecordSerializer,
    BookingCancellationSerializer,
    DiscountQuoteSerializer,
    DiscountValidationSerializer,
    GameListingSerializer,
    GameListQuerySerializer,
    PaginationSerializer,
    PaymentConfirmationSerializer,
)
from games.services.discount_service import DiscountService
from games.services.game_service import GameListingService
from games.services.payment_service import PaymentReconciler
from games.stores.django_store import (
    DjangoAttendanceStore,
    DjangoDiscountCodeStore,
    DjangoGameStore,
)

ERROR_STATUS = {
    ErrorCode.GAME_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ATTENDEE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_GAME_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_GROUP_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PLAYER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.GROUP_ID_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PAGINATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_PAYMENT_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DISCOUNT_CODE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DISCOUNT_CODE_NOT_APPLICABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DISCOUNT_CODE_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DISCOUNT_CODE_EXHAUSTED: status.HTTP_400_BAD_REQUEST,
}

FETCH_FAILED_MESSAGE = "Failed to fetch games"
PAYMENT_FAILED_MESSAGE = "Failed to record payment"
DISCOUNT_FAILED_MESSAGE = "Failed to validate discount code"


def build_listing_service() -> GameListingService:
    """Wire the listing service to the ORM-backed store."""
    return GameListingService(
        DjangoGameStore(), max_page_size=settings.GAMES_MAX_PAGE_SIZE
    )


def build_payment_reconciler() -> PaymentReconciler:
    return PaymentReconciler(DjangoAttendanceStore())


def build_discount_service() -> DiscountService:
    return DiscountService(DjangoDiscountCodeStore())


def error_response(
    error: DomainError, failure_message: str = FETCH_FAILED_MESSAGE
) -> Response:
    """Map a domain error to a JSON error envelope.

    Errors without a client-facing status are logged and answered with a 500
    carrying only ``failure_message``.
    """
    code = ERROR_STATUS.get(error.code)
    if code is None:
        logger.error("{failure}: {error}", failure=failure_message, error=error)
        return Response(
            {"error": {"code": error.code.value, "message": failure_message}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=code,
    )


def invalid_input_response(errors: dict, what: str = "query parameters") -> Response:
    fields = ", ".join(sorted(errors))
    return Response(
        {
            "error": {
                "code": ErrorCode.INVALID_QUERY.value,
                "message": f"Invalid {what}: {fields}",
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def listing_payload(page: GameListingPage) -> dict:
    payload = {"games": GameListingSerializer(page.games, many=True).data}
    if page.is_paginated:
        payload["pagination"] = PaginationSerializer(page).data
    return payload


class GameListView(APIView):
    """Handler for GET /api/games-with-attendees"""

    def get(self, request: Request) -> Response:
        query = GameListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_input_response(query.errors)

        try:
            page = build_listing_service().list_upcoming_games(
                page=query.validated_data.get("page"),
                page_size=query.validated_data.get("pageSize"),
            )
        except DomainError as e:
            return error_response(e)
        return Response(listing_payload(page))


class GroupGameListView(APIView):
    """Handler for GET /api/group-games?groupId=<uuid>"""

    def get(self, request: Request) -> Response:
        query = GameListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_input_response(query.errors)

        group_id = query.validated_data.get("groupId")
        try:
            if not group_id:
                raise GroupIdRequiredError()
            page = build_listing_service().list_upcoming_games(
                group_id=group_id,
                page=query.validated_data.get("page"),
                page_size=query.validated_data.get("pageSize"),
            )
        except DomainError as e:
            return error_response(e)
        return Response(listing_payload(page))


class GameDetailView(APIView):
    """Handler for GET /api/games/{game_id}"""

    def get(self, request: Request, game_id: str) -> Response:
        try:
            listing = build_listing_service().get_game(game_id)
        except GameNotFoundError as e:
            logger.info("Game {game_id} not found", game_id=e.game_id)
            return error_response(e)
        except DomainError as e:
            return error_response(e)
        return Response({"game": GameListingSerializer(listing).data})


class ConfirmPaymentView(APIView):
    """Handler for POST /api/confirm-payment"""

    def post(self, request: Request) -> Response:
        body = PaymentConfirmationSerializer(data=request.data)
        if not body.is_valid():
            return invalid_input_response(body.errors, what="payment confirmation")

        data = body.validated_data
        outcome = PaymentOutcome(
            game_id=data["gameId"],
            player_id=data["playerId"],
            processor_status=data["status"],
            amount_paid=data.get("amountPaid"),
            payment_intent_id=data.get("paymentIntentId") or None,
        )
        try:
            record = build_payment_reconciler().apply(outcome)
        except DomainError as e:
            return error_response(e, failure_message=PAYMENT_FAILED_MESSAGE)
        return Response({"booking": AttendanceRecordSerializer(record).data})


class CancelBookingView(APIView):
    """Handler for POST /api/games/{game_id}/cancel-booking"""

    def post(self, request: Request, game_id: str) -> Response:
        body = BookingCancellationSerializer(data=request.data)
        if not body.is_valid():
            return invalid_input_response(body.errors, what="booking cancellation")

        try:
            record = build_payment_reconciler().cancel(
                game_id, body.validated_data["playerId"]
            )
        except DomainError as e:
            return error_response(e, failure_message=PAYMENT_FAILED_MESSAGE)
        return Response({"booking": AttendanceRecordSerializer(record).data})


class ValidateDiscountCodeView(APIView):
    """Handler for POST /api/discount-codes/validate"""

    def post(self, request: Request) -> Response:
        body = DiscountValidationSerializer(data=request.data)
        if not body.is_valid():
            return invalid_input_response(body.errors, what="discount request")

        data = body.validated_data
        try:
            result = build_discount_service().validate(
                data["code"],
                data["originalPrice"],
                game_id=data.get("gameId") or None,
                season_id=data.get("seasonId") or None,
            )
        except DomainError as e:
            return error_response(e, failure_message=DISCOUNT_FAILED_MESSAGE)
        return Response({"discount": DiscountQuoteSerializer(result).data})

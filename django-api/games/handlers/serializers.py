"""Serializers for parsing request input and rendering domain models."""

from rest_framework import serializers


class GameListQuerySerializer(serializers.Serializer):
    """Query string of the listing endpoints."""

    groupId = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(required=False)
    pageSize = serializers.IntegerField(required=False)


class GameListingSerializer(serializers.Serializer):
    """Serializer for a GameListing domain model.

    ``spotsLeft`` is hidden (null) once a game is fully booked, and
    availability fields are null when the attendee count is unknown.
    """

    id = serializers.CharField(source="summary.id")
    name = serializers.CharField(source="summary.name")
    description = serializers.CharField(source="summary.description")
    game_date = serializers.DateField(source="summary.game_date")
    game_time = serializers.TimeField(source="summary.game_time")
    location = serializers.CharField(source="summary.location")
    price = serializers.DecimalField(
        source="summary.price", max_digits=10, decimal_places=2
    )
    total_tickets = serializers.IntegerField(source="summary.total_tickets")
    available_tickets = serializers.IntegerField(source="summary.available_tickets")
    duration_hours = serializers.DecimalField(
        source="summary.duration_hours", max_digits=4, decimal_places=1
    )
    created_at = serializers.DateTimeField(source="summary.created_at")
    created_by = serializers.CharField(source="summary.created_by")
    groups = serializers.DictField(source="summary.groups")
    organizer = serializers.DictField(source="summary.organizer")
    actualAttendees = serializers.IntegerField(source="summary.actual_attendees")
    isFullyBooked = serializers.SerializerMethodField()
    spotsLeft = serializers.SerializerMethodField()

    def get_isFullyBooked(self, obj) -> bool | None:
        if obj.availability is None:
            return None
        return obj.availability.is_fully_booked

    def get_spotsLeft(self, obj) -> int | None:
        if obj.availability is None:
            return None
        return obj.availability.display_spots_left


class PaginationSerializer(serializers.Serializer):
    """Serializer for the paging block of a GameListingPage."""

    page = serializers.IntegerField()
    pageSize = serializers.IntegerField(source="page_size")
    total = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")


class PaymentConfirmationSerializer(serializers.Serializer):
    """Body of POST /api/confirm-payment."""

    gameId = serializers.CharField()
    playerId = serializers.CharField()
    status = serializers.CharField()
    amountPaid = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    paymentIntentId = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )


class BookingCancellationSerializer(serializers.Serializer):
    """Body of POST /api/games/{game_id}/cancel-booking."""

    playerId = serializers.CharField()


class AttendanceRecordSerializer(serializers.Serializer):
    """Serializer for an AttendanceRecord domain model."""

    id = serializers.CharField()
    gameId = serializers.CharField(source="game_id")
    playerId = serializers.CharField(source="player_id")
    paymentStatus = serializers.CharField(source="payment_status")
    amountPaid = serializers.DecimalField(
        source="amount_paid", max_digits=10, decimal_places=2, allow_null=True
    )
    availableTickets = serializers.IntegerField(
        source="available_tickets", allow_null=True
    )


class DiscountValidationSerializer(serializers.Serializer):
    """Body of POST /api/discount-codes/validate."""

    code = serializers.CharField()
    originalPrice = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0
    )
    gameId = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    seasonId = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class DiscountQuoteSerializer(serializers.Serializer):
    """Serializer for a DiscountQuote domain model."""

    code = serializers.CharField()
    type = serializers.CharField(source="discount_type")
    value = serializers.DecimalField(
        source="discount_value", max_digits=10, decimal_places=2
    )
    amount = serializers.DecimalField(
        source="amount.amount", max_digits=10, decimal_places=2
    )
    finalPrice = serializers.DecimalField(
        source="final_price.amount", max_digits=10, decimal_places=2
    )
    description = serializers.CharField()

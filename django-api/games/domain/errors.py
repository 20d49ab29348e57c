"""Domain error codes for the games module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ROW = "INVALID_ROW"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_QUERY = "INVALID_QUERY"
    INVALID_GAME_ID = "INVALID_GAME_ID"
    INVALID_GROUP_ID = "INVALID_GROUP_ID"
    INVALID_PLAYER_ID = "INVALID_PLAYER_ID"
    GROUP_ID_REQUIRED = "GROUP_ID_REQUIRED"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    ATTENDEE_NOT_FOUND = "ATTENDEE_NOT_FOUND"
    UNKNOWN_PAYMENT_STATUS = "UNKNOWN_PAYMENT_STATUS"
    INVALID_DISCOUNT_CODE = "INVALID_DISCOUNT_CODE"
    DISCOUNT_CODE_NOT_APPLICABLE = "DISCOUNT_CODE_NOT_APPLICABLE"
    DISCOUNT_CODE_EXPIRED = "DISCOUNT_CODE_EXPIRED"
    DISCOUNT_CODE_EXHAUSTED = "DISCOUNT_CODE_EXHAUSTED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidRowError(DomainError):
    """Raised when a join row cannot be folded into a game summary.

    ``game_id`` is set when the row identified its game but carried a
    malformed attendee collection; ``index`` is the row's position in the
    input.
    """

    def __init__(
        self, reason: str, game_id: str | None = None, index: int | None = None
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ROW,
            message="Invalid game row",
        )
        self.reason = reason
        self.game_id = game_id
        self.index = index


class MissingFieldError(DomainError):
    """Raised when a field needed for capacity math is absent."""

    def __init__(self, field: str, game_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELD,
            message=f"Game is missing {field}",
        )
        self.field = field
        self.game_id = game_id


class InvalidFieldError(DomainError):
    """Raised when a field needed for capacity math is not a valid count."""

    def __init__(self, field: str, game_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FIELD,
            message=f"Game has an invalid {field}",
        )
        self.field = field
        self.game_id = game_id


class InvalidAmountError(DomainError):
    """Raised when a monetary amount is negative or not a number."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_AMOUNT,
            message=f"Invalid {field}",
        )
        self.field = field


class InvalidGameIdError(DomainError):
    """Raised when a game ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_GAME_ID,
            message="Invalid game ID format",
        )


class InvalidGroupIdError(DomainError):
    """Raised when a group ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_GROUP_ID,
            message="Invalid group ID format",
        )


class InvalidPlayerIdError(DomainError):
    """Raised when a player ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PLAYER_ID,
            message="Invalid player ID format",
        )


class GroupIdRequiredError(DomainError):
    """Raised when the group listing is requested without a group."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GROUP_ID_REQUIRED,
            message="Group ID is required",
        )


class GameNotFoundError(DomainError):
    """Raised when a game is not found."""

    def __init__(self, game_id: str) -> None:
        super().__init__(
            code=ErrorCode.GAME_NOT_FOUND,
            message="Game not found",
        )
        self.game_id = game_id


class InvalidPaginationError(DomainError):
    """Raised when page or page size is out of range."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGINATION,
            message=detail,
        )


class AttendeeNotFoundError(DomainError):
    """Raised when a player has no booking for a game."""

    def __init__(self, game_id: str, player_id: str) -> None:
        super().__init__(
            code=ErrorCode.ATTENDEE_NOT_FOUND,
            message="Booking not found",
        )
        self.game_id = game_id
        self.player_id = player_id


class UnknownPaymentStatusError(DomainError):
    """Raised when the payment processor reports a status we cannot map."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_PAYMENT_STATUS,
            message="Unknown payment status",
        )
        self.status = status


class InvalidDiscountCodeError(DomainError):
    """Raised when a discount code does not exist or is inactive."""

    def __init__(self, discount_code: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DISCOUNT_CODE,
            message="Invalid discount code",
        )
        self.discount_code = discount_code


class DiscountCodeNotApplicableError(DomainError):
    """Raised when a discount code is scoped to another game or season."""

    def __init__(self, scope: str) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_CODE_NOT_APPLICABLE,
            message=f"This discount code is not valid for this {scope}",
        )
        self.scope = scope


class DiscountCodeExpiredError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_CODE_EXPIRED,
            message="This discount code has expired",
        )


class DiscountCodeExhaustedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNT_CODE_EXHAUSTED,
            message="This discount code has reached its usage limit",
        )

"""Discount code validation service."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from django.utils import timezone
from loguru import logger

from games.domain import DiscountQuote, Money, check_applicable, quote
from games.domain.errors import InvalidAmountError, InvalidDiscountCodeError
from games.stores.interfaces import DiscountCodeStore


class DiscountService:
    """Checks a discount code against a game or season and prices it."""

    def __init__(
        self,
        store: DiscountCodeStore,
        now: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._now = now

    def validate(
        self,
        code: str,
        original_price: Decimal,
        game_id: str | None = None,
        season_id: str | None = None,
    ) -> DiscountQuote:
        """Return the discounted price for ``code``.

        Codes are matched case-insensitively. Validating a code does not
        count as a use.

        Raises:
            InvalidAmountError: If the original price is negative.
            InvalidDiscountCodeError: If no active code matches.
            DiscountCodeNotApplicableError: If the code is for another game
                or season.
            DiscountCodeExpiredError: If the code has expired.
            DiscountCodeExhaustedError: If the code reached its usage limit.
        """
        try:
            price = Money(original_price)
        except (ArithmeticError, ValueError):
            raise InvalidAmountError("original price")

        normalized = code.strip().upper()
        discount = self._store.find_active_code(normalized)
        if discount is None:
            raise InvalidDiscountCodeError(normalized)

        check_applicable(discount, self._now(), game_id=game_id, season_id=season_id)
        result = quote(discount, price)
        logger.info(
            "Discount code {code} priced {price} down to {final}",
            code=discount.code,
            price=price,
            final=result.final_price,
        )
        return result

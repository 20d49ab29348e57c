"""Discount code checks and price calculation."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from games.domain.errors import (
    DiscountCodeExhaustedError,
    DiscountCodeExpiredError,
    DiscountCodeNotApplicableError,
)
from games.domain.models import DiscountCode, DiscountQuote
from games.domain.value_objects import DiscountType, Money

CENTS = Decimal("0.01")


def check_applicable(
    discount: DiscountCode,
    now: datetime,
    game_id: str | None = None,
    season_id: str | None = None,
) -> None:
    """Reject a code that is scoped elsewhere, expired or used up.

    Scope is checked before expiry, and expiry before usage.

    Raises:
        DiscountCodeNotApplicableError: If the code belongs to another game
            or season.
        DiscountCodeExpiredError: If ``valid_until`` is in the past.
        DiscountCodeExhaustedError: If the code reached ``max_uses``.
    """
    if discount.game_id and discount.game_id != game_id:
        raise DiscountCodeNotApplicableError("game")
    if discount.season_id and discount.season_id != season_id:
        raise DiscountCodeNotApplicableError("season")
    if discount.valid_until is not None and discount.valid_until < now:
        raise DiscountCodeExpiredError()
    if discount.max_uses and discount.used_count >= discount.max_uses:
        raise DiscountCodeExhaustedError()


def quote(discount: DiscountCode, original_price: Money) -> DiscountQuote:
    """Compute the discount on a price.

    The discount never exceeds the price, so the final price is never
    negative. Amounts are rounded half up to cents.
    """
    if discount.discount_type is DiscountType.PERCENTAGE:
        amount = original_price.amount * discount.discount_value / 100
    else:
        amount = discount.discount_value
    amount = min(amount, original_price.amount).quantize(CENTS, ROUND_HALF_UP)

    return DiscountQuote(
        code=discount.code,
        discount_type=discount.discount_type,
        discount_value=discount.discount_value,
        amount=Money(amount),
        final_price=Money(original_price.amount - amount),
        description=discount.description,
    )

from games.handlers.views import (
    CancelBookingView,
    ConfirmPaymentView,
    GameDetailView,
    GameListView,
    GroupGameListView,
    ValidateDiscountCodeView,
)

__all__ = [
    "CancelBookingView",
    "ConfirmPaymentView",
    "GameDetailView",
    "GameListView",
    "GroupGameListView",
    "ValidateDiscountCodeView",
]

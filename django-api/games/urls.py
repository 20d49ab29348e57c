from django.urls import path

from games.handlers import (
    CancelBookingView,
    ConfirmPaymentView,
    GameDetailView,
    GameListView,
    GroupGameListView,
    ValidateDiscountCodeView,
)

urlpatterns = [
    path("games-with-attendees", GameListView.as_view(), name="game-list"),
    path("group-games", GroupGameListView.as_view(), name="group-game-list"),
    path("games/<str:game_id>", GameDetailView.as_view(), name="game-detail"),
    path(
        "games/<str:game_id>/cancel-booking",
        CancelBookingView.as_view(),
        name="cancel-booking",
    ),
    path("confirm-payment", ConfirmPaymentView.as_view(), name="confirm-payment"),
    path(
        "discount-codes/validate",
        ValidateDiscountCodeView.as_view(),
        name="validate-discount-code",
    ),
]

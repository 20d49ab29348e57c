"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import MinValueValidator
from django.db import models

from games.domain.value_objects import DiscountType, PaymentStatus


class Player(models.Model):
    """Persistence model for players."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    photo_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Group(models.Model):
    """Persistence model for groups that run recurring games."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    whatsapp_group = models.CharField(max_length=500, blank=True, null=True)
    created_by = models.ForeignKey(
        Player, on_delete=models.SET_NULL, null=True, related_name="groups_created"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Game(models.Model):
    """Persistence model for games."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(
        Group, on_delete=models.CASCADE, null=True, related_name="games"
    )
    created_by = models.ForeignKey(
        Player, on_delete=models.SET_NULL, null=True, related_name="games_organized"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    game_date = models.DateField()
    game_time = models.TimeField()
    location = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    total_tickets = models.PositiveIntegerField()
    available_tickets = models.IntegerField()
    duration_hours = models.DecimalField(max_digits=4, decimal_places=1, default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["game_date", "game_time"]
        indexes = [
            models.Index(fields=["game_date"], name="game_date_idx"),
            models.Index(fields=["group", "game_date"], name="game_group_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.game_date}"


class GameAttendee(models.Model):
    """Persistence model for a player's booking of a game."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    game = models.ForeignKey(
        Game, on_delete=models.CASCADE, related_name="game_attendees"
    )
    player = models.ForeignKey(
        Player, on_delete=models.CASCADE, related_name="game_bookings"
    )
    payment_status = models.CharField(
        max_length=20,
        choices=[(status.value, status.name.title()) for status in PaymentStatus],
        default=PaymentStatus.PENDING.value,
    )
    payment_intent_id = models.CharField(max_length=255, blank=True, null=True)
    amount_paid = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["game", "player"], name="unique_game_attendee"
            ),
        ]
        indexes = [
            models.Index(
                fields=["game", "payment_status"], name="attendee_game_status_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.player} - {self.game} ({self.payment_status})"


class DiscountCode(models.Model):
    """Persistence model for discount codes.

    Seasons live outside this app, so ``season_id`` is a plain UUID rather
    than a foreign key. Codes are stored upper-case.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True, default="")
    discount_type = models.CharField(
        max_length=20,
        choices=[(kind.value, kind.name.title()) for kind in DiscountType],
    )
    discount_value = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    game = models.ForeignKey(
        Game,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="discount_codes",
    )
    season_id = models.UUIDField(null=True, blank=True)
    valid_until = models.DateTimeField(null=True, blank=True)
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    used_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def save(self, *args, **kwargs) -> None:
        self.code = self.code.upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.code

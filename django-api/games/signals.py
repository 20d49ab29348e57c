"""Django signals for booking audit logging."""

from django.db.models.signals import post_save
from django.dispatch import receiver
from loguru import logger

from games.models import GameAttendee


@receiver(post_save, sender=GameAttendee)
def log_payment_status(sender, instance, created, update_fields=None, **kwargs):
    """Log every stored payment status of a booking."""
    if update_fields is not None and "payment_status" not in update_fields:
        return
    logger.bind(game_id=str(instance.game_id), attendee_id=str(instance.id)).info(
        "Booking {attendee_id} stored with payment status {status}",
        attendee_id=instance.id,
        status=instance.payment_status,
    )

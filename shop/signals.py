from __future__ import annotations

import logging
from typing import Any

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone

from shop.models.order import Order

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "JE"


@receiver(post_save, sender=Order)
def generate_order_number(sender: type[Order], instance: Order, created: bool, **kwargs: Any) -> None:
    """
    Assign the order number once the primary key exists

    Format: JE + order date (YYYYMMDD) + zero-padded pk, e.g. JE20250115000042.

    Args:
        sender: Order model
        instance: saved order
        created: True on insert
    """
    if not created or instance.order_number:
        return

    created_at = timezone.localtime(instance.created_at) if instance.created_at else timezone.localtime()
    instance.order_number = f"{ORDER_NUMBER_PREFIX}{created_at:%Y%m%d}{instance.pk:06d}"

    # update() avoids re-sending post_save
    Order.objects.filter(pk=instance.pk).update(order_number=instance.order_number)
    logger.debug("[Order] number assigned | order_id=%d, order_number=%s", instance.pk, instance.order_number)

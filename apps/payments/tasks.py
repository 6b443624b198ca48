"""Celery tasks for payments."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import notify_payment_succeeded as send_payment_receipt

from .models import ServicePayment

logger = logging.getLogger(__name__)


@shared_task(name="payments.notify_payment_succeeded")
def notify_payment_succeeded(payment_id: int) -> None:
    try:
        payment = ServicePayment.objects.select_related("user").get(pk=payment_id)
    except ServicePayment.DoesNotExist:
        logger.warning("Payment %s not found for receipt notification", payment_id)
        return
    send_payment_receipt(payment)

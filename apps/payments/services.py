"""Payment workflows on top of the Stripe client."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore

from apps.users.membership import calculate_service_price
from shared.domain.value_objects import Money

from .client import PaymentClient
from .models import ClubService, ServicePayment

logger = logging.getLogger(__name__)

PROVIDER_STATUS_MAP = {
    "succeeded": ServicePayment.Status.SUCCEEDED,
    "canceled": ServicePayment.Status.FAILED,
}

WEBHOOK_EVENT_STATUS = {
    "payment_intent.succeeded": ServicePayment.Status.SUCCEEDED,
    "payment_intent.payment_failed": ServicePayment.Status.FAILED,
}


def price_services(user, services: Iterable[ClubService]) -> Money:
    """Total for one session of each service after the member's tier reduction."""

    total = Money(Decimal("0.00"), settings.PAYMENT_CURRENCY)
    for service in services:
        total = total + Money(
            calculate_service_price(service.price_per_session, user.membership_tier),
            settings.PAYMENT_CURRENCY,
        )
    return total


def start_service_payment(
    client: PaymentClient,
    user,
    services: Iterable[ClubService],
    description: str = "",
) -> tuple[ServicePayment, dict]:
    """Price the services, create a Stripe intent and record it as pending."""

    services = list(services)
    money = price_services(user, services)
    original = sum((service.price_per_session for service in services), Decimal("0.00"))
    service_ids = [service.pk for service in services]
    description = description or ", ".join(service.name for service in services)
    intent = client.create_payment_intent(
        money.to_minor_units(),
        money.currency,
        description,
        metadata={
            "type": "service_booking",
            "userId": user.pk,
            "serviceIds": ",".join(str(service_id) for service_id in service_ids),
            "memberTier": user.membership_tier,
            "originalPrice": str(original),
            "adjustedPrice": str(money.amount),
        },
    )
    payment = ServicePayment.objects.create(
        user=user,
        amount=money.amount,
        currency=money.currency,
        description=description,
        service_ids=service_ids,
        provider_intent_id=intent["id"],
    )
    return payment, intent


def _set_status(payment: ServicePayment, new_status: str) -> ServicePayment:
    if payment.status == new_status or payment.status == ServicePayment.Status.REFUNDED:
        return payment

    payment.status = new_status
    payment.save(update_fields=["status", "updated_at"])
    logger.info("Payment %s is now %s", payment.provider_intent_id, new_status)

    if new_status == ServicePayment.Status.SUCCEEDED:
        from .tasks import notify_payment_succeeded

        transaction.on_commit(lambda: notify_payment_succeeded.delay(payment.pk))
    return payment


def sync_payment_status(payment: ServicePayment, intent: dict) -> ServicePayment:
    """Apply the provider's view of an intent to the stored payment."""

    new_status = PROVIDER_STATUS_MAP.get(intent.get("status", ""))
    if new_status is None:
        return payment
    return _set_status(payment, new_status)


def refund_payment(client: PaymentClient, payment: ServicePayment, amount: Decimal | None = None) -> dict:
    """Refund all of a payment, or part of it when amount is given.

    The payment only becomes REFUNDED once the refunds cover its amount.
    """

    amount_cents = None
    if amount is not None:
        amount_cents = Money(amount, payment.currency).to_minor_units()

    refund = client.create_refund(payment.provider_intent_id, amount_cents)

    refunded = Money.from_minor_units(refund.get("amount", 0), payment.currency)
    payment.refunded_amount = payment.refunded_amount + refunded.amount
    update_fields = ["refunded_amount", "updated_at"]
    if payment.refunded_amount >= payment.amount:
        payment.status = ServicePayment.Status.REFUNDED
        update_fields.append("status")
    payment.save(update_fields=update_fields)
    logger.info("Refunded %s of payment %s", refunded, payment.provider_intent_id)
    return refund


def handle_webhook_event(event: dict) -> bool:
    """Update the stored payment for a verified Stripe event.

    Returns False for event types we do not act on or unknown intents.
    """

    event_type = event.get("type", "")
    new_status = WEBHOOK_EVENT_STATUS.get(event_type)
    if new_status is None:
        logger.info("Unhandled Stripe event type %s", event_type)
        return False

    intent = event.get("data", {}).get("object", {})
    intent_id = intent.get("id")
    payment = ServicePayment.objects.filter(provider_intent_id=intent_id).first()
    if payment is None:
        logger.warning("Stripe event %s for unknown payment intent %s", event_type, intent_id)
        return False

    _set_status(payment, new_status)
    return True

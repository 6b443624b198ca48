"""URL routing for payments."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    ConfirmPaymentView,
    CreatePaymentIntentView,
    MyPaymentsView,
    PaymentStatusView,
    RefundView,
    StripeWebhookView,
)

urlpatterns = [
    path("", MyPaymentsView.as_view(), name="payment-list"),
    path("create-payment-intent/", CreatePaymentIntentView.as_view(), name="payment-create-intent"),
    path("confirm/", ConfirmPaymentView.as_view(), name="payment-confirm"),
    path("status/<str:intent_id>/", PaymentStatusView.as_view(), name="payment-status"),
    path("refund/", RefundView.as_view(), name="payment-refund"),
    path("webhook/", StripeWebhookView.as_view(), name="payment-webhook"),
]

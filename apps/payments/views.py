"""API views for Stripe payments.

Every view builds its Stripe client per request through
``build_payment_client`` so tests can substitute a fake.
"""

from __future__ import annotations

import structlog
from django.conf import settings  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.generics import ListAPIView  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsClubAdmin, is_club_admin

from .client import PaymentClient, PaymentError, WebhookSignatureError, build_payment_client
from .exceptions import PaymentProviderError
from .models import ServicePayment
from .serializers import (
    CreatePaymentIntentSerializer,
    PaymentIntentReferenceSerializer,
    RefundSerializer,
    ServicePaymentSerializer,
)
from .services import handle_webhook_event, refund_payment, start_service_payment, sync_payment_status

logger = structlog.get_logger(__name__)


def _visible_payments(user):
    qs = ServicePayment.objects.all()
    if is_club_admin(user):
        return qs
    return qs.filter(user=user)


class PaymentClientMixin:
    def get_payment_client(self):
        try:
            return build_payment_client()
        except PaymentError as exc:
            raise PaymentProviderError(str(exc))


class CreatePaymentIntentView(PaymentClientMixin, APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = CreatePaymentIntentSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        client = self.get_payment_client()
        try:
            payment, intent = start_service_payment(
                client,
                request.user,
                data["services"],
                data["description"],
            )
        except PaymentError as exc:
            raise PaymentProviderError(f"Payment setup failed: {exc}")

        return Response(
            {"clientSecret": intent.get("client_secret"), "paymentIntentId": payment.provider_intent_id},
            status=status.HTTP_201_CREATED,
        )


class ConfirmPaymentView(PaymentClientMixin, APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = PaymentIntentReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = get_object_or_404(
            _visible_payments(request.user),
            provider_intent_id=serializer.validated_data["paymentIntentId"],
        )

        client = self.get_payment_client()
        try:
            intent = client.retrieve_payment_intent(payment.provider_intent_id)
        except PaymentError as exc:
            raise PaymentProviderError(f"Payment confirmation failed: {exc}")

        sync_payment_status(payment, intent)
        return Response({"success": intent.get("status") == "succeeded", "status": intent.get("status")})


class PaymentStatusView(PaymentClientMixin, APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, intent_id: str):  # type: ignore
        payment = get_object_or_404(_visible_payments(request.user), provider_intent_id=intent_id)

        client = self.get_payment_client()
        try:
            intent = client.retrieve_payment_intent(payment.provider_intent_id)
        except PaymentError as exc:
            raise PaymentProviderError(f"Status check failed: {exc}")

        sync_payment_status(payment, intent)
        return Response(
            {
                "status": intent.get("status"),
                "amount": intent.get("amount"),
                "currency": intent.get("currency"),
            }
        )


class RefundView(PaymentClientMixin, APIView):
    permission_classes = [IsClubAdmin]

    def post(self, request):  # type: ignore
        serializer = RefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = get_object_or_404(
            ServicePayment,
            provider_intent_id=serializer.validated_data["paymentIntentId"],
        )

        client = self.get_payment_client()
        try:
            refund = refund_payment(client, payment, serializer.validated_data.get("amount"))
        except PaymentError as exc:
            raise PaymentProviderError(f"Refund failed: {exc}")

        return Response(
            {
                "success": True,
                "refundId": refund.get("id"),
                "amount": refund.get("amount"),
                "status": refund.get("status"),
            }
        )


class StripeWebhookView(APIView):
    """Stripe event receiver, authenticated by the Stripe-Signature header."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        try:
            event = PaymentClient.verify_webhook(
                request.body,
                request.headers.get("Stripe-Signature", ""),
                settings.STRIPE_WEBHOOK_SECRET,
                settings.STRIPE_WEBHOOK_TOLERANCE,
            )
        except WebhookSignatureError as exc:
            logger.warning("stripe_webhook_rejected", reason=str(exc))
            return Response({"error": f"Webhook Error: {exc}"}, status=status.HTTP_400_BAD_REQUEST)

        handled = handle_webhook_event(event)
        logger.info("stripe_webhook_received", event_type=event.get("type"), handled=handled)
        return Response({"received": True})


class MyPaymentsView(ListAPIView):
    serializer_class = ServicePaymentSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return ServicePayment.objects.filter(user=self.request.user)

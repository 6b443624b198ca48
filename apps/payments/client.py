"""
Stripe Payment Gateway Integration

Thin client over the Stripe REST API. A client is built explicitly from
settings for each request so tests can hand views a fake one.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from typing import Any

import requests
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """The payment provider rejected a request or could not be reached."""


class WebhookSignatureError(PaymentError):
    """A webhook payload failed signature verification."""


class PaymentClient:
    """Stripe API client.

    Args:
        api_key: secret key used as the bearer token
        api_base: API root, ending with a slash
        timeout: seconds to wait for Stripe
        session: optional requests.Session to reuse connections
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.stripe.com/v1/",
        timeout: float = 10,
        session: requests.Session | None = None,
    ):
        if not api_key:
            raise PaymentError("Stripe secret key is not configured")
        self.api_key = api_key
        self.api_base = api_base if api_base.endswith("/") else f"{api_base}/"
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, data: dict | None = None) -> dict:
        url = f"{self.api_base}{path}"
        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("Network error calling Stripe %s %s: %s", method, path, exc)
            raise PaymentError(f"Could not reach payment provider: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise PaymentError(f"Invalid response from payment provider (HTTP {response.status_code})") from exc

        if response.status_code >= 400:
            message = body.get("error", {}).get("message", "Unknown error")
            logger.error("Stripe returned %s for %s %s: %s", response.status_code, method, path, message)
            raise PaymentError(message)
        return body

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        description: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> dict:
        data = {
            "amount": amount_cents,
            "currency": currency,
            "description": description,
            "automatic_payment_methods[enabled]": "true",
        }
        for key, value in (metadata or {}).items():
            data[f"metadata[{key}]"] = str(value)
        intent = self._request("POST", "payment_intents", data)
        logger.info("Payment intent %s created for %s %s", intent.get("id"), amount_cents, currency)
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> dict:
        return self._request("GET", f"payment_intents/{intent_id}")

    def create_refund(self, intent_id: str, amount_cents: int | None = None) -> dict:
        data: dict[str, Any] = {"payment_intent": intent_id}
        if amount_cents is not None:
            data["amount"] = amount_cents
        refund = self._request("POST", "refunds", data)
        logger.info("Refund %s created for %s", refund.get("id"), intent_id)
        return refund

    @staticmethod
    def verify_webhook(payload: bytes, signature_header: str, secret: str, tolerance: int = 300) -> dict:
        """Check a Stripe-Signature header and return the decoded event.

        The header looks like ``t=1700000000,v1=<hex>``; the signature is an
        HMAC-SHA256 of ``"{t}.{payload}"`` keyed with the endpoint secret.
        """
        if not secret:
            raise WebhookSignatureError("Webhook secret not configured")
        if not signature_header:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        timestamp = None
        signatures = []
        for item in signature_header.split(","):
            key, _, value = item.strip().partition("=")
            if key == "t":
                timestamp = value
            elif key == "v1":
                signatures.append(value)

        if timestamp is None or not timestamp.isdigit() or not signatures:
            raise WebhookSignatureError("Malformed Stripe-Signature header")

        signed_payload = f"{timestamp}.".encode() + payload
        expected = hmac.new(secret.encode(), signed_payload, hashlib.sha256).hexdigest()
        if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
            raise WebhookSignatureError("Signature mismatch")

        if tolerance and abs(time.time() - int(timestamp)) > tolerance:
            raise WebhookSignatureError("Timestamp outside the tolerance zone")

        try:
            return json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError("Invalid JSON payload") from exc


def build_payment_client() -> PaymentClient:
    """Client configured from Django settings."""
    return PaymentClient(
        api_key=settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        timeout=settings.STRIPE_TIMEOUT,
    )

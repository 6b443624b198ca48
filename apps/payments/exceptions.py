from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore


class PaymentProviderError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Payment provider error."
    default_code = "payment_provider_error"

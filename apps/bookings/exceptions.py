"""API exceptions raised by the booking views."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore


class SlotConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This time slot is already booked."
    default_code = "slot_conflict"


class MembershipForbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Yacht size exceeds your membership tier limit."
    default_code = "membership_limit"

"""Membership tier rules.

Each tier caps the size of yacht a member may book and takes a percentage
off club service prices. Platinum members have no size cap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


class MembershipLimitExceeded(Exception):
    """Raised when a member tries to book a yacht above their tier limit."""

    def __init__(self, tier: str, limit: float, yacht_size: int):
        self.tier = tier
        self.limit = limit
        self.yacht_size = yacht_size
        super().__init__(f"Yacht size exceeds your membership tier limit of {limit:g}ft")


@dataclass(frozen=True)
class MembershipLimits:
    max_yacht_size: float  # feet
    service_fee_reduction: int  # percent off service prices


MEMBERSHIP_BENEFITS: dict[str, MembershipLimits] = {
    "bronze": MembershipLimits(max_yacht_size=45, service_fee_reduction=0),
    "silver": MembershipLimits(max_yacht_size=60, service_fee_reduction=5),
    "gold": MembershipLimits(max_yacht_size=70, service_fee_reduction=10),
    "platinum": MembershipLimits(max_yacht_size=math.inf, service_fee_reduction=15),
}

DEFAULT_TIER = "bronze"


def get_membership_benefits(tier: str | None) -> MembershipLimits:
    """Unknown or missing tiers get the bronze limits."""
    return MEMBERSHIP_BENEFITS.get(tier or DEFAULT_TIER, MEMBERSHIP_BENEFITS[DEFAULT_TIER])


def can_book_yacht(tier: str | None, yacht_size: int) -> bool:
    return yacht_size <= get_membership_benefits(tier).max_yacht_size


def calculate_service_price(base_price: Decimal, tier: str | None) -> Decimal:
    """Price of one service session after the tier's reduction, in cents precision."""
    reduction = get_membership_benefits(tier).service_fee_reduction
    price = Decimal(base_price) * (Decimal(100) - reduction) / Decimal(100)
    return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def ensure_member_can_book(user, yacht) -> None:
    """Only members are tier-limited; owners, providers and admins are not."""
    if not user.is_member():
        return
    tier = user.membership_tier or DEFAULT_TIER
    if not can_book_yacht(tier, yacht.size):
        raise MembershipLimitExceeded(tier, get_membership_benefits(tier).max_yacht_size, yacht.size)

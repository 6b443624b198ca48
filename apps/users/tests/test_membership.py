import math
from decimal import Decimal

import pytest

from apps.users.membership import (
    MembershipLimitExceeded,
    calculate_service_price,
    can_book_yacht,
    ensure_member_can_book,
    get_membership_benefits,
)
from apps.users.models import User
from apps.yachts.models import Yacht


@pytest.mark.parametrize(
    "tier,limit",
    [("bronze", 45), ("silver", 60), ("gold", 70), ("platinum", math.inf)],
)
def test_tier_limits(tier, limit):
    assert get_membership_benefits(tier).max_yacht_size == limit


def test_unknown_tier_falls_back_to_bronze():
    assert get_membership_benefits("diamond").max_yacht_size == 45
    assert get_membership_benefits(None).max_yacht_size == 45


def test_can_book_yacht_boundaries():
    assert can_book_yacht("bronze", 45)
    assert not can_book_yacht("bronze", 46)
    assert can_book_yacht("gold", 70)
    assert can_book_yacht("platinum", 500)


def test_only_members_are_limited():
    yacht = Yacht(name="Leviathan", location="Marina Bay", size=90, capacity=20)
    owner = User(email="owner@example.com", role=User.RoleChoices.YACHT_OWNER)
    member = User(email="member@example.com", role=User.RoleChoices.MEMBER, membership_tier="silver")

    ensure_member_can_book(owner, yacht)
    with pytest.raises(MembershipLimitExceeded) as excinfo:
        ensure_member_can_book(member, yacht)

    assert excinfo.value.limit == 60
    assert "60ft" in str(excinfo.value)


@pytest.mark.parametrize(
    "tier,price",
    [
        ("bronze", Decimal("120.00")),
        ("silver", Decimal("114.00")),
        ("gold", Decimal("108.00")),
        ("platinum", Decimal("102.00")),
        (None, Decimal("120.00")),
    ],
)
def test_service_price_reduction_by_tier(tier, price):
    assert calculate_service_price(Decimal("120.00"), tier) == price


def test_service_price_rounds_to_cents():
    # 5% off 19.99 is 18.9905
    assert calculate_service_price(Decimal("19.99"), "silver") == Decimal("18.99")

# tests/test_region_transfer.py
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from salesperf.core.region_transfer import RegionTransferProrator, region_before
from salesperf.core.regions import Region


def at(day: int, hour: int = 0, month: int = 12, year: int = 2024, **kw) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc, **kw)


def transferred_user(users, transfer: datetime, before="north", after="west"):
    return users.add(
        region=after,
        region_start_date=transfer,
        history=[(before, at(1, month=1)), (after, transfer)],
    )


def test_no_transfer_inside_month_returns_empty(users, sales):
    user = users.add(region="north", region_start_date=at(10, month=6))
    month_sales = [sales.add(user, 1000, at(5))]

    assert RegionTransferProrator().region_transfers(user, 12, 2024, month_sales) == []


def test_region_start_exactly_at_month_start_is_not_a_transfer(users, sales):
    user = transferred_user(users, at(1))
    month_sales = [sales.add(user, 1000, at(5))]

    assert RegionTransferProrator().region_transfers(user, 12, 2024, month_sales) == []


def test_region_start_on_last_instant_is_a_transfer(users, sales):
    user = transferred_user(users, at(31, 23, minute=59, second=59, microsecond=999000))
    month_sales = [sales.add(user, 1000, at(5))]

    segments = RegionTransferProrator().region_transfers(user, 12, 2024, month_sales)
    assert [s.region for s in segments] == [Region.NORTH, Region.WEST]


def test_mid_month_transfer_splits_sales_and_prices_each_region(users, sales):
    transfer = at(16)
    user = transferred_user(users, transfer)
    month_sales = [
        sales.add(user, 10000, at(5)),
        sales.add(user, 4000, at(20)),
    ]

    before, after = RegionTransferProrator().region_transfers(user, 12, 2024, month_sales)

    assert before.region == Region.NORTH
    assert before.sales == Decimal("10000")
    assert before.commission == Decimal("550")
    assert before.days == 15

    assert after.region == Region.WEST
    assert after.sales == Decimal("4000")
    assert after.commission == Decimal("210")
    assert after.days == 16

    # conservation
    assert before.sales + after.sales == Decimal("14000")


def test_sale_at_transfer_instant_belongs_to_new_region(users, sales):
    transfer = at(16)
    user = transferred_user(users, transfer)
    month_sales = [sales.add(user, 1000, transfer)]

    before, after = RegionTransferProrator().region_transfers(user, 12, 2024, month_sales)
    assert before.sales == Decimal("0")
    assert after.sales == Decimal("1000")


def test_unrecorded_previous_region_is_not_guessed(users, sales):
    transfer = at(16)
    user = users.add(region="west", region_start_date=transfer, history=[])
    month_sales = [sales.add(user, 2000, at(3)), sales.add(user, 1000, at(20))]

    before, after = RegionTransferProrator().region_transfers(user, 12, 2024, month_sales)

    assert before.region is None
    # neutral multiplier 1.00
    assert before.commission == Decimal("100")
    assert after.commission == Decimal("52.5")


def test_region_before_picks_latest_earlier_assignment(users):
    user = users.add(
        region="east",
        region_start_date=at(20),
        history=[("north", at(1, month=1)), ("south", at(1, month=6)), ("east", at(20))],
    )
    assert region_before(user, at(20)) == Region.SOUTH
    assert region_before(user, at(2, month=1)) == Region.NORTH
    assert region_before(user, at(1, month=1)) is None


def test_hire_month_is_not_a_transfer(users, sales):
    hired = at(10)
    user = users.add(region="north", region_start_date=hired)
    month_sales = [sales.add(user, 1000, at(12))]

    assert RegionTransferProrator().region_transfers(user, 12, 2024, month_sales) == []


def test_two_transfers_in_one_month_split_three_ways(users, sales):
    user = users.add(
        region="west",
        region_start_date=at(20),
        history=[("north", at(1, month=1)), ("south", at(10)), ("west", at(20))],
    )
    month_sales = [
        sales.add(user, 1000, at(5)),
        sales.add(user, 2000, at(15)),
        sales.add(user, 4000, at(25)),
    ]

    segments = RegionTransferProrator().region_transfers(user, 12, 2024, month_sales)

    assert [s.region for s in segments] == [Region.NORTH, Region.SOUTH, Region.WEST]
    assert [s.sales for s in segments] == [Decimal("1000"), Decimal("2000"), Decimal("4000")]
    assert [s.commission for s in segments] == [Decimal("55"), Decimal("95"), Decimal("210")]
    assert [s.days for s in segments] == [9, 10, 12]

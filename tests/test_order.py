from datetime import datetime

import pytest

from matchbook.client import Client
from matchbook.order import Order, OrderType


def make_order(amount=10, order_type=OrderType.BUY):
    return Order(order_id=1, order_type=order_type, price=100, amount=amount,
                 client=Client("Alice"))


def test_remaining_amount_starts_at_amount():
    order = make_order(amount=25)
    assert order.remaining_amount == 25
    assert order.amount == 25


def test_is_filled_tracks_remaining_amount():
    order = make_order(amount=10)
    assert order.is_filled() is False
    order.remaining_amount = 0
    assert order.is_filled() is True


def test_partially_traded_order_is_not_filled():
    order = make_order(amount=10)
    order.remaining_amount -= 4
    assert order.is_filled() is False
    assert order.remaining_amount == 10 - 4


@pytest.mark.parametrize(
    "side, expected",
    [(OrderType.BUY, OrderType.SELL), (OrderType.SELL, OrderType.BUY)],
)
def test_opposite_side(side, expected):
    order = make_order(order_type=side)
    assert order.order_type is side
    assert order.order_type.opposite is expected


def test_timestamp_is_set_on_creation():
    before = datetime.now()
    order = make_order()
    after = datetime.now()
    assert before <= order.timestamp <= after


def test_orders_compare_by_identity():
    first = make_order()
    second = make_order()
    assert first == first
    assert (first == second) is False
"""Order records and the order side enumeration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matchbook.client import Client


class OrderType(Enum):
    """Side of an order."""

    BUY = "BUY"
    SELL = "SELL"

    @property
    def opposite(self) -> OrderType:
        """The side this order trades against."""
        return OrderType.SELL if self is OrderType.BUY else OrderType.BUY


@dataclass(eq=False)
class Order:
    """A limit order together with the quantity still open."""

    order_id: int
    order_type: OrderType
    price: int
    amount: int
    client: Client
    remaining_amount: int = field(init=False)
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.remaining_amount = self.amount

    def is_filled(self) -> bool:
        """True once nothing of the order is left to trade."""
        return self.remaining_amount <= 0
"""A price-time limit order book with a single matching engine."""

from __future__ import annotations

import sys
import threading
import time
from collections import deque
from enum import Enum, auto
from typing import TextIO

from matchbook.client import Client
from matchbook.order import Order, OrderType

_RULE = "------------------------"


class ResponseStatus(Enum):
    SUCCESS = auto()
    INVALID_ORDER = auto()
    ORDER_NOT_FOUND = auto()
    INSUFFICIENT_FUNDS = auto()
    SYSTEM_ERROR = auto()


class EngineError(Exception):
    """A request the engine rejected."""

    status = ResponseStatus.SYSTEM_ERROR

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidOrderError(EngineError):
    status = ResponseStatus.INVALID_ORDER


class OrderNotFoundError(EngineError):
    status = ResponseStatus.ORDER_NOT_FOUND


def _elapsed_us(start_ns: int) -> int:
    return (time.perf_counter_ns() - start_ns) // 1000


class Engine:
    """Matches buy and sell orders by price, then by arrival."""

    MAX_ORDER_ID = 2**31 - 1
    MIN_ORDER_ID = 0

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.RLock()
        self._next_order_id = self.MIN_ORDER_ID
        self._total_trades = 0
        self._books: dict[OrderType, dict[int, deque[Order]]] = {
            OrderType.BUY: {},
            OrderType.SELL: {},
        }
        self._orders: dict[int, Order] = {}
        self._emit("Trading Engine started")

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def total_trades_executed(self) -> int:
        return self._total_trades

    def _emit(self, *lines: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        for line in lines:
            print(line, file=stream)

    def _generate_order_id(self) -> int:
        with self._lock:
            current = self._next_order_id
            if current >= self.MAX_ORDER_ID:
                print(
                    "Warning: Order ID overflow detected, resetting to "
                    f"{self.MIN_ORDER_ID}",
                    file=sys.stderr,
                )
                self._next_order_id = self.MIN_ORDER_ID
            else:
                self._next_order_id = current + 1
            return current

    def _price_levels(self, order_type: OrderType) -> list[int]:
        # Best price first: highest bid, lowest ask.
        return sorted(self._books[order_type], reverse=order_type is OrderType.BUY)

    def place_order(self, order_type: OrderType, price: int, amount: int,
                    client: Client) -> int:
        """Enter an order, match what crosses, rest the remainder; return its id."""
        if client is None:
            raise InvalidOrderError("Invalid client")
        if amount <= 0 or price <= 0:
            raise InvalidOrderError("Invalid amount or price")

        start = time.perf_counter_ns()
        with self._lock:
            order_id = self._generate_order_id()
            order = Order(order_id, order_type, price, amount, client)
            self._emit(
                f"\n[Time: {_elapsed_us(start)}μs] New order received: "
                f"{order_type.value} OrderId: {order_id} Price: {price} Amount: {amount}"
            )
            self._orders[order_id] = order
            self._match(order)
        return order_id

    def cancel_order(self, order_id: int, client: Client) -> Order:
        """Withdraw a resting order owned by ``client`` and return it."""
        start = time.perf_counter_ns()
        if client is None:
            raise InvalidOrderError("Invalid client")

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                self._emit("Order not found")
                raise OrderNotFoundError("Order not found")
            if order.client is not client:
                self._emit("Order does not belong to client")
                raise InvalidOrderError("Order does not belong to client")
            if not self._remove_from_book(order):
                raise OrderNotFoundError("Order not found in order book")

            del self._orders[order_id]
            self._emit(
                f"\n[Time: {_elapsed_us(start)}μs] Cancel request received for "
                f"OrderId: {order_id}",
                "Order cancelled. Current state:",
            )
            self.log_order_book_state()
        return order

    def book_depth(self, order_type: OrderType) -> list[tuple[int, int]]:
        """Price levels of one side, best first, with the number of orders at each."""
        with self._lock:
            book = self._books[order_type]
            return [(price, len(book[price])) for price in self._price_levels(order_type)]

    def log_order_book_state(self) -> None:
        with self._lock:
            self._emit("\nCurrent Order Book State:", _RULE)
            for order_type, title in ((OrderType.BUY, "Buy Orders:"),
                                      (OrderType.SELL, "Sell Orders:")):
                self._emit(title)
                for price, count in self.book_depth(order_type):
                    self._emit(f"Price: {price} - Orders: {count}")
            self._emit(_RULE)

    def close(self) -> None:
        """Shut the engine down and drop every order."""
        self._emit("Trading Engine shutting down")
        with self._lock:
            for book in self._books.values():
                book.clear()
            self._orders.clear()

    def _add_to_book(self, order: Order) -> None:
        self._books[order.order_type].setdefault(order.price, deque()).append(order)

    def _remove_from_book(self, order: Order) -> bool:
        book = self._books[order.order_type]
        queue = book.get(order.price)
        if not queue:
            return False
        kept = deque(o for o in queue if o.order_id != order.order_id)
        found = len(kept) < len(queue)
        if kept:
            book[order.price] = kept
        else:
            del book[order.price]
        return found

    def _crosses(self, incoming: Order, level: int) -> bool:
        if incoming.order_type is OrderType.BUY:
            return level <= incoming.price
        return level >= incoming.price

    def _match(self, incoming: Order) -> None:
        added = False
        try:
            opposite = incoming.order_type.opposite
            book = self._books[opposite]
            for level in self._price_levels(opposite):
                if incoming.is_filled() or not self._crosses(incoming, level):
                    break
                queue = book[level]
                while queue and not incoming.is_filled():
                    resting = queue.popleft()
                    quantity = min(incoming.remaining_amount, resting.remaining_amount)
                    if incoming.order_type is OrderType.BUY:
                        self._execute_trade(incoming, resting, quantity)
                    else:
                        self._execute_trade(resting, incoming, quantity)
                    if not resting.is_filled():
                        queue.append(resting)
                        break
                if not queue:
                    del book[level]

            if not incoming.is_filled():
                self._add_to_book(incoming)
                added = True
        except Exception as exc:
            print(f"Error in matchOrders: {exc}", file=sys.stderr)
            if not added and not incoming.is_filled():
                self._add_to_book(incoming)

    def _execute_trade(self, buy: Order, sell: Order, quantity: int) -> None:
        trade_price = sell.price
        buy.remaining_amount -= quantity
        sell.remaining_amount -= quantity
        buy.client.on_order_traded(buy.order_id, trade_price, quantity)
        sell.client.on_order_traded(sell.order_id, trade_price, quantity)
        self._total_trades += 1
        self._emit(
            "Match found! Trade executed:",
            f"Buy OrderId: {buy.order_id} Sell OrderId: {sell.order_id} "
            f"Price: {trade_price} Amount: {quantity}",
        )
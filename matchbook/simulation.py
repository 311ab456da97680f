"""A multi-threaded run of random clients trading against one engine."""

from __future__ import annotations

import argparse
import random
import threading
import time
from dataclasses import dataclass, field

from matchbook.client import Client
from matchbook.engine import Engine, EngineError
from matchbook.order import OrderType

PRICE_RANGE = (90, 110)
AMOUNT_RANGE = (1, 100)
CANCEL_EVERY = 3
CANCEL_PAUSE = 0.1
ORDER_PAUSE = 0.2
DEFAULT_ORDERS_PER_CLIENT = 10

_print_lock = threading.Lock()


def _say(line: str) -> None:
    with _print_lock:
        print(line, flush=True)


@dataclass
class RunStats:
    """Counters shared by every client thread of a run."""

    orders_processed: int = 0
    orders_canceled: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def _count_processed(self) -> int:
        with self._lock:
            self.orders_processed += 1
            return self.orders_processed

    def _count_canceled(self) -> int:
        with self._lock:
            self.orders_canceled += 1
            return self.orders_canceled


def print_test_summary(engine: Engine, expected_orders: int, stats: RunStats) -> None:
    """Print how many orders went through, traded and were withdrawn."""
    _say("\n=== Test Summary ===")
    _say(f"Total orders processed: {stats.orders_processed}/{expected_orders}")
    _say(f"Total trades executed: {engine.total_trades_executed}")
    _say(f"Total orders canceled: {stats.orders_canceled}")


def client_thread(
    client: Client,
    engine: Engine,
    num_orders: int,
    stats: RunStats,
    rng: random.Random | None = None,
    delay: float = 1.0,
) -> None:
    """Place ``num_orders`` random orders, cancelling every third one.

    ``delay`` scales the pauses between requests; zero removes them.
    """
    rng = rng if rng is not None else random.Random()

    for index in range(num_orders):
        price = rng.randint(*PRICE_RANGE)
        amount = rng.randint(*AMOUNT_RANGE)
        order_type = OrderType.BUY if rng.randint(0, 1) == 0 else OrderType.SELL

        try:
            order_id = engine.place_order(order_type, price, amount, client)
        except EngineError:
            pass
        else:
            processed = stats._count_processed()
            _say(
                f"[Progress: {processed}/{num_orders * 2} orders] {client.name} placed "
                f"{order_type.value} order {index + 1}/{num_orders}"
            )
            if index % CANCEL_EVERY == 0:
                time.sleep(CANCEL_PAUSE * delay)
                try:
                    engine.cancel_order(order_id, client)
                except EngineError:
                    pass
                else:
                    stats._count_canceled()

        time.sleep(ORDER_PAUSE * delay)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run two random clients against a matching engine."
    )
    parser.add_argument(
        "--orders",
        type=int,
        default=DEFAULT_ORDERS_PER_CLIENT,
        help="orders placed by each client",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=1.0,
        help="scale of the pauses between requests (0 for none)",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    if args.orders < 0:
        parser.error("--orders must not be negative")
    if args.delay < 0:
        parser.error("--delay must not be negative")
    return args


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    orders_per_client = args.orders
    _say(
        f"Starting trading engine test with {orders_per_client} orders per client..."
    )

    seeder = random.Random(args.seed)
    stats = RunStats()
    with Engine() as engine:
        clients = [Client("Client1"), Client("Client2")]
        started = time.perf_counter()
        threads = [
            threading.Thread(
                target=client_thread,
                args=(
                    client,
                    engine,
                    orders_per_client,
                    stats,
                    random.Random(seeder.getrandbits(64)),
                    args.delay,
                ),
            )
            for client in clients
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        duration_ms = int((time.perf_counter() - started) * 1000)

        _say("\n=== Test Completed ===")
        _say(f"Duration: {duration_ms}ms")
        print_test_summary(engine, orders_per_client * len(clients), stats)

        _say("\n=== Test Summary ===")
        _say(
            f"Total orders processed: {stats.orders_processed}/{stats.orders_processed}"
        )
        _say(f"Total trades executed: {engine.total_trades_executed}")
        _say(f"Total orders canceled: {stats.orders_canceled}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
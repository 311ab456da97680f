import io
import random

import pytest

from matchbook.client import Client
from matchbook.engine import Engine
from matchbook.order import OrderType
from matchbook.simulation import RunStats, client_thread, main, print_test_summary


@pytest.fixture
def quiet_engine():
    engine = Engine(stream=io.StringIO())
    yield engine
    engine.close()


@pytest.fixture
def quiet_client():
    return Client("Client1", stream=io.StringIO())


def test_run_stats_start_at_zero():
    stats = RunStats()
    assert (stats.orders_processed, stats.orders_canceled) == (0, 0)


def test_print_test_summary_reports_counters(quiet_engine, capsys):
    stats = RunStats(orders_processed=5, orders_canceled=2)
    print_test_summary(quiet_engine, 20, stats)
    lines = capsys.readouterr().out.splitlines()
    assert "=== Test Summary ===" in lines
    assert "Total orders processed: 5/20" in lines
    assert "Total trades executed: 0" in lines
    assert "Total orders canceled: 2" in lines


def test_print_test_summary_counts_engine_trades(quiet_engine, capsys):
    buyer = Client("B", stream=io.StringIO())
    seller = Client("S", stream=io.StringIO())
    quiet_engine.place_order(OrderType.BUY, 100, 10, buyer)
    quiet_engine.place_order(OrderType.SELL, 100, 10, seller)
    print_test_summary(quiet_engine, 2, RunStats(orders_processed=2))
    out = capsys.readouterr().out
    assert f"Total trades executed: {quiet_engine.total_trades_executed}" in out
    assert quiet_engine.total_trades_executed == 1


@pytest.mark.parametrize("num_orders", [1, 4, 7])
def test_client_thread_processes_every_order(quiet_engine, quiet_client, num_orders):
    stats = RunStats()
    client_thread(quiet_client, quiet_engine, num_orders, stats, random.Random(3), 0)
    assert stats.orders_processed == num_orders
    max_cancels = len(range(0, num_orders, 3))
    assert 1 <= stats.orders_canceled <= max_cancels


def test_client_thread_progress_lines(quiet_engine, quiet_client, capsys):
    stats = RunStats()
    client_thread(quiet_client, quiet_engine, 3, stats, random.Random(11), 0)
    lines = [
        line for line in capsys.readouterr().out.splitlines()
        if line.startswith("[Progress:")
    ]
    assert len(lines) == 3
    assert lines[0].startswith("[Progress: 1/6 orders] Client1 placed ")
    assert lines[-1].endswith("order 3/3")


def test_client_thread_is_reproducible_with_seed(quiet_client):
    depths = []
    for _ in range(2):
        engine = Engine(stream=io.StringIO())
        client_thread(quiet_client, engine, 6, RunStats(), random.Random(42), 0)
        depths.append(
            (engine.book_depth(OrderType.BUY), engine.book_depth(OrderType.SELL),
             engine.total_trades_executed)
        )
        engine.close()
    assert depths[0] == depths[1]


def test_client_thread_prices_stay_in_range(quiet_engine, quiet_client):
    client_thread(quiet_client, quiet_engine, 12, RunStats(), random.Random(5), 0)
    prices = [
        price
        for side in (OrderType.BUY, OrderType.SELL)
        for price, _ in quiet_engine.book_depth(side)
    ]
    assert all(90 <= price <= 110 for price in prices)


def test_main_runs_to_completion(capsys):
    assert main(["--orders", "3", "--delay", "0", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "=== Test Completed ===" in out
    assert "Total orders processed: 6/6" in out
    assert out.count("=== Test Summary ===") == 2
    assert "Trading Engine shutting down" in out


def test_main_rejects_negative_orders():
    with pytest.raises(SystemExit) as excinfo:
        main(["--orders", "-1"])
    assert excinfo.value.code == 2
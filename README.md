# matchbook

A small matching engine for a single asset. It keeps a continuous limit order
book and matches orders by price first and then by time of arrival.

## Features

- Price-time priority. The best price trades first, and orders at the same
  price trade in the order they arrived.
- Partial fills. Any amount left unfilled stays on the book at its limit price.
- Every trade executes at the price of its sell order.
- Operations are thread-safe. A single lock guards the books.
- The engine calls `Client.on_order_traded` on both clients of every trade.
- Clients can cancel their own resting orders.

The engine assigns order ids, counting up from 0. `place_order` returns the id
of the new order. The engine rejects an invalid request with an `EngineError`
subclass. Each of these exceptions has a `status` (a `ResponseStatus`) and a
`reason`:

- `InvalidOrderError`: the client is missing, the price or amount is not
  positive, or the order belongs to another client.
- `OrderNotFoundError`: the id is unknown, or the order is no longer on the
  book.

## Installation

```bash
pip install .
```

To run the tests:

```bash
pip install ".[test]"
pytest
```

## Usage

```python
from matchbook.client import Client
from matchbook.engine import Engine, InvalidOrderError, OrderNotFoundError
from matchbook.order import OrderType

with Engine() as engine:
    alice = Client("Alice")
    bob = Client("Bob")

    sell_id = engine.place_order(OrderType.SELL, 100, 50, alice)
    buy_id = engine.place_order(OrderType.BUY, 101, 20, bob)  # trades 20 at 100

    print(engine.book_depth(OrderType.SELL))  # [(100, 1)]: price, order count
    print(engine.total_trades_executed)       # 1
    engine.log_order_book_state()

    order = engine.cancel_order(sell_id, alice)  # returns the withdrawn order
    print(order.remaining_amount)                # 30

    try:
        engine.place_order(OrderType.BUY, 0, 10, bob)
    except InvalidOrderError as err:
        print(err.status, err.reason)

    try:
        engine.cancel_order(sell_id, alice)
    except OrderNotFoundError as err:
        print(err.status, err.reason)
```

The engine and each client write their log lines to standard output. To send
them somewhere else, pass a text stream: `Engine(stream=...)`,
`Client("Alice", stream=...)`.

`Engine.close()` logs that the engine is shutting down and empties the books.
Leaving a `with` block calls `close()` as well.

`Engine.book_depth(order_type)` lists the price levels of one side, best price
first: the highest price for buys and the lowest for sells.

## Simulation

`matchbook.simulation` runs a demo. Two client threads share one engine, and
each thread places random orders. Prices range from 90 to 110 and amounts from
1 to 100. Every third order is cancelled shortly after it is placed. At the end
the demo prints how many orders were processed and cancelled and how many
trades executed.

```bash
matchbook-sim                      # 10 orders per client
matchbook-sim --orders 50 --delay 0 --seed 42
```

Options:

- `--orders N`: orders per client. The default is 10.
- `--delay F`: scales the pauses between requests. Use 0 for no pauses.
- `--seed S`: seed for the random orders.

## Limitations

The engine trades one asset and keeps everything in memory. It has no
persistence, no network interface, no market orders and no checks of funds or
balances.
"""Trading clients that receive notifications from the engine."""

from __future__ import annotations

import sys
import threading
from typing import TextIO


class Client:
    """A named participant that logs notifications about its orders."""

    _output_lock = threading.Lock()

    def __init__(self, name: str, stream: TextIO | None = None) -> None:
        self._name = name
        self._stream = stream

    @property
    def name(self) -> str:
        return self._name

    def log(self, message: str) -> None:
        """Write one line prefixed with the client's name."""
        stream = self._stream if self._stream is not None else sys.stdout
        with Client._output_lock:
            print(f"[{self._name}] {message}", file=stream, flush=True)

    def on_order_placed(self, order_id: int, price: int, amount: int) -> None:
        self.log(f"Order placed - ID: {order_id}, Price: {price}, Amount: {amount}")

    def on_order_canceled(self, order_id: int, reason_code: int) -> None:
        self.log(f"Order canceled - ID: {order_id}, Reason: {reason_code}")

    def on_order_traded(self, order_id: int, price: int, amount: int) -> None:
        self.log(f"Order traded - ID: {order_id}, Price: {price}, Amount: {amount}")
"""Single-asset limit order book with price-time priority matching and a random-client simulation."""

__version__ = "0.1.0"
__all__ = ["client", "engine", "order", "simulation"]
"""
Grid Strategy - places a ladder of orders between a lower and an upper price

Mounted on one or more sessions through the ``on`` key:

    exchangeStrategies:
    - on: binance
      grid:
        symbol: BTCUSDT
        gridNumber: 20
        upperPrice: 30000
        lowerPrice: 20000
        quantity: 0.001
"""

from .config import GridStrategy

__all__ = [
    "GridStrategy",
]

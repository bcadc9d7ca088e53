"""
Strategies Module - bundled strategy configurations

Importing this package registers every bundled strategy:
- grid: single-exchange grid strategy (exchangeStrategies)
- xmaker: cross-exchange market maker (crossExchangeStrategies)

Only the configuration types live here; the trading logic is provided by the
runtime that consumes the loaded config.
"""

# Import for registration side effects
from strategies.grid import GridStrategy
from strategies.xmaker import XMakerStrategy

__all__ = [
    "GridStrategy",
    "XMakerStrategy",
]

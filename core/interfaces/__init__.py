"""
Core interfaces

Base types shared by strategy configurations and the config loader.
"""

from core.interfaces.strategy_base import (
    StrategyConfigBase,
    SingleExchangeStrategy,
    CrossExchangeStrategy,
)

__all__ = [
    "StrategyConfigBase",
    "SingleExchangeStrategy",
    "CrossExchangeStrategy",
]

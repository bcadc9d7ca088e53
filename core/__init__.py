"""
Core module

Strategy configuration base types and the strategy registries.
Notification routing lives in ``core.notifier``.
"""

from core.interfaces.strategy_base import (
    StrategyConfigBase,
    SingleExchangeStrategy,
    CrossExchangeStrategy,
)

from core.registry import (
    StrategyRegistry,
    RegistrationError,
    exchange_strategy_registry,
    cross_exchange_strategy_registry,
    register_strategy,
    register_cross_exchange_strategy,
    list_strategies,
    list_cross_exchange_strategies,
)

__all__ = [
    # Strategy interfaces
    "StrategyConfigBase",
    "SingleExchangeStrategy",
    "CrossExchangeStrategy",
    # Registry
    "StrategyRegistry",
    "RegistrationError",
    "exchange_strategy_registry",
    "cross_exchange_strategy_registry",
    "register_strategy",
    "register_cross_exchange_strategy",
    "list_strategies",
    "list_cross_exchange_strategies",
]

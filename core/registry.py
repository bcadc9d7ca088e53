"""
Strategy registry system

Keeps the mapping from a strategy identifier (the key used in the YAML config)
to the configuration class that the identifier materializes into.

Two independent registries exist, one for single-exchange strategies and one
for cross-exchange strategies. Strategy modules register themselves at import
time through the decorators below, before any config file is loaded.
"""

import logging
import inspect
from typing import Type, Dict, Optional, List, Callable, Tuple

from core.interfaces.strategy_base import (
    StrategyConfigBase,
    SingleExchangeStrategy,
    CrossExchangeStrategy,
)


class RegistrationError(Exception):
    """Raised when a strategy class cannot be registered"""
    pass


class StrategyRegistry:
    """
    Strategy registry

    Maps identifiers to strategy configuration classes. Registration is only
    expected during initialization; afterwards the registry is read-only.
    """

    def __init__(
        self,
        kind: str,
        base_class: Type[StrategyConfigBase] = StrategyConfigBase,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            kind: Human readable registry kind, used in log and error messages
            base_class: Every registered class must derive from this type
            logger: Logger (optional)
        """
        self.kind = kind
        self.base_class = base_class
        self.logger = logger or logging.getLogger(f"registry.{kind}")
        self._strategies: Dict[str, Type[StrategyConfigBase]] = {}

    def register(self, identifier: str, prototype: Type[StrategyConfigBase]) -> None:
        """
        Register a strategy configuration class.

        The last registration for an identifier wins.

        Args:
            identifier: Strategy identifier as it appears in the config file
            prototype: Configuration class (subclass of ``base_class``)

        Raises:
            RegistrationError: identifier is empty or prototype is not a
                subclass of ``base_class``
        """
        if not isinstance(identifier, str) or not identifier:
            raise RegistrationError(
                f"{self.kind} strategy identifier must be a non-empty string, "
                f"given: {identifier!r}"
            )

        if not inspect.isclass(prototype):
            raise RegistrationError(
                f"'{identifier}' is not a class: {type(prototype)}"
            )

        if not issubclass(prototype, self.base_class):
            raise RegistrationError(
                f"'{identifier}' does not derive from {self.base_class.__name__}"
            )

        if identifier in self._strategies:
            self.logger.warning(
                f"{self.kind} strategy '{identifier}' is already registered "
                f"({self._strategies[identifier].__name__}), overriding"
            )

        self._strategies[identifier] = prototype
        self.logger.debug(f"registered {self.kind} strategy: {identifier} ({prototype.__name__})")

    def get(self, identifier: str) -> Optional[Type[StrategyConfigBase]]:
        """Return the class registered for ``identifier`` or None."""
        return self._strategies.get(identifier)

    def lookup(self, identifier: str) -> Tuple[Optional[Type[StrategyConfigBase]], bool]:
        """
        Look up an identifier.

        Returns:
            (prototype, found) pair; prototype is None when not found
        """
        prototype = self._strategies.get(identifier)
        return prototype, prototype is not None

    def list_available(self) -> List[str]:
        """Registered identifiers in registration order"""
        return list(self._strategies.keys())

    def is_registered(self, identifier: str) -> bool:
        return identifier in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._strategies

    def __repr__(self) -> str:
        return f"StrategyRegistry(kind={self.kind!r}, strategies={len(self._strategies)})"


# Global registry instances
exchange_strategy_registry = StrategyRegistry("exchange", SingleExchangeStrategy)
cross_exchange_strategy_registry = StrategyRegistry("cross_exchange", CrossExchangeStrategy)


def register_strategy(identifier: str) -> Callable:
    """
    Decorator registering a single-exchange strategy configuration class.

    Example:
        @register_strategy("grid")
        class GridStrategy(SingleExchangeStrategy):
            symbol: str
    """
    def decorator(cls: Type[SingleExchangeStrategy]) -> Type[SingleExchangeStrategy]:
        exchange_strategy_registry.register(identifier, cls)
        return cls

    return decorator


def register_cross_exchange_strategy(identifier: str) -> Callable:
    """
    Decorator registering a cross-exchange strategy configuration class.

    Example:
        @register_cross_exchange_strategy("xmaker")
        class XMakerStrategy(CrossExchangeStrategy):
            symbol: str
    """
    def decorator(cls: Type[CrossExchangeStrategy]) -> Type[CrossExchangeStrategy]:
        cross_exchange_strategy_registry.register(identifier, cls)
        return cls

    return decorator


def list_strategies() -> List[str]:
    """Identifiers in the global single-exchange registry"""
    return exchange_strategy_registry.list_available()


def list_cross_exchange_strategies() -> List[str]:
    """Identifiers in the global cross-exchange registry"""
    return cross_exchange_strategy_registry.list_available()


__all__ = [
    "StrategyRegistry",
    "RegistrationError",
    "exchange_strategy_registry",
    "cross_exchange_strategy_registry",
    "register_strategy",
    "register_cross_exchange_strategy",
    "list_strategies",
    "list_cross_exchange_strategies",
]

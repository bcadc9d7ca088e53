"""
Grid strategy configuration
"""

from typing import ClassVar

from pydantic import model_validator

from core.interfaces.strategy_base import SingleExchangeStrategy
from core.registry import register_strategy


@register_strategy("grid")
class GridStrategy(SingleExchangeStrategy):
    """
    Grid strategy settings

    Attributes:
        symbol: Market symbol (BTCUSDT, ...)
        grid_number: Number of price levels between lower_price and upper_price
        upper_price: Top of the grid
        lower_price: Bottom of the grid
        quantity: Order quantity per level
        profit_spread: Fixed spread added to the opposite order, 0 uses the grid step
        long: Keep the base asset instead of selling it back
    """

    ID: ClassVar[str] = "grid"

    symbol: str
    grid_number: int = 10
    upper_price: float
    lower_price: float
    quantity: float
    profit_spread: float = 0.0
    long: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> "GridStrategy":
        if self.grid_number <= 0:
            raise ValueError(f"gridNumber must be positive: {self.grid_number}")

        if self.upper_price <= self.lower_price:
            raise ValueError(
                f"upperPrice ({self.upper_price}) must be greater than "
                f"lowerPrice ({self.lower_price})"
            )

        if self.quantity <= 0:
            raise ValueError(f"quantity must be positive: {self.quantity}")

        return self

    def grid_step(self) -> float:
        """Price distance between two adjacent levels"""
        return (self.upper_price - self.lower_price) / self.grid_number

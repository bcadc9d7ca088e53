"""
XMaker strategy configuration
"""

from typing import ClassVar, List

from pydantic import model_validator

from core.interfaces.strategy_base import CrossExchangeStrategy
from core.registry import register_cross_exchange_strategy


@register_cross_exchange_strategy("xmaker")
class XMakerStrategy(CrossExchangeStrategy):
    """
    Cross-exchange market maker settings

    Attributes:
        symbol: Market symbol traded on both sessions
        source_exchange: Session the hedge orders are sent to
        maker_exchange: Session the quotes are placed on
        update_interval: Quote refresh interval (Go style duration, e.g. "1s")
        margin: Spread added on both sides of the source book, as a fraction
        quantity: Quantity of the first layer
        num_layers: Number of quote layers per side
    """

    ID: ClassVar[str] = "xmaker"

    symbol: str
    source_exchange: str
    maker_exchange: str
    update_interval: str = "1s"
    margin: float = 0.003
    quantity: float
    num_layers: int = 1
    disable_hedge: bool = False
    stop_hedge_quote_balance: float = 0.0

    @model_validator(mode="after")
    def _check_sessions(self) -> "XMakerStrategy":
        if self.source_exchange == self.maker_exchange:
            raise ValueError(
                f"sourceExchange and makerExchange must differ: {self.source_exchange}"
            )

        if self.num_layers < 1:
            raise ValueError(f"numLayers must be at least 1: {self.num_layers}")

        return self

    def sessions(self) -> List[str]:
        """Sessions this strategy addresses"""
        return [self.source_exchange, self.maker_exchange]

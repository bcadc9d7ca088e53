"""
Strategy configuration base types

Every strategy that can be declared in the config file is a pydantic model
deriving from one of the two base types below. The loader decodes a config
entry into the registered subclass; the trading logic itself lives outside
this package.
"""

from typing import Any, ClassVar, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrategyConfigBase(BaseModel):
    """
    Base model for registered strategy configurations.

    Field names are snake_case in Python and camelCase in the config file,
    either spelling is accepted on input. Keys that are not fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Identifier the class is registered under, informational only
    ID: ClassVar[str] = ""

    def strategy_id(self) -> str:
        return self.ID or type(self).__name__

    def to_stash(self) -> Dict[str, Any]:
        """Canonical generic form (camelCase keys, JSON-compatible values)"""
        return self.model_dump(mode="json", by_alias=True)


class SingleExchangeStrategy(StrategyConfigBase):
    """Strategy bound to one or more named sessions through its mount"""


class CrossExchangeStrategy(StrategyConfigBase):
    """Strategy that addresses several sessions on its own, it has no mount"""

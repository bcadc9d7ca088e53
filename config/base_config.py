"""
Configuration models for the trading bot.

Provides type-safe containers for:
- Exchange sessions
- Backtest parameters
- Notification channels and routing
- PnL reporters
- Loaded strategies (single-exchange mounts and cross-exchange strategies)

Keys are camelCase in the YAML document and snake_case in Python.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.interfaces.strategy_base import CrossExchangeStrategy, SingleExchangeStrategy

BACKTEST_DATE_FORMAT = "%Y-%m-%d"


class ConfigModel(BaseModel):
    """Base model: camelCase aliases, snake_case names accepted too, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Session(ConfigModel):
    """
    Exchange session.

    Attributes:
        exchange_name: Exchange identifier (binance, max, ...)
        env_var_prefix: Prefix of the environment variables holding the API credentials
    """
    exchange_name: str = Field(alias="exchange")
    env_var_prefix: str = ""


@dataclass
class Balance:
    currency: str
    available: Decimal
    locked: Decimal = Decimal(0)


class BacktestAccount(ConfigModel):
    maker_commission: int = 0
    taker_commission: int = 0
    buyer_commission: int = 0
    seller_commission: int = 0
    balances: Dict[str, Decimal] = Field(default_factory=dict)

    def balance_map(self) -> Dict[str, Balance]:
        """Initial balances keyed by currency, nothing locked."""
        return {
            currency: Balance(currency=currency, available=value)
            for currency, value in self.balances.items()
        }


class Backtest(ConfigModel):
    """
    Backtest parameters.

    Attributes:
        start_time: First day of the backtest, YYYY-MM-DD
        end_time: Last day of the backtest, YYYY-MM-DD
        account: Simulated account
        symbols: Symbols to load market data for
    """
    start_time: str = ""
    end_time: str = ""
    account: BacktestAccount = Field(default_factory=BacktestAccount)
    symbols: List[str] = Field(default_factory=list)

    def parse_start_time(self) -> datetime:
        if not self.start_time:
            raise ValueError("backtest.startTime must be defined")
        return datetime.strptime(self.start_time, BACKTEST_DATE_FORMAT)

    def parse_end_time(self) -> datetime:
        if not self.end_time:
            raise ValueError("backtest.endTime must be defined")
        return datetime.strptime(self.end_time, BACKTEST_DATE_FORMAT)


class SlackNotification(ConfigModel):
    default_channel: str = ""
    error_channel: str = ""


class NotificationRouting(ConfigModel):
    trade: str = ""
    order: str = ""
    submit_order: str = ""
    pnl: str = Field(default="", alias="pnL")


class NotificationConfig(ConfigModel):
    """
    Notification settings.

    ``symbol_channels`` and ``session_channels`` map a regular expression
    (matched against the symbol or the session name) to a channel name.
    """
    slack: Optional[SlackNotification] = None
    symbol_channels: Dict[str, str] = Field(default_factory=dict)
    session_channels: Dict[str, str] = Field(default_factory=dict)
    routing: Optional[NotificationRouting] = None


class PnLReporterConfig(ConfigModel):
    """Each field accepts a single string or a list of strings."""
    average_cost_by_symbols: List[str] = Field(default_factory=list)
    of: List[str] = Field(default_factory=list)
    when: List[str] = Field(default_factory=list)

    @field_validator("average_cost_by_symbols", "of", "when", mode="before")
    @classmethod
    def _string_or_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


@dataclass
class ExchangeStrategyMount:
    """
    A single-exchange strategy together with the sessions it is mounted on.

    Attributes:
        mounts: Session names, in document order, without duplicates
        strategy: Strategy configuration loaded from the config file
    """
    mounts: List[str] = field(default_factory=list)
    strategy: Optional[SingleExchangeStrategy] = None

    def is_mounted_on(self, session: str) -> bool:
        return session in self.mounts


class Config(ConfigModel):
    """
    Main configuration container.

    The static sections are decoded directly from the document. The two
    strategy lists are filled by the loader after the static pass.
    """
    imports: List[str] = Field(default_factory=list)
    backtest: Optional[Backtest] = None
    notifications: Optional[NotificationConfig] = None
    sessions: Dict[str, Session] = Field(default_factory=dict)
    risk_controls: Optional[Dict[str, Any]] = None
    pnl_reporters: List[PnLReporterConfig] = Field(default_factory=list, alias="reportPnL")

    exchange_strategies: List[ExchangeStrategyMount] = Field(default_factory=list, exclude=True)
    cross_exchange_strategies: List[CrossExchangeStrategy] = Field(default_factory=list, exclude=True)

    def get_session(self, name: str) -> Optional[Session]:
        """Get session configuration by name."""
        return self.sessions.get(name)

    def get_mounts_for_session(self, session: str) -> List[ExchangeStrategyMount]:
        """Single-exchange strategies mounted on the given session."""
        return [m for m in self.exchange_strategies if m.is_mounted_on(session)]

    def validate_mounts(self) -> List[str]:
        """
        Check that every mount target is a declared session.

        Returns:
            Empty list if valid, list of error messages otherwise.
        """
        errors = []
        for mount in self.exchange_strategies:
            for session in mount.mounts:
                if session not in self.sessions:
                    errors.append(
                        f"strategy '{mount.strategy.strategy_id()}' is mounted on "
                        f"undefined session '{session}'"
                    )
        return errors


# Top-level keys handled by the static decoder; everything else is left to the strategy loaders.
RECOGNIZED_KEYS = (
    "imports",
    "backtest",
    "notifications",
    "sessions",
    "riskControls",
    "reportPnL",
)

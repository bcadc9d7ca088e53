"""
Configuration system for the trading bot

This package loads a single YAML document into a typed ``Config``:
- Static sections (sessions, backtest, notifications, risk controls, PnL reporters)
- Single-exchange strategies mounted on sessions (exchangeStrategies)
- Cross-exchange strategies (crossExchangeStrategies)
- Environment variable expansion (${VAR} syntax) and .env files
"""

from .base_config import (
    Backtest,
    BacktestAccount,
    Balance,
    Config,
    ExchangeStrategyMount,
    NotificationConfig,
    NotificationRouting,
    PnLReporterConfig,
    Session,
    SlackNotification,
)
from .errors import (
    ConfigError,
    ConfigIOError,
    ExtensionDecodeError,
    ExtensionImportError,
    MalformedDocumentError,
    MalformedEntryError,
    MalformedSectionError,
    NoExtensionsRegisteredError,
    SchemaDecodeError,
    UnknownExtensionError,
)
from .loader import (
    decode_static,
    decode_strategy,
    encode_strategy,
    expand_env_vars,
    find_config_file,
    import_extensions,
    load_config,
    load_cross_exchange_strategies,
    load_dotenv_files,
    load_exchange_strategies,
    load_stash,
    preload_config,
)

__all__ = [
    # Config models
    'Backtest',
    'BacktestAccount',
    'Balance',
    'Config',
    'ExchangeStrategyMount',
    'NotificationConfig',
    'NotificationRouting',
    'PnLReporterConfig',
    'Session',
    'SlackNotification',
    # Errors
    'ConfigError',
    'ConfigIOError',
    'ExtensionDecodeError',
    'ExtensionImportError',
    'MalformedDocumentError',
    'MalformedEntryError',
    'MalformedSectionError',
    'NoExtensionsRegisteredError',
    'SchemaDecodeError',
    'UnknownExtensionError',
    # Loader functions
    'decode_static',
    'decode_strategy',
    'encode_strategy',
    'expand_env_vars',
    'find_config_file',
    'import_extensions',
    'load_config',
    'load_cross_exchange_strategies',
    'load_dotenv_files',
    'load_exchange_strategies',
    'load_stash',
    'preload_config',
]

__version__ = '1.0.0'

#!/usr/bin/env python3
"""
Trading Bot - Config Loader Entry Point

Loads bbgo.yaml, resolves every declared strategy against the registered
strategy types and prints what would be started.

Startup sequence:
- Locate the config file (--config, $TRADEBOT_CONFIG, config/bbgo.yaml, ...)
- Preload the static sections to read ``imports``
- Import the bundled strategies and every module listed under ``imports``
- Load the full config, aborting on any error

Usage:
    python main.py                          # Discover config, print summary
    python main.py --config bbgo.yaml       # Explicit config file
    python main.py --strict                 # Unknown strategy keys are errors
    python main.py --no-dotenv              # Do not read .env files
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from config import (
    Config,
    ConfigError,
    find_config_file,
    import_extensions,
    load_config,
    load_dotenv_files,
    preload_config,
)
from core.logger import setup_logger
from core.notifier import LogNotifier, Notifiability

BUNDLED_STRATEGY_MODULES = ["strategies"]


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Trading Bot - load and validate the strategy configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Discover config, print summary
  python main.py --config bbgo.yaml       # Explicit config file
  python main.py --strict                 # Unknown strategy keys are errors
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to config file (default: $TRADEBOT_CONFIG or config/bbgo.yaml)",
    )

    parser.add_argument(
        "--dotenv",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Load .env files and expand ${VAR} references (default: enabled)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on strategy entry keys that are not registered strategies",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        metavar="FILE",
        default=None,
        help="Also write logs to logs/FILE",
    )

    return parser


def render_summary(config: Config, console: Optional[Console] = None) -> None:
    """Print sessions and loaded strategies."""
    console = console or Console()

    sessions = Table(title="Sessions", show_header=True)
    sessions.add_column("Session", style="cyan")
    sessions.add_column("Exchange", style="green")
    sessions.add_column("Env Prefix")
    for name, session in config.sessions.items():
        sessions.add_row(name, session.exchange_name, session.env_var_prefix)
    console.print(sessions)

    strategies = Table(title="Strategies", show_header=True)
    strategies.add_column("Strategy", style="cyan")
    strategies.add_column("Type")
    strategies.add_column("Mounts", style="green")
    for mount in config.exchange_strategies:
        strategies.add_row(mount.strategy.strategy_id(), "exchange", ", ".join(mount.mounts))
    for strategy in config.cross_exchange_strategies:
        strategies.add_row(strategy.strategy_id(), "cross exchange", "-")
    console.print(strategies)


def run(args: argparse.Namespace) -> int:
    """
    Load the configuration.

    Args:
        args: Parsed CLI arguments

    Returns:
        int: Exit code (0 = success, non-zero = error)
    """
    logger = setup_logger(None, args.log_file, level=args.log_level)

    if args.dotenv:
        for dotenv_file in load_dotenv_files():
            logger.debug(f"loaded {dotenv_file}")

    config_path = Path(args.config) if args.config else find_config_file()
    if config_path is None:
        logger.error("Configuration file not found, use --config or set TRADEBOT_CONFIG")
        return 1

    try:
        logger.info(f"Loading configuration from: {config_path}")
        preloaded = preload_config(config_path, use_env=args.dotenv)
        modules: List[str] = BUNDLED_STRATEGY_MODULES + preloaded.imports
        import_extensions(modules)

        config = load_config(config_path, use_env=args.dotenv, strict=args.strict)

    except ConfigError as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    for problem in config.validate_mounts():
        logger.warning(problem)

    notifiability = Notifiability.from_config(config.notifications)
    notifiability.add_notifier(LogNotifier(logger.getChild("notifier")))
    notifiability.notify(
        "configuration loaded: %d exchange strategies, %d cross exchange strategies",
        len(config.exchange_strategies),
        len(config.cross_exchange_strategies),
    )

    render_summary(config)
    return 0


def main() -> int:
    """
    Main entry point.

    Returns:
        int: Exit code
    """
    parser = setup_argument_parser()
    args = parser.parse_args()

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())

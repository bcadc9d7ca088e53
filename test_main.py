"""Tests for the bundled strategies and the command line entry point"""

import argparse
import textwrap
from pathlib import Path

import pytest

import main
from config import ExtensionDecodeError, load_config
from strategies import GridStrategy, XMakerStrategy

EXAMPLE_CONFIG = Path(__file__).parent / "config" / "bbgo.yaml"


def make_args(config, **overrides):
    values = {
        "config": str(config) if config else None,
        "dotenv": False,
        "strict": False,
        "log_level": "INFO",
        "log_file": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_example_config_loads_with_bundled_strategies():
    config = load_config(EXAMPLE_CONFIG)

    assert [m.mounts for m in config.exchange_strategies] == [["binance"], ["max", "binance"]]

    grid = config.exchange_strategies[0].strategy
    assert isinstance(grid, GridStrategy)
    assert grid.grid_number == 20
    assert grid.upper_price == 30000
    assert grid.grid_step() == 500

    assert config.exchange_strategies[1].strategy.grid_number == 10

    xmaker = config.cross_exchange_strategies[0]
    assert isinstance(xmaker, XMakerStrategy)
    assert xmaker.sessions() == ["binance", "max"]
    assert xmaker.num_layers == 2

    assert config.validate_mounts() == []
    assert [m.strategy.strategy_id() for m in config.get_mounts_for_session("max")] == ["grid"]


def test_grid_range_is_validated(tmp_path):
    path = tmp_path / "bbgo.yaml"
    path.write_text(textwrap.dedent("""
    exchangeStrategies:
    - on: binance
      grid:
        symbol: BTCUSDT
        upperPrice: 100
        lowerPrice: 200
        quantity: 1
    """))

    with pytest.raises(ExtensionDecodeError) as exc_info:
        load_config(path)

    assert exc_info.value.identifier == "grid"


def test_validate_mounts_reports_undefined_sessions(tmp_path):
    path = tmp_path / "bbgo.yaml"
    path.write_text(textwrap.dedent("""
    sessions:
      max:
        exchange: max
    exchangeStrategies:
    - on: [max, ftx]
      grid: {symbol: BTCUSDT, upperPrice: 2, lowerPrice: 1, quantity: 1}
    """))

    errors = load_config(path).validate_mounts()

    assert len(errors) == 1
    assert "ftx" in errors[0]


def test_run_with_example_config():
    assert main.run(make_args(EXAMPLE_CONFIG)) == 0


def test_run_with_missing_file(tmp_path):
    assert main.run(make_args(tmp_path / "missing.yaml")) == 1


def test_run_with_unknown_import(tmp_path):
    path = tmp_path / "bbgo.yaml"
    path.write_text("imports:\n- no_such_strategy_module_xyz\n")

    assert main.run(make_args(path)) == 1


def test_run_strict_rejects_unknown_strategy(tmp_path):
    path = tmp_path / "bbgo.yaml"
    path.write_text(textwrap.dedent("""
    exchangeStrategies:
    - on: max
      gird: {symbol: BTCUSDT}
    """))

    assert main.run(make_args(path)) == 0
    assert main.run(make_args(path, strict=True)) == 1


def test_run_without_config(tmp_path, monkeypatch):
    monkeypatch.delenv("TRADEBOT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    assert main.run(make_args(None)) == 1


def test_argument_parser_defaults():
    args = main.setup_argument_parser().parse_args([])

    assert args.config is None
    assert args.dotenv is True
    assert args.strict is False

    args = main.setup_argument_parser().parse_args(["--no-dotenv", "--strict", "--config", "x.yaml"])
    assert args.dotenv is False
    assert args.strict is True
    assert args.config == "x.yaml"

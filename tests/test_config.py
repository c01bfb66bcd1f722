"""Unit tests for core.config and core.logger."""

import json
import logging
from pathlib import Path

from natgas_backtest.core.config import load_config
from natgas_backtest.core.logger import setup_logging

YAML = """
data:
  symbol: ng
  path: prices.csv
strategy:
  sma_long: 150
  rsi_entry: 25
sizing:
  trade_size: 5000
  allow_pyramiding: true
backtest:
  initial_equity: 50000
  start_date: "2012-01-01"
logging:
  level: DEBUG
"""


def test_load_config_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(YAML, encoding="utf-8")
    cfg = load_config(path, project_root=tmp_path)
    assert cfg.symbol == "NG"
    assert cfg.data_path == Path("prices.csv")
    assert cfg.sma_long == 150
    assert cfg.sma_short == 50
    assert cfg.rsi_entry == 25.0
    assert cfg.trade_size == 5000.0
    assert cfg.max_size == 10000.0
    assert cfg.allow_pyramiding is True
    assert cfg.initial_equity == 50000.0
    assert cfg.backtest_start == "2012-01-01"
    assert cfg.backtest_end is None
    assert cfg.log_level == "DEBUG"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(YAML, encoding="utf-8")
    monkeypatch.setenv("SMA_LONG", "100")
    monkeypatch.setenv("TRADE_SIZE", "2500")
    monkeypatch.setenv("ALLOW_PYRAMIDING", "false")
    cfg = load_config(path, project_root=tmp_path)
    assert cfg.sma_long == 100
    assert cfg.trade_size == 2500.0
    assert cfg.allow_pyramiding is False


def test_defaults_without_file(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml", project_root=tmp_path)
    assert (cfg.sma_long, cfg.sma_short, cfg.rsi_len) == (200, 50, 3)
    assert (cfg.rsi_entry, cfg.rsi_exit) == (30.0, 70.0)
    assert cfg.initial_equity == 100000.0
    assert cfg.data_path is None


def test_setup_logging_json_file(tmp_path):
    logger = setup_logging("INFO", tmp_path, "run.log", json_logs=True)
    logging.getLogger("natgas_backtest.backtest").info("hello %s", "ng")
    for h in logger.handlers:
        h.flush()
    line = (tmp_path / "run.log").read_text(encoding="utf-8").strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["message"] == "hello ng"
    assert entry["logger"] == "natgas_backtest.backtest"
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)

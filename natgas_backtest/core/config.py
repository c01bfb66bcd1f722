"""
Load configuration from config.yaml and .env. Environment variables override YAML.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_bool(key: str, default: bool = False) -> bool:
        return os.getenv(key, str(default)).lower() in ("true", "1", "yes")

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    strategy = data.get("strategy", {})
    sizing = data.get("sizing", {})
    backtest = data.get("backtest", {})
    source = data.get("data", {})
    logging_cfg = data.get("logging", {})

    data_path = env("DATA_PATH", source.get("path") or "")

    return Config(
        symbol=env("SYMBOL", source.get("symbol", "NG")).upper(),
        data_path=Path(data_path) if data_path else None,
        # Strategy
        sma_long=env_int("SMA_LONG", strategy.get("sma_long", 200)),
        sma_short=env_int("SMA_SHORT", strategy.get("sma_short", 50)),
        rsi_len=env_int("RSI_LEN", strategy.get("rsi_len", 3)),
        rsi_entry=env_float("RSI_ENTRY", strategy.get("rsi_entry", 30.0)),
        rsi_exit=env_float("RSI_EXIT", strategy.get("rsi_exit", 70.0)),
        # Sizing
        trade_size=env_float("TRADE_SIZE", sizing.get("trade_size", 10000.0)),
        max_size=env_float("MAX_SIZE", sizing.get("max_size", 10000.0)),
        integer_qty=env_bool("INTEGER_QTY", sizing.get("integer_qty", True)),
        allow_pyramiding=env_bool("ALLOW_PYRAMIDING", sizing.get("allow_pyramiding", False)),
        # Backtest
        initial_equity=env_float("INITIAL_EQUITY", backtest.get("initial_equity", 100000.0)),
        backtest_start=backtest.get("start_date"),
        backtest_end=backtest.get("end_date"),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "natgas_backtest.log"),
        json_logs=bool(logging_cfg.get("json", False)),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "symbol", "data_path",
        "sma_long", "sma_short", "rsi_len", "rsi_entry", "rsi_exit",
        "trade_size", "max_size", "integer_qty", "allow_pyramiding",
        "initial_equity", "backtest_start", "backtest_end",
        "log_level", "log_dir", "log_file", "json_logs",
    )

    def __init__(
        self,
        symbol: str = "NG",
        data_path: Optional[Path] = None,
        sma_long: int = 200,
        sma_short: int = 50,
        rsi_len: int = 3,
        rsi_entry: float = 30.0,
        rsi_exit: float = 70.0,
        trade_size: float = 10000.0,
        max_size: float = 10000.0,
        integer_qty: bool = True,
        allow_pyramiding: bool = False,
        initial_equity: float = 100000.0,
        backtest_start: Optional[str] = None,
        backtest_end: Optional[str] = None,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "natgas_backtest.log",
        json_logs: bool = False,
    ):
        self.symbol = symbol
        self.data_path = data_path
        self.sma_long = sma_long
        self.sma_short = sma_short
        self.rsi_len = rsi_len
        self.rsi_entry = rsi_entry
        self.rsi_exit = rsi_exit
        self.trade_size = trade_size
        self.max_size = max_size
        self.integer_qty = integer_qty
        self.allow_pyramiding = allow_pyramiding
        self.initial_equity = initial_equity
        self.backtest_start = str(backtest_start) if backtest_start else None
        self.backtest_end = str(backtest_end) if backtest_end else None
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
        self.json_logs = json_logs

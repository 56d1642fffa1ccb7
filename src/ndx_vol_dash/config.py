"""Configuration settings for the dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SYMBOL = "^NDX"
DEFAULT_REFRESH_HOUR = 5
DEFAULT_WINDOW_DAYS = 100

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from err


@dataclass
class Settings:
    """Application settings."""

    symbol: str = field(default_factory=lambda: os.getenv("NDX_VOL_SYMBOL", DEFAULT_SYMBOL))
    refresh_hour: int = field(default_factory=lambda: _env_int("NDX_VOL_REFRESH_HOUR", DEFAULT_REFRESH_HOUR))
    window_days: int = field(default_factory=lambda: _env_int("NDX_VOL_WINDOW_DAYS", DEFAULT_WINDOW_DAYS))
    drop_inverted_ranges: bool = field(default_factory=lambda: _env_flag("NDX_VOL_DROP_INVERTED"))
    skip_cookie_check: bool = field(default_factory=lambda: _env_flag("YFINANCE_SKIP_COOKIE_CHECK"))

    def validate(self) -> None:
        """Validate settings ranges."""
        if not 0 <= self.refresh_hour <= 23:
            raise ValueError(f"refresh_hour must be within 0-23, got {self.refresh_hour}")
        if self.window_days <= 0:
            raise ValueError(f"window_days must be positive, got {self.window_days}")
        if not self.symbol:
            raise ValueError("symbol must not be empty")

"""Data access layer."""

from .normalization import parse_payload
from .providers import VolatilityProvider
from .yfinance_provider import YFinanceVolatilityProvider

__all__ = ["VolatilityProvider", "YFinanceVolatilityProvider", "parse_payload"]

"""yfinance-backed daily range provider."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import yfinance as yf
import yfinance.data

from ..domain import VolatilityQuery
from ..utils import FetchFailed
from .normalization import frame_to_payload, normalize_yfinance_frame
from .providers import VolatilityProvider

logger = logging.getLogger(__name__)


def patch_yfinance_cookie_check() -> None:
    """Bypass the fc.yahoo.com cookie check on networks that block that domain."""
    logger.warning("Patching yfinance to skip fc.yahoo.com cookie check")

    def _get_cookie_basic_patched(self, timeout=30):
        return True

    yfinance.data.YfData._get_cookie_basic = _get_cookie_basic_patched


class YFinanceVolatilityProvider(VolatilityProvider):
    """Adapter around yfinance.download that emits the daily range payload."""

    def __init__(self, skip_cookie_check: bool = False) -> None:
        if skip_cookie_check:
            patch_yfinance_cookie_check()

    def fetch_daily_ranges(self, query: VolatilityQuery) -> dict[str, Any]:
        start = query.end - timedelta(days=query.window_days)
        logger.info("Downloading %s daily bars from %s to %s", query.symbol, start.date(), query.end.date())

        try:
            raw = yf.download(
                tickers=query.symbol,
                start=start,
                end=query.end,
                interval="1d",
                auto_adjust=False,
                group_by="ticker",
                progress=False,
                threads=False,
            )
        except Exception as err:
            raise FetchFailed(f"yfinance download failed: {err}") from err

        if isinstance(raw, tuple):
            raw = raw[0]

        # yfinance reports most upstream failures as an empty frame
        if raw is None or raw.empty:
            raise FetchFailed(f"yfinance returned no rows for {query.symbol}")

        return frame_to_payload(normalize_yfinance_frame(raw, query.symbol))

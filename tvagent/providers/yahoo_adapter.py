from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from tvagent.config.settings import settings
from tvagent.errors import ProviderError
from tvagent.providers.base import CandleProvider
from tvagent.schemas.candle import Candle
from tvagent.utils.interval_mapper import secondary_range
from tvagent.utils.validators import epoch_to_iso, tail, to_finite_float


def _at(values: list[Any], idx: int) -> Any:
    return values[idx] if idx < len(values) else None


def parse_chart(result: dict[str, Any], limit: int) -> list[Candle]:
    """Turn a chart result's parallel arrays into candles."""
    timestamps = result.get("timestamp") or []
    quote_block = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
    opens = quote_block.get("open") or []
    highs = quote_block.get("high") or []
    lows = quote_block.get("low") or []
    closes = quote_block.get("close") or []
    volumes = quote_block.get("volume") or []

    rows: list[tuple[int, Candle]] = []
    for idx, ts in enumerate(timestamps):
        prices = [to_finite_float(_at(series, idx)) for series in (opens, highs, lows, closes)]
        if ts is None or any(p is None for p in prices):
            continue
        open_, high, low, close = prices
        rows.append(
            (
                int(ts),
                Candle(
                    time=epoch_to_iso(ts),
                    open=open_,
                    high=high,
                    low=low,
                    close=close,
                    volume=to_finite_float(_at(volumes, idx)),
                ),
            )
        )
    rows.sort(key=lambda item: item[0])
    return tail([candle for _, candle in rows], limit)


class YahooAdapter(CandleProvider):
    name = "finance.yahoo.com"

    def __init__(self, base_url: str | None = None, timeout_seconds: float | None = None):
        super().__init__(base_url or settings.secondary_base_url, timeout_seconds)

    def _fetch_chart(self, provider_symbol: str, interval: str, range_value: str) -> dict[str, Any]:
        text = self._get_text(
            f"{self.base_url}{quote(provider_symbol, safe='')}",
            {"interval": interval, "range": range_value},
        )
        try:
            chart = json.loads(text)["chart"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError(self.name, "malformed chart payload") from exc
        if not isinstance(chart, dict):
            raise ProviderError(self.name, "malformed chart payload")
        error = chart.get("error")
        if error:
            message = error.get("description") if isinstance(error, dict) else None
            raise ProviderError(self.name, str(message or error))
        results = chart.get("result") or []
        if not results or not isinstance(results[0], dict):
            raise ProviderError(self.name, "chart payload has no result")
        return results[0]

    def fetch_candles(self, symbol: str, interval: str, limit: int) -> list[Candle]:
        result = self._fetch_chart(symbol, interval=interval, range_value=secondary_range(interval, limit))
        try:
            return parse_chart(result, limit)
        except (AttributeError, IndexError, TypeError, ValueError, OverflowError) as exc:
            raise ProviderError(self.name, f"unreadable chart series: {exc}") from exc

"""
OHLCV retrieval with a single fallback.

The primary provider is asked first. Only when it fails or returns no usable
rows is the secondary provider asked, and its failures degrade to an empty
candle list. The two calls never overlap.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Literal

from tvagent.errors import ProviderError
from tvagent.internal_metrics import MetricsCollector
from tvagent.providers.base import CandleProvider
from tvagent.schemas.candle import Candle, CandleQuery, CandleResult
from tvagent.utils.interval_mapper import IntervalMap
from tvagent.utils.symbol_mapper import SymbolMap
from tvagent.utils.validators import tail

logger = logging.getLogger(__name__)

Source = Literal["primary", "fallback"]
OutcomeStatus = Literal["ok", "empty", "failed"]


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single provider attempt."""

    source: Source
    provider: str
    provider_symbol: str
    status: OutcomeStatus
    candles: list[Candle] = field(default_factory=list)
    error: str | None = None

    @property
    def has_data(self) -> bool:
        return self.status == "ok"


class CandleService:
    def __init__(
        self,
        primary: CandleProvider,
        secondary: CandleProvider,
        symbols: SymbolMap | None = None,
        intervals: IntervalMap | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.primary = primary
        self.secondary = secondary
        self.symbols = symbols or SymbolMap()
        self.intervals = intervals or IntervalMap()
        self.metrics = metrics

    def _attempt(self, source: Source, provider: CandleProvider, symbol: str, interval: str, limit: int) -> FetchOutcome:
        start = time.perf_counter()
        try:
            candles = provider.fetch_candles(symbol, interval, limit)
        except ProviderError as exc:
            outcome = FetchOutcome(source, provider.name, symbol, "failed", error=str(exc))
            logger.warning(
                "provider_fetch_failed",
                extra={"provider": provider.name, "symbol": symbol, "interval": interval, "error": str(exc)},
            )
        except Exception as exc:
            outcome = FetchOutcome(source, provider.name, symbol, "failed", error=repr(exc))
            logger.error(f"Unexpected error from {provider.name} for {symbol}: {exc}", exc_info=True)
        else:
            candles = tail(candles, limit)
            outcome = FetchOutcome(source, provider.name, symbol, "ok" if candles else "empty", candles)

        if self.metrics is not None:
            self.metrics.record_fetch(provider.name, outcome.status, (time.perf_counter() - start) * 1000)
        return outcome

    def fetch_candles(self, query: CandleQuery) -> CandleResult:
        ids = self.symbols.resolve(query.symbol)

        outcome = self._attempt(
            "primary",
            self.primary,
            ids.primary,
            self.intervals.primary_token(query.interval),
            query.limit,
        )
        if not outcome.has_data:
            logger.info(
                "falling_back_to_secondary",
                extra={"symbol": query.symbol, "interval": query.interval, "primary_status": outcome.status},
            )
            outcome = self._attempt(
                "fallback",
                self.secondary,
                ids.secondary,
                self.intervals.secondary_token(query.interval),
                query.limit,
            )

        if self.metrics is not None:
            self.metrics.record_candle_request(used_fallback=outcome.source == "fallback")

        return CandleResult(
            symbol=query.symbol,
            interval=query.interval,
            candles=outcome.candles,
            source=outcome.source,
            provider=outcome.provider,
            provider_symbol=outcome.provider_symbol,
        )

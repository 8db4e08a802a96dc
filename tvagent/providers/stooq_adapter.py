from __future__ import annotations

from tvagent.config.settings import settings
from tvagent.providers.base import CandleProvider
from tvagent.schemas.candle import Candle
from tvagent.utils.validators import tail, to_finite_float

MIN_ROW_FIELDS = 5


def parse_csv(payload: str, limit: int) -> list[Candle]:
    """Parse a Stooq CSV download into candles.

    The first line is the header. Intraday downloads carry a separate Time
    column after Date; it is folded into the candle time. Short rows and rows
    with a non-finite price are skipped.
    """
    lines = payload.strip().splitlines()
    if not lines:
        return []

    header = [col.strip().lower() for col in lines[0].split(",")]
    offset = 1 if len(header) > 1 and header[1] == "time" else 0

    candles: list[Candle] = []
    for row in lines[1:]:
        parts = [p.strip() for p in row.split(",")]
        if len(parts) < MIN_ROW_FIELDS + offset:
            continue
        open_ = to_finite_float(parts[1 + offset])
        if open_ is None:
            continue
        high = to_finite_float(parts[2 + offset])
        low = to_finite_float(parts[3 + offset])
        close = to_finite_float(parts[4 + offset])
        if high is None or low is None or close is None:
            continue
        volume = to_finite_float(parts[5 + offset]) if len(parts) > 5 + offset else None
        time = f"{parts[0]} {parts[1]}" if offset else parts[0]
        candles.append(Candle(time=time, open=open_, high=high, low=low, close=close, volume=volume))
    return tail(candles, limit)


class StooqAdapter(CandleProvider):
    name = "stooq.com"

    def __init__(self, base_url: str | None = None, timeout_seconds: float | None = None):
        super().__init__(base_url or settings.primary_base_url, timeout_seconds)

    def fetch_candles(self, symbol: str, interval: str, limit: int) -> list[Candle]:
        payload = self._get_text(self.base_url, {"s": symbol, "i": interval})
        return parse_csv(payload, limit)

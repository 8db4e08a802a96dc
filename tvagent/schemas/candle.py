from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

Interval = Literal["1m", "5m", "15m", "30m", "1h", "4h", "1D", "1W", "1M"]

MIN_CANDLE_LIMIT = 10
MAX_CANDLE_LIMIT = 5000
DEFAULT_CANDLE_LIMIT = 500


class Candle(BaseModel):
    time: str
    open: float
    high: float
    low: float
    close: float
    # None is the only representation of a missing volume.
    volume: Optional[float] = None


class CandleQuery(BaseModel):
    symbol: str = Field(..., description="Ticker, e.g. AAPL, OMXS30, aapl.us, BTCUSD")
    interval: Interval = "1D"
    limit: int = Field(DEFAULT_CANDLE_LIMIT, ge=MIN_CANDLE_LIMIT, le=MAX_CANDLE_LIMIT)

    @field_validator("symbol")
    @classmethod
    def _strip_symbol(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("symbol must not be empty")
        return cleaned


class CandleResult(BaseModel):
    symbol: str
    interval: str
    candles: list[Candle]
    source: Literal["primary", "fallback"]
    provider: str
    provider_symbol: str

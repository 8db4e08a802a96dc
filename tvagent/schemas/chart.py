from pydantic import BaseModel, Field, field_validator


class ChartUrlQuery(BaseModel):
    symbol: str = Field(..., description="Eg AAPL, BTCUSD, OMX30")
    interval: str = Field("1D", description="1m, 15m, 1h, 4h, 1D, etc")

    @field_validator("symbol")
    @classmethod
    def _strip_symbol(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("symbol must not be empty")
        return cleaned


class ChartUrlResult(BaseModel):
    url: str

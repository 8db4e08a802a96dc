from typing import Optional

from pydantic import BaseModel, Field


class BacktestQuery(BaseModel):
    pine_code: str = Field(..., min_length=1, description="Full Pine v5 script")
    chart_url: Optional[str] = Field(None, description="TradingView chart URL. Defaults to TV_CHART_URL")


class BacktestResult(BaseModel):
    net_profit: Optional[str] = None
    win_rate: Optional[str] = None
    drawdown: Optional[str] = None

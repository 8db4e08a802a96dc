from urllib.parse import quote

from tvagent.config.settings import settings
from tvagent.schemas.chart import ChartUrlQuery, ChartUrlResult


class ChartService:
    def __init__(self, base_url: str | None = None):
        self.base_url = base_url or settings.chart_base_url

    def chart_url(self, query: ChartUrlQuery) -> ChartUrlResult:
        symbol = quote(query.symbol.strip().upper(), safe="")
        interval = quote(query.interval or "1D", safe="")
        return ChartUrlResult(url=f"{self.base_url}?symbol={symbol}&interval={interval}")

from tvagent.schemas.backtest import BacktestQuery, BacktestResult
from tvagent.schemas.candle import CandleQuery, CandleResult
from tvagent.schemas.chart import ChartUrlQuery, ChartUrlResult
from tvagent.services.backtest_service import BacktestService
from tvagent.services.candle_service import CandleService
from tvagent.services.chart_service import ChartService
from tvagent.tools.registry import ToolRegistry, ToolSpec


def build_registry(candles: CandleService, charts: ChartService, backtests: BacktestService) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        ToolSpec(
            name="tradingview_chart_url",
            title="TradingView chart URL",
            description="Return a TradingView chart URL for a symbol+interval.",
            input_model=ChartUrlQuery,
            output_model=ChartUrlResult,
            handler=charts.chart_url,
        )
    )
    registry.register(
        ToolSpec(
            name="get_ohlcv",
            title="Get OHLCV candles",
            description="Fetch OHLCV candles from Stooq, falling back to Yahoo Finance when Stooq has no data.",
            input_model=CandleQuery,
            output_model=CandleResult,
            handler=candles.fetch_candles,
        )
    )
    registry.register(
        ToolSpec(
            name="tv_backtest_in_ui",
            title="Backtest Pine in TradingView UI",
            description="Run a Pine strategy in the TradingView Strategy Tester and return key metrics.",
            input_model=BacktestQuery,
            output_model=BacktestResult,
            handler=backtests.run,
        )
    )
    return registry

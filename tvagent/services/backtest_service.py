from __future__ import annotations

import logging
from typing import Callable

from tvagent.config.settings import settings
from tvagent.errors import ToolUnavailableError
from tvagent.schemas.backtest import BacktestQuery, BacktestResult

logger = logging.getLogger(__name__)

BacktestRunner = Callable[[str, str], BacktestResult]


def build_backtest_runner(enabled: bool | None = None) -> BacktestRunner | None:
    """Return the Playwright runner when UI backtests are enabled and Playwright is installed."""
    if enabled is None:
        enabled = settings.tv_backtest_enabled
    if not enabled:
        return None
    try:
        from tvagent.services.tv_runner import run_tv_backtest
    except ImportError as exc:
        logger.warning(
            f"UI backtests enabled but Playwright is unavailable ({exc}). "
            "Install with: pip install 'tradingview-agent[browser]' && playwright install chromium"
        )
        return None
    return run_tv_backtest


class BacktestService:
    """Hands Pine code to a browser runner. Without one, the tool is unavailable."""

    def __init__(self, runner: BacktestRunner | None = None, default_chart_url: str | None = None):
        self.runner = runner
        self.default_chart_url = default_chart_url or settings.tv_chart_url or settings.chart_base_url

    def resolve_chart_url(self, query: BacktestQuery) -> str:
        return query.chart_url or self.default_chart_url

    def run(self, query: BacktestQuery) -> BacktestResult:
        if self.runner is None:
            raise ToolUnavailableError("UI backtesting is disabled or Playwright is not installed")
        chart_url = self.resolve_chart_url(query)
        logger.info("Running UI backtest", extra={"chart_url": chart_url})
        return self.runner(query.pine_code, chart_url)

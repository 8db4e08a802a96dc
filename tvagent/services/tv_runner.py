"""
TradingView UI backtest runner.

Opens the chart in a local Chromium, pastes the Pine script into the Pine
Editor, adds it to the chart, opens the Strategy Tester and scrapes the
headline metrics. Needs a logged-in TradingView session in that browser.
Selectors follow the live TradingView DOM and may need adjusting when it changes.
"""
from __future__ import annotations

import logging
import re

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from tvagent.config.settings import settings
from tvagent.errors import InternalError
from tvagent.schemas.backtest import BacktestResult

logger = logging.getLogger(__name__)

SETTLE_MS = 1500
SCRAPE_TIMEOUT_MS = 3000
EDITOR_SELECTOR = "textarea, .monaco-editor textarea"
SUBMIT_BUTTON = re.compile(r"Add to chart|Save", re.IGNORECASE)


def _grab(page: Page, label: str) -> str | None:
    try:
        return page.locator(f"text=/{label}/i").first.text_content(timeout=SCRAPE_TIMEOUT_MS)
    except PlaywrightError:
        return None


def drive_backtest(page: Page, pine_code: str, chart_url: str, step_wait_ms: int) -> BacktestResult:
    page.goto(chart_url, wait_until="domcontentloaded")
    page.wait_for_timeout(SETTLE_MS)

    page.get_by_text("Pine Editor", exact=False).click()
    page.wait_for_timeout(SETTLE_MS)

    page.locator(EDITOR_SELECTOR).first.click()
    page.keyboard.press("Control+A")
    page.keyboard.type(pine_code, delay=1)

    page.get_by_role("button", name=SUBMIT_BUTTON).first.click()
    page.wait_for_timeout(step_wait_ms)

    page.get_by_text("Strategy Tester", exact=False).click()
    page.wait_for_timeout(step_wait_ms)

    return BacktestResult(
        net_profit=_grab(page, "Net Profit"),
        win_rate=_grab(page, "Win Rate"),
        drawdown=_grab(page, "Max Drawdown"),
    )


def run_tv_backtest(pine_code: str, chart_url: str) -> BacktestResult:
    logger.info(f"Launching Chromium for TradingView backtest at {chart_url}")
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=settings.tv_headless)
            try:
                page = browser.new_context().new_page()
                return drive_backtest(page, pine_code, chart_url, settings.tv_step_wait_ms)
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise InternalError(f"TradingView UI automation failed: {exc}") from exc

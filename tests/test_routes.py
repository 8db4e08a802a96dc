import json

from tvagent.api import routes
from tvagent.errors import ProviderError
from tvagent.schemas.candle import Candle
from tvagent.schemas.tool import ToolInvocation, ToolResponse


class FakeProvider:
    def __init__(self, name, candles=None, error=None):
        self.name = name
        self.candles = candles or []
        self.error = error

    def fetch_candles(self, symbol, interval, limit):
        if self.error is not None:
            raise self.error
        return list(self.candles)


def _body(response):
    return json.loads(response.body)


def test_health_payload():
    payload = routes.health()
    assert payload["status"] == "ok"
    assert payload["schema_version"] == "1.0"


def test_ping():
    assert routes.ping() == {"status": "ok", "message": "MCP server running"}


def test_tool_listing():
    names = [tool.name for tool in routes.list_tools().tools]
    assert "get_ohlcv" in names
    assert "tradingview_chart_url" in names


def test_run_get_ohlcv_falls_back(monkeypatch):
    monkeypatch.setattr(routes.candle_service, "primary", FakeProvider("stooq.com", error=ProviderError("stooq.com", "HTTP 500")))
    monkeypatch.setattr(
        routes.candle_service,
        "secondary",
        FakeProvider("finance.yahoo.com", [Candle(time="2024-01-02T00:00:00+00:00", open=1, high=2, low=0.5, close=1.5, volume=10)]),
    )
    response = routes.run_tool(ToolInvocation(tool="get_ohlcv", input={"symbol": "OMXS30", "limit": 10}))
    assert isinstance(response, ToolResponse)
    assert response.tool == "get_ohlcv"
    assert response.input == {"symbol": "OMXS30", "interval": "1D", "limit": 10}
    assert response.result["source"] == "fallback"
    assert len(response.result["candles"]) == 1


def test_unknown_tool_is_client_error():
    response = routes.run_tool(ToolInvocation(tool="nope"))
    assert response.status_code == 400
    body = _body(response)
    assert body["status"] == "error"
    assert body["error_code"] == "TOOL_NOT_FOUND"
    assert response.headers["x-error-code"] == "TOOL_NOT_FOUND"


def test_invalid_input_is_client_error():
    response = routes.run_tool(ToolInvocation(tool="get_ohlcv", input={"interval": "1D"}))
    assert response.status_code == 400
    body = _body(response)
    assert body["error_code"] == "INVALID_INPUT"
    assert "symbol" in body["message"]


def test_backtest_placeholder_is_unavailable():
    response = routes.run_tool(ToolInvocation(tool="tv_backtest_in_ui", input={"pine_code": "//@version=5"}))
    assert response.status_code == 501
    assert _body(response)["error_code"] == "TOOL_UNAVAILABLE"


def test_chart_url_route():
    payload = routes.chart_url(symbol="aapl", interval="1h")
    assert payload == {"url": "https://www.tradingview.com/chart/?symbol=AAPL&interval=1h"}


def test_metrics_shape():
    payload = routes.all_metrics()
    assert payload["schema_version"] == "1.0"
    assert "per_provider" in payload
    assert "fallback_count" in payload


def test_app_registers_routes():
    app = routes.create_app()
    paths = {route.path for route in app.routes}
    assert {"/mcp/ping", "/mcp/tools", "/mcp/run", "/ohlcv", "/chart-url", "/health", "/metrics"} <= paths

import logging

from fastapi.testclient import TestClient

from tvagent.api import routes


def _client():
    return TestClient(routes.create_app(), raise_server_exceptions=False)


def test_non_json_body_is_invalid_input():
    response = _client().post("/mcp/run", content="not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "INVALID_INPUT"
    assert body["message"] == "JSON decode error"


def test_missing_tool_is_invalid_input():
    response = _client().post("/mcp/run", json={"input": {}})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "INVALID_INPUT"
    assert body["message"] == "tool: Field required"


def test_null_input_is_invalid_input():
    response = _client().post("/mcp/run", json={"tool": "get_ohlcv", "input": None})
    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_INPUT"


def test_ohlcv_limit_below_minimum_is_rejected():
    response = _client().get("/ohlcv", params={"symbol": "OMXS30", "limit": 9})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "INVALID_INPUT"
    assert "limit" in body["message"]
    assert response.headers["x-error-code"] == "INVALID_INPUT"


def test_blank_chart_symbol_is_rejected():
    response = _client().get("/chart-url", params={"symbol": "  "})
    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_INPUT"


def test_unexpected_fault_is_internal_error(monkeypatch):
    def broken_metrics():
        raise RuntimeError("metrics store exploded")

    monkeypatch.setattr(routes.metrics, "global_metrics", broken_metrics)
    client = _client()
    response = client.get("/metrics")
    assert response.status_code == 500
    assert response.headers["x-error-code"] == "INTERNAL_ERROR"
    body = response.json()
    assert body["error_code"] == "INTERNAL_ERROR"
    assert body["message"] == "Unexpected server error"

    assert client.get("/health").status_code == 200


def test_request_log_names_invoked_tool(caplog):
    caplog.set_level(logging.INFO, logger="tvagent.api.routes")
    response = _client().post("/mcp/run", json={"tool": "tradingview_chart_url", "input": {"symbol": "AAPL"}})
    assert response.status_code == 200
    assert response.json()["result"]["url"].endswith("?symbol=AAPL&interval=1D")

    records = [r for r in caplog.records if r.getMessage() == "request_complete"]
    assert records
    assert records[-1].tool == "tradingview_chart_url"
    assert records[-1].path == "/mcp/run"

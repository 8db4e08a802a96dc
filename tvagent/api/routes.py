from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tvagent.config.settings import settings
from tvagent.errors import ToolError
from tvagent.internal_metrics import MetricsCollector
from tvagent.providers.stooq_adapter import StooqAdapter
from tvagent.providers.yahoo_adapter import YahooAdapter
from tvagent.schemas.tool import ErrorResponse, ToolInvocation, ToolListResponse, ToolResponse
from tvagent.services.backtest_service import BacktestService, build_backtest_runner
from tvagent.services.candle_service import CandleService
from tvagent.services.chart_service import ChartService
from tvagent.tools.catalog import build_registry

logger = logging.getLogger(__name__)
router = APIRouter()

metrics = MetricsCollector()
candle_service = CandleService(StooqAdapter(), YahooAdapter(), metrics=metrics)
chart_service = ChartService()
backtest_service = BacktestService(runner=build_backtest_runner())
registry = build_registry(candle_service, chart_service, backtest_service)


def error_response(error_code: str, message: str, status_code: int = 400):
    payload = ErrorResponse(schema_version=settings.schema_version, error_code=error_code, message=message)
    return JSONResponse(payload.model_dump(), status_code=status_code, headers={"x-error-code": error_code})


def _tool_error_response(exc: ToolError):
    return error_response(exc.error_code, exc.message, status_code=exc.status_code)


def _flatten_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # Drop the "body" prefix and byte offsets such as the one on JSON decode errors.
        loc = ".".join(str(i) for i in err.get("loc", []) if i != "body" and not isinstance(i, int))
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError):
    return error_response("INVALID_INPUT", _flatten_request_errors(exc), status_code=400)


async def tool_error_handler(_: Request, exc: ToolError):
    return _tool_error_response(exc)


async def unhandled_exception_handler(_: Request, exc: Exception):
    logger.error(f"Unhandled API exception: {exc}", exc_info=True)
    return error_response("INTERNAL_ERROR", "Unexpected server error", status_code=500)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.app_version)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        response = None
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            latency_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                "request_complete",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "tool": getattr(request.state, "tool", None),
                    "symbol": request.query_params.get("symbol", ""),
                    "latency_ms": latency_ms,
                    "status_code": response.status_code if response else None,
                    "error_code": response.headers.get("x-error-code") if response else None,
                },
            )

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ToolError, tool_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)
    return app


@router.get("/health")
def health():
    return {"schema_version": settings.schema_version, "status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/readiness")
def readiness():
    return {
        "schema_version": settings.schema_version,
        "status": "ready",
        "tools": [tool["name"] for tool in registry.list_tools()],
    }


@router.get("/metrics")
def all_metrics():
    output = metrics.global_metrics()
    output["schema_version"] = settings.schema_version
    return output


@router.get("/mcp/ping")
def ping():
    return {"status": "ok", "message": "MCP server running"}


@router.api_route("/mcp/tools", methods=["GET", "POST"], response_model=ToolListResponse)
def list_tools():
    return ToolListResponse(tools=registry.list_tools())


@router.post("/mcp/run", response_model=ToolResponse)
def run_tool(invocation: ToolInvocation, request: Request = None):
    if request is not None:
        request.state.tool = invocation.tool
    try:
        normalized, result = registry.invoke(invocation.tool, invocation.input)
    except ToolError as exc:
        logger.info(f"Tool {invocation.tool} rejected: {exc.error_code} {exc.message}")
        return _tool_error_response(exc)
    return ToolResponse(tool=invocation.tool, input=normalized, result=result)


@router.get("/ohlcv")
def ohlcv(symbol: str = Query(...), interval: str = Query("1D"), limit: int = Query(500), request: Request = None):
    response = run_tool(ToolInvocation(tool="get_ohlcv", input={"symbol": symbol, "interval": interval, "limit": limit}), request)
    if isinstance(response, ToolResponse):
        return response.result
    return response


@router.get("/chart-url")
def chart_url(symbol: str = Query(...), interval: str = Query("1D"), request: Request = None):
    response = run_tool(ToolInvocation(tool="tradingview_chart_url", input={"symbol": symbol, "interval": interval}), request)
    if isinstance(response, ToolResponse):
        return response.result
    return response

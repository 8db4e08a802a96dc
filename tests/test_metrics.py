from tvagent.internal_metrics import MetricsCollector


def test_metrics_counters_increment():
    m = MetricsCollector()
    m.record_fetch("stooq.com", status="ok", latency_ms=100)
    m.record_fetch("stooq.com", status="empty", latency_ms=50)
    m.record_fetch("stooq.com", status="failed", latency_ms=150)

    status = m.provider_status()["stooq.com"]
    assert status["total_requests"] == 3
    assert status["successful_requests"] == 1
    assert status["empty_responses"] == 1
    assert status["failed_requests"] == 1
    assert status["average_latency_ms"] == 100.0


def test_fallback_rate():
    m = MetricsCollector()
    m.record_candle_request(used_fallback=False)
    m.record_candle_request(used_fallback=True)
    output = m.global_metrics()
    assert output["request_count"] == 2
    assert output["fallback_rate"] == 0.5

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock


@dataclass
class ProviderMetrics:
    total_requests: int = 0
    successful_requests: int = 0
    empty_responses: int = 0
    failed_requests: int = 0
    latency_total_ms: float = 0.0

    def avg_latency_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.latency_total_ms / self.total_requests


class MetricsCollector:
    def __init__(self):
        self._per_provider: dict[str, ProviderMetrics] = {}
        self._candle_requests = 0
        self._fallbacks = 0
        self._started = time.time()
        self._lock = Lock()

    def _get(self, provider: str) -> ProviderMetrics:
        if provider not in self._per_provider:
            self._per_provider[provider] = ProviderMetrics()
        return self._per_provider[provider]

    def record_fetch(self, provider: str, status: str, latency_ms: float):
        with self._lock:
            m = self._get(provider)
            m.total_requests += 1
            m.latency_total_ms += max(latency_ms, 0.0)
            if status == "ok":
                m.successful_requests += 1
            elif status == "empty":
                m.empty_responses += 1
            else:
                m.failed_requests += 1

    def record_candle_request(self, used_fallback: bool):
        with self._lock:
            self._candle_requests += 1
            if used_fallback:
                self._fallbacks += 1

    def provider_status(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            out: dict[str, dict[str, float | int]] = {}
            for name, m in self._per_provider.items():
                failure_rate = 0.0 if m.total_requests == 0 else (m.failed_requests / m.total_requests)
                out[name] = {
                    "total_requests": m.total_requests,
                    "successful_requests": m.successful_requests,
                    "empty_responses": m.empty_responses,
                    "failed_requests": m.failed_requests,
                    "failure_rate": round(failure_rate, 4),
                    "average_latency_ms": round(m.avg_latency_ms(), 3),
                }
            return out

    def global_metrics(self) -> dict[str, float | int | dict]:
        per = self.provider_status()
        with self._lock:
            requests = self._candle_requests
            fallbacks = self._fallbacks
            uptime = time.time() - self._started
        return {
            "request_count": requests,
            "fallback_count": fallbacks,
            "fallback_rate": 0.0 if requests == 0 else round(fallbacks / requests, 4),
            "uptime_seconds": round(uptime, 3),
            "per_provider": per,
        }

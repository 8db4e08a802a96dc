from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from tvagent.config.settings import settings
from tvagent.errors import ProviderError
from tvagent.schemas.candle import Candle

logger = logging.getLogger(__name__)


class CandleProvider(ABC):
    name: str = "provider"

    def __init__(self, base_url: str, timeout_seconds: float | None = None):
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.request_timeout_seconds

    def _get_text(self, url: str, params: dict[str, Any]) -> str:
        query = urlencode(params)
        request = Request(f"{url}?{query}", headers={"User-Agent": settings.user_agent})
        try:
            with urlopen(request, timeout=self.timeout_seconds) as response:
                return response.read().decode("utf-8")
        except HTTPError as exc:
            raise ProviderError(self.name, f"HTTP {exc.code}") from exc
        except (URLError, TimeoutError, OSError) as exc:
            raise ProviderError(self.name, f"request failed: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ProviderError(self.name, "response is not valid UTF-8") from exc

    @abstractmethod
    def fetch_candles(self, symbol: str, interval: str, limit: int) -> list[Candle]:
        """Return at most `limit` finite candles, oldest first.

        `symbol` and `interval` are already in the provider's native form.
        Raises ProviderError on any transport or payload failure.
        """
        raise NotImplementedError

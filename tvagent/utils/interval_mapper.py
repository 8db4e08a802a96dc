from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_PRIMARY_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "1m": "1",
        "5m": "5",
        "15m": "15",
        "30m": "30",
        "1h": "60",
        "4h": "240",
        "1D": "d",
        "1W": "w",
        "1M": "m",
    }
)

# 4h has no native secondary bar and falls through to the daily token.
DEFAULT_SECONDARY_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "1m": "1m",
        "5m": "5m",
        "15m": "15m",
        "30m": "30m",
        "1h": "1h",
        "1D": "1d",
        "1W": "1wk",
        "1M": "1mo",
    }
)

# Chart ranges accepted by the secondary provider, with their length in calendar days.
_SECONDARY_RANGES = (
    ("1d", 1),
    ("5d", 5),
    ("1mo", 31),
    ("3mo", 92),
    ("6mo", 183),
    ("1y", 366),
    ("2y", 731),
    ("5y", 1827),
    ("10y", 3653),
    ("max", math.inf),
)

# Longest history the secondary provider serves per bar size.
_SECONDARY_HISTORY_CAP_DAYS = MappingProxyType(
    {"1m": 7, "5m": 60, "15m": 60, "30m": 60, "1h": 730}
)

_BAR_MINUTES = MappingProxyType(
    {"1m": 1, "5m": 5, "15m": 15, "30m": 30, "1h": 60}
)
_TRADING_MINUTES_PER_DAY = 390
_CALENDAR_DAYS_PER_BAR = MappingProxyType({"1d": 7 / 5, "1wk": 7, "1mo": 31})


@dataclass(frozen=True)
class IntervalMap:
    primary: Mapping[str, str] = field(default_factory=lambda: DEFAULT_PRIMARY_TOKENS)
    secondary: Mapping[str, str] = field(default_factory=lambda: DEFAULT_SECONDARY_TOKENS)
    primary_default: str = "d"
    secondary_default: str = "1d"

    def __post_init__(self):
        object.__setattr__(self, "primary", MappingProxyType(dict(self.primary)))
        object.__setattr__(self, "secondary", MappingProxyType(dict(self.secondary)))

    def primary_token(self, interval: str) -> str:
        return self.primary.get(interval, self.primary_default)

    def secondary_token(self, interval: str) -> str:
        return self.secondary.get(interval, self.secondary_default)


def secondary_range(token: str, limit: int) -> str:
    """Smallest secondary chart range expected to hold `limit` bars of `token`."""
    if token in _SECONDARY_HISTORY_CAP_DAYS:
        bars_per_day = _TRADING_MINUTES_PER_DAY / _BAR_MINUTES[token]
        # Weekends carry no intraday bars.
        days_needed = math.ceil(limit / bars_per_day * 7 / 5)
        cap = _SECONDARY_HISTORY_CAP_DAYS[token]
    else:
        days_needed = math.ceil(limit * _CALENDAR_DAYS_PER_BAR.get(token, 7 / 5))
        cap = math.inf

    chosen = None
    for name, days in _SECONDARY_RANGES:
        if days > cap:
            break
        chosen = name
        if days >= days_needed:
            break
    return chosen or _SECONDARY_RANGES[0][0]

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ProviderSymbols:
    primary: str
    secondary: str


DEFAULT_ALIASES: Mapping[str, ProviderSymbols] = MappingProxyType(
    {
        "OMXS30": ProviderSymbols(primary="^omxs", secondary="^OMX"),
        "OMX30": ProviderSymbols(primary="^omxs", secondary="^OMX"),
        "SPX": ProviderSymbols(primary="^spx", secondary="^GSPC"),
        "NDX": ProviderSymbols(primary="^ndx", secondary="^NDX"),
        "DJI": ProviderSymbols(primary="^dji", secondary="^DJI"),
        "DAX": ProviderSymbols(primary="^dax", secondary="^GDAXI"),
        "BTCUSD": ProviderSymbols(primary="btcusd", secondary="BTC-USD"),
        "ETHUSD": ProviderSymbols(primary="ethusd", secondary="ETH-USD"),
    }
)


@dataclass(frozen=True)
class SymbolMap:
    """Maps a user ticker to per-provider identifiers.

    Aliases are matched case-insensitively. Anything not in the table is
    lowercased for the primary provider and uppercased for the secondary.
    """

    aliases: Mapping[str, ProviderSymbols] = field(default_factory=lambda: DEFAULT_ALIASES)

    def __post_init__(self):
        frozen = {key.strip().upper(): value for key, value in self.aliases.items()}
        object.__setattr__(self, "aliases", MappingProxyType(frozen))

    def resolve(self, symbol: str) -> ProviderSymbols:
        cleaned = symbol.strip()
        alias = self.aliases.get(cleaned.upper())
        if alias is not None:
            return alias
        return ProviderSymbols(primary=cleaned.lower(), secondary=cleaned.upper())

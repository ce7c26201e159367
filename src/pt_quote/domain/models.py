"""Domain models for pt_quote: point-in-time instrument snapshots (read-only)."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Quote:
    symbol: str
    name: str
    price: Decimal
    change: Decimal
    change_percent: Decimal
    volume: str
    market_cap: str | None = None
    pe_ratio: Decimal | None = None
    dividend_yield: Decimal | None = None

"""StaticQuoteSource: fixed in-process quote table.

Stands in for a market data feed: prices only move when ``set_price`` is
called (tests, demos). Symbol lookup is exact; search is case-insensitive
over symbol and name.
"""

from dataclasses import replace
from decimal import Decimal

from src.pt_quote.domain.models import Quote

DEFAULT_QUOTES: tuple[Quote, ...] = (
    Quote("AAPL", "Apple Inc.", Decimal("178.45"), Decimal("2.34"), Decimal("1.33"), "54.2M", "2.8T", Decimal("29.5"), Decimal("0.5")),
    Quote("GOOGL", "Alphabet Inc.", Decimal("142.67"), Decimal("-1.23"), Decimal("-0.85"), "32.1M", "1.7T", Decimal("25.3"), Decimal("0")),
    Quote("MSFT", "Microsoft Corp.", Decimal("412.89"), Decimal("5.67"), Decimal("1.39"), "28.5M", "3.1T", Decimal("35.2"), Decimal("0.7")),
    Quote("TSLA", "Tesla Inc.", Decimal("248.32"), Decimal("-3.45"), Decimal("-1.37"), "92.3M", "790B", Decimal("68.1"), Decimal("0")),
    Quote("AMZN", "Amazon.com Inc.", Decimal("178.91"), Decimal("4.12"), Decimal("2.36"), "45.6M", "1.8T", Decimal("62.8"), Decimal("0")),
    Quote("NVDA", "NVIDIA Corp.", Decimal("495.22"), Decimal("8.45"), Decimal("1.74"), "67.8M", "1.2T", Decimal("72.4"), Decimal("0.05")),
    Quote("META", "Meta Platforms Inc.", Decimal("512.15"), Decimal("-2.18"), Decimal("-0.42"), "23.4M", "1.3T", Decimal("32.1"), Decimal("0")),
    Quote("NFLX", "Netflix Inc.", Decimal("623.41"), Decimal("12.34"), Decimal("2.02"), "12.7M", "270B", Decimal("35.6"), Decimal("0")),
)


class StaticQuoteSource:
    def __init__(self, quotes: tuple[Quote, ...] | list[Quote] = DEFAULT_QUOTES) -> None:
        self._quotes: dict[str, Quote] = {q.symbol: q for q in quotes}

    async def quote(self, symbol: str) -> Quote | None:
        return self._quotes.get(symbol)

    async def list_quotes(self) -> list[Quote]:
        return list(self._quotes.values())

    async def search(self, query: str) -> list[Quote]:
        needle = query.lower()
        return [
            q for q in self._quotes.values()
            if needle in q.symbol.lower() or needle in q.name.lower()
        ]

    def set_price(self, symbol: str, price: Decimal) -> None:
        self._quotes[symbol] = replace(self._quotes[symbol], price=price)

    def delist(self, symbol: str) -> None:
        self._quotes.pop(symbol, None)

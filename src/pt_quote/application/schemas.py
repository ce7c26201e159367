"""Pydantic schemas for pt_quote API."""

from decimal import Decimal

from pydantic import BaseModel

from src.pt_common.money import money_to_display
from src.pt_quote.domain.models import Quote


class QuoteItem(BaseModel):
    symbol: str
    name: str
    price: Decimal
    price_display: str
    change: Decimal
    change_percent: Decimal
    volume: str
    market_cap: str | None
    pe_ratio: Decimal | None
    dividend_yield: Decimal | None

    @classmethod
    def from_domain(cls, quote: Quote) -> "QuoteItem":
        return cls(
            symbol=quote.symbol,
            name=quote.name,
            price=quote.price,
            price_display=money_to_display(quote.price),
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            market_cap=quote.market_cap,
            pe_ratio=quote.pe_ratio,
            dividend_yield=quote.dividend_yield,
        )

"""Pydantic schemas for pt_trading API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.pt_common.datetime_utils import to_iso
from src.pt_common.enums import TradeSide
from src.pt_common.money import money_to_display
from src.pt_ledger.domain.models import Transaction


class TradeRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=16)
    side: TradeSide
    shares: int = Field(..., gt=0, description="Whole shares; market order at the current quote")


class TransactionItem(BaseModel):
    id: str
    user_id: str
    symbol: str
    side: TradeSide
    shares: int
    price: Decimal
    total: Decimal
    total_display: str
    timestamp: str  # ISO8601 string

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionItem":
        return cls(
            id=txn.id,
            user_id=txn.user_id,
            symbol=txn.symbol,
            side=txn.side,
            shares=txn.shares,
            price=txn.price,
            total=txn.total,
            total_display=money_to_display(txn.total),
            timestamp=to_iso(txn.timestamp),
        )

"""Domain model for pt_ledger: settled trades are immutable."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.pt_common.enums import TradeSide


@dataclass(frozen=True)
class Transaction:
    id: str
    user_id: str
    symbol: str
    side: TradeSide
    shares: int
    price: Decimal       # quote snapshot at settlement time
    timestamp: datetime
    total: Decimal       # shares * price

"""Pydantic schemas for pt_portfolio API."""

from decimal import Decimal

from pydantic import BaseModel

from src.pt_common.money import money_to_display
from src.pt_portfolio.application.service import AccountValue, PositionValuation


class PositionItem(BaseModel):
    symbol: str
    shares: int
    avg_purchase_price: Decimal
    total_invested: Decimal
    current_price: Decimal | None
    market_value: Decimal | None
    unrealized_gain: Decimal | None

    @classmethod
    def from_valuation(cls, valuation: PositionValuation) -> "PositionItem":
        p = valuation.position
        return cls(
            symbol=p.symbol,
            shares=p.shares,
            avg_purchase_price=p.avg_purchase_price,
            total_invested=p.total_invested,
            current_price=valuation.current_price,
            market_value=valuation.market_value,
            unrealized_gain=valuation.unrealized_gain,
        )


class AccountValueResponse(BaseModel):
    user_id: str
    cash_balance: Decimal
    cash_balance_display: str
    total_invested: Decimal
    portfolio_value: Decimal
    total_value: Decimal
    total_value_display: str

    @classmethod
    def from_domain(cls, value: AccountValue) -> "AccountValueResponse":
        return cls(
            user_id=value.user_id,
            cash_balance=value.cash_balance,
            cash_balance_display=money_to_display(value.cash_balance),
            total_invested=value.total_invested,
            portfolio_value=value.portfolio_value,
            total_value=value.total_value,
            total_value_display=money_to_display(value.total_value),
        )

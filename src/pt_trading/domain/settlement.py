"""Pure settlement arithmetic: no I/O, no locks.

Given an account snapshot and an executed price, compute the account as it
stands after the trade. Inputs are never mutated: the caller gets a new
UserAccount (and new Position objects where they changed), so a rejected
trade or a failed persist leaves the original snapshot untouched.

Accounting rules:
  buy   cash -= shares * price
        position: shares += n, invested += total, avg = invested / shares
        account.total_invested += total
  sell  cash += shares * price  (market price)
        position: shares -= n, avg unchanged, invested = avg * remaining
        account.total_invested -= n * avg  (original cost, not proceeds)
        a position that reaches zero shares is removed, never zeroed
"""

from dataclasses import replace
from decimal import Decimal

from src.pt_account.domain.models import Position, UserAccount
from src.pt_common.enums import TradeSide
from src.pt_common.errors import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    InvalidTradeSideError,
    PositionNotFoundError,
)


def validate_shares(shares: object) -> int:
    # bool is an int subclass; True is not "one share"
    if isinstance(shares, bool) or not isinstance(shares, int) or shares <= 0:
        raise InvalidQuantityError(shares)
    return shares


def validate_side(side: object) -> TradeSide:
    """Coerce "buy" / "sell" (or a TradeSide) to TradeSide; anything else is rejected."""
    try:
        return TradeSide(side)
    except ValueError:
        raise InvalidTradeSideError(side) from None


def apply_buy(account: UserAccount, symbol: str, shares: int, price: Decimal) -> UserAccount:
    total = shares * price
    if account.cash_balance < total:
        raise InsufficientFundsError(total, account.cash_balance)

    existing = account.position_for(symbol)
    if existing is not None:
        new_shares = existing.shares + shares
        new_invested = existing.total_invested + total
        updated = replace(
            existing,
            shares=new_shares,
            avg_purchase_price=new_invested / new_shares,
            total_invested=new_invested,
        )
        portfolio = [updated if p.symbol == symbol else p for p in account.portfolio]
        stocks_owned = list(account.stocks_owned)
    else:
        portfolio = [
            *account.portfolio,
            Position(symbol=symbol, shares=shares, avg_purchase_price=price, total_invested=total),
        ]
        stocks_owned = list(account.stocks_owned)
        if symbol not in stocks_owned:
            stocks_owned.append(symbol)

    return replace(
        account,
        cash_balance=account.cash_balance - total,
        total_invested=account.total_invested + total,
        portfolio=portfolio,
        stocks_owned=stocks_owned,
    )


def apply_sell(account: UserAccount, symbol: str, shares: int, price: Decimal) -> UserAccount:
    position = account.position_for(symbol)
    if position is None:
        raise PositionNotFoundError(symbol)
    if position.shares < shares:
        raise InsufficientSharesError(symbol, shares, position.shares)

    total = shares * price
    cost_basis = shares * position.avg_purchase_price
    remaining = position.shares - shares

    if remaining == 0:
        portfolio = [p for p in account.portfolio if p.symbol != symbol]
        stocks_owned = [s for s in account.stocks_owned if s != symbol]
    else:
        updated = replace(
            position,
            shares=remaining,
            total_invested=position.avg_purchase_price * remaining,
        )
        portfolio = [updated if p.symbol == symbol else p for p in account.portfolio]
        stocks_owned = list(account.stocks_owned)

    return replace(
        account,
        cash_balance=account.cash_balance + total,
        total_invested=account.total_invested - cost_basis,
        portfolio=portfolio,
        stocks_owned=stocks_owned,
    )


def apply_trade(
    account: UserAccount, symbol: str, side: TradeSide, shares: int, price: Decimal
) -> UserAccount:
    validate_shares(shares)
    side = validate_side(side)
    if side is TradeSide.BUY:
        return apply_buy(account, symbol, shares, price)
    if side is TradeSide.SELL:
        return apply_sell(account, symbol, shares, price)
    raise InvalidTradeSideError(side)

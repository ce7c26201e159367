"""PortfolioService: per-user read views.

Account value is always recomputed from live quotes; nothing here is cached
or persisted.
"""

import asyncio
from dataclasses import dataclass
from decimal import Decimal

from src.pt_account.domain.models import Position, UserAccount
from src.pt_account.domain.repository import AccountRepositoryProtocol
from src.pt_common.errors import AccountNotFoundError
from src.pt_ledger.domain.models import Transaction
from src.pt_ledger.domain.transaction_log import TransactionLog
from src.pt_quote.application.service import QuoteService


@dataclass(frozen=True)
class AccountValue:
    user_id: str
    cash_balance: Decimal
    total_invested: Decimal
    portfolio_value: Decimal
    total_value: Decimal


@dataclass(frozen=True)
class PositionValuation:
    position: Position
    current_price: Decimal | None

    @property
    def market_value(self) -> Decimal | None:
        if self.current_price is None:
            return None
        return self.position.shares * self.current_price

    @property
    def unrealized_gain(self) -> Decimal | None:
        value = self.market_value
        if value is None:
            return None
        return value - self.position.total_invested


class PortfolioService:
    def __init__(
        self,
        accounts: AccountRepositoryProtocol,
        log: TransactionLog,
        quotes: QuoteService,
    ) -> None:
        self._accounts = accounts
        self._log = log
        self._quotes = quotes

    def _require_account(self, user_id: str) -> UserAccount:
        account = self._accounts.find(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    def get_positions(self, user_id: str) -> list[Position]:
        return list(self._require_account(user_id).portfolio)

    def get_transactions(self, user_id: str) -> list[Transaction]:
        return self._log.list_for_user(user_id)

    async def get_account_value(self, user_id: str) -> AccountValue:
        """cash + sum(shares * current price) over held positions.

        A held symbol the quote source no longer lists contributes nothing.
        """
        account = self._require_account(user_id)
        quotes = await asyncio.gather(
            *(self._quotes.find(p.symbol) for p in account.portfolio)
        )
        portfolio_value = sum(
            (p.shares * q.price for p, q in zip(account.portfolio, quotes) if q is not None),
            Decimal("0"),
        )
        return AccountValue(
            user_id=account.id,
            cash_balance=account.cash_balance,
            total_invested=account.total_invested,
            portfolio_value=portfolio_value,
            total_value=account.cash_balance + portfolio_value,
        )

    async def get_position_valuations(self, user_id: str) -> list[PositionValuation]:
        """Held positions marked to the current quote (None when the quote is gone)."""
        account = self._require_account(user_id)
        quotes = await asyncio.gather(
            *(self._quotes.find(p.symbol) for p in account.portfolio)
        )
        return [
            PositionValuation(position=p, current_price=q.price if q is not None else None)
            for p, q in zip(account.portfolio, quotes)
        ]


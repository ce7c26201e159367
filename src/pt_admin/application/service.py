"""Admin application service: account management and platform-wide stats."""
from dataclasses import dataclass
from decimal import Decimal

from src.pt_account.domain.models import UserAccount
from src.pt_account.domain.repository import AccountRepositoryProtocol
from src.pt_common.enums import AccountStatus
from src.pt_ledger.domain.models import Transaction
from src.pt_ledger.domain.transaction_log import TransactionLog


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    active_users: int
    total_invested: Decimal
    total_transactions: int


class AdminService:
    def __init__(self, accounts: AccountRepositoryProtocol, log: TransactionLog) -> None:
        self._accounts = accounts
        self._log = log

    def list_users(self) -> list[UserAccount]:
        return self._accounts.list_all()

    async def set_account_status(self, user_id: str, status: AccountStatus) -> UserAccount:
        return await self._accounts.set_status(user_id, status)

    async def delete_account(self, user_id: str) -> bool:
        return await self._accounts.delete(user_id)

    def get_all_transactions(self) -> list[Transaction]:
        return self._log.list_all()

    def get_platform_stats(self) -> PlatformStats:
        accounts = self._accounts.list_all()
        return PlatformStats(
            total_users=len(accounts),
            active_users=sum(1 for a in accounts if a.status is AccountStatus.ACTIVE),
            total_invested=sum((a.total_invested for a in accounts), Decimal("0")),
            total_transactions=len(self._log),
        )

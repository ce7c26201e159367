"""Pydantic schemas for pt_admin API."""

from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from src.pt_account.domain.models import UserAccount
from src.pt_admin.application.service import PlatformStats
from src.pt_common.datetime_utils import to_iso
from src.pt_common.enums import AccountRole, AccountStatus
from src.pt_common.money import money_to_display


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    status: AccountStatus = AccountStatus.ACTIVE


class StatusUpdateRequest(BaseModel):
    status: AccountStatus


class UserSummary(BaseModel):
    """Admin view of an account. Never includes the credential hash."""

    id: str
    email: str
    name: str
    status: AccountStatus
    role: AccountRole
    last_active: str
    login_count: int
    cash_balance: Decimal
    total_invested: Decimal
    stocks_owned: list[str]

    @classmethod
    def from_domain(cls, account: UserAccount) -> "UserSummary":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            status=account.status,
            role=account.role,
            last_active=to_iso(account.last_active),
            login_count=account.login_count,
            cash_balance=account.cash_balance,
            total_invested=account.total_invested,
            stocks_owned=list(account.stocks_owned),
        )


class PlatformStatsResponse(BaseModel):
    total_users: int
    active_users: int
    total_invested: Decimal
    total_invested_display: str
    total_transactions: int

    @classmethod
    def from_domain(cls, stats: PlatformStats) -> "PlatformStatsResponse":
        return cls(
            total_users=stats.total_users,
            active_users=stats.active_users,
            total_invested=stats.total_invested,
            total_invested_display=money_to_display(stats.total_invested),
            total_transactions=stats.total_transactions,
        )

"""Domain models for pt_account: pure dataclasses, no persistence dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.pt_common.enums import AccountRole, AccountStatus


@dataclass(frozen=True)
class Position:
    symbol: str
    shares: int
    avg_purchase_price: Decimal
    total_invested: Decimal   # kept as its own field, not derived from shares * avg


@dataclass
class UserAccount:
    id: str
    email: str
    name: str
    password_hash: str
    status: AccountStatus
    last_active: datetime
    login_count: int
    cash_balance: Decimal
    total_invested: Decimal
    stocks_owned: list[str] = field(default_factory=list)
    portfolio: list[Position] = field(default_factory=list)
    role: AccountRole = AccountRole.USER

    @property
    def is_blocked(self) -> bool:
        return self.status is AccountStatus.BLOCKED

    @property
    def is_admin(self) -> bool:
        return self.role is AccountRole.ADMIN

    def position_for(self, symbol: str) -> Position | None:
        for position in self.portfolio:
            if position.symbol == symbol:
                return position
        return None


@dataclass(frozen=True)
class NewAccountProfile:
    """Caller-supplied fields for account creation."""

    email: str
    name: str
    password: str
    status: AccountStatus = AccountStatus.ACTIVE
    role: AccountRole = AccountRole.USER


def normalize_email(email: str) -> str:
    """Email identity key: surrounding whitespace dropped, compared casefolded."""
    return email.strip().casefold()

"""Persisted shape of the users blob.

The blob is a JSON array of user records with nested portfolios, camelCase
field names (``stockSymbol``, ``avgPurchasePrice``, ``cashBalance`` ...).
Money is written as decimal strings; numeric JSON values are accepted on
read so older blobs still load.

Records without a ``role`` load as plain users.

Older blobs may carry a plaintext ``password`` instead of ``passwordHash``.
Such records are hashed on load; the plaintext is never written back.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from src.pt_account.domain.models import Position, UserAccount
from src.pt_common.enums import AccountRole, AccountStatus
from src.pt_common.errors import CorruptSnapshotError
from src.pt_gateway.auth.password import DEFAULT_ROUNDS, hash_password


class PositionRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    stock_symbol: str
    shares: int
    avg_purchase_price: Decimal
    total_invested: Decimal


class UserRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    name: str
    password_hash: str | None = None
    password: str | None = Field(default=None, exclude=True)  # legacy plaintext, read-only
    status: AccountStatus
    last_active: datetime
    total_invested: Decimal
    stocks_owned: list[str] = []
    login_count: int = 0
    portfolio: list[PositionRecord] = []
    cash_balance: Decimal
    role: AccountRole = AccountRole.USER


_USERS_ADAPTER = TypeAdapter(list[UserRecord])


def _to_record(account: UserAccount) -> UserRecord:
    return UserRecord(
        id=account.id,
        email=account.email,
        name=account.name,
        password_hash=account.password_hash,
        status=account.status,
        last_active=account.last_active,
        total_invested=account.total_invested,
        stocks_owned=list(account.stocks_owned),
        login_count=account.login_count,
        portfolio=[
            PositionRecord(
                stock_symbol=p.symbol,
                shares=p.shares,
                avg_purchase_price=p.avg_purchase_price,
                total_invested=p.total_invested,
            )
            for p in account.portfolio
        ],
        cash_balance=account.cash_balance,
        role=account.role,
    )


def _from_record(record: UserRecord, key: str, hash_rounds: int) -> UserAccount:
    password_hash = record.password_hash
    if password_hash is None:
        if record.password is None:
            raise CorruptSnapshotError(key, f"user {record.id} has no credential")
        password_hash = hash_password(record.password, rounds=hash_rounds)
    return UserAccount(
        id=record.id,
        email=record.email,
        name=record.name,
        password_hash=password_hash,
        status=record.status,
        last_active=record.last_active,
        login_count=record.login_count,
        cash_balance=record.cash_balance,
        total_invested=record.total_invested,
        stocks_owned=list(record.stocks_owned),
        portfolio=[
            Position(
                symbol=p.stock_symbol,
                shares=p.shares,
                avg_purchase_price=p.avg_purchase_price,
                total_invested=p.total_invested,
            )
            for p in record.portfolio
        ],
        role=record.role,
    )


def encode_users(accounts: list[UserAccount]) -> str:
    records = [_to_record(a) for a in accounts]
    return _USERS_ADAPTER.dump_json(records, by_alias=True).decode("utf-8")


def decode_users(blob: str, key: str, hash_rounds: int = DEFAULT_ROUNDS) -> list[UserAccount]:
    try:
        records = _USERS_ADAPTER.validate_json(blob)
    except ValidationError as exc:
        raise CorruptSnapshotError(key, str(exc)) from exc
    return [_from_record(r, key, hash_rounds) for r in records]

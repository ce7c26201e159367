"""Persisted shape of the transactions blob: a JSON array in insertion order."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from src.pt_common.enums import TradeSide
from src.pt_common.errors import CorruptSnapshotError
from src.pt_ledger.domain.models import Transaction


class TransactionRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    stock_symbol: str
    type: TradeSide
    shares: int
    price: Decimal
    timestamp: datetime
    total: Decimal


_TRANSACTIONS_ADAPTER = TypeAdapter(list[TransactionRecord])


def encode_transactions(transactions: list[Transaction]) -> str:
    records = [
        TransactionRecord(
            id=t.id,
            user_id=t.user_id,
            stock_symbol=t.symbol,
            type=t.side,
            shares=t.shares,
            price=t.price,
            timestamp=t.timestamp,
            total=t.total,
        )
        for t in transactions
    ]
    return _TRANSACTIONS_ADAPTER.dump_json(records, by_alias=True).decode("utf-8")


def decode_transactions(blob: str, key: str) -> list[Transaction]:
    try:
        records = _TRANSACTIONS_ADAPTER.validate_json(blob)
    except ValidationError as exc:
        raise CorruptSnapshotError(key, str(exc)) from exc
    return [
        Transaction(
            id=r.id,
            user_id=r.user_id,
            symbol=r.stock_symbol,
            side=r.type,
            shares=r.shares,
            price=r.price,
            timestamp=r.timestamp,
            total=r.total,
        )
        for r in records
    ]

"""Global enums: values match the persisted ledger snapshot exactly."""

from enum import Enum


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BLOCKED = "blocked"


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"
    SQL = "sql"


class AccountRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

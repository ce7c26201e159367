"""Shared test fixtures."""

import os

# Settings() requires JWT_SECRET at import time
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-prod")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from src.bootstrap import TradingPlatform  # noqa: E402
from src.pt_account.domain.models import NewAccountProfile, UserAccount  # noqa: E402
from src.pt_quote.infrastructure.static_source import StaticQuoteSource  # noqa: E402
from src.pt_storage.infrastructure.memory_store import MemoryBlobStore  # noqa: E402

USERS_KEY = "mockUsers"
TXNS_KEY = "mockTransactions"


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def quotes() -> StaticQuoteSource:
    return StaticQuoteSource()


@pytest.fixture
async def platform(store: MemoryBlobStore, quotes: StaticQuoteSource) -> TradingPlatform:
    """Started platform over an empty in-memory store and the default quote table."""
    p = TradingPlatform(
        store=store,
        quote_source=quotes,
        users_blob_key=USERS_KEY,
        transactions_blob_key=TXNS_KEY,
        starting_balance=Decimal("100000"),
        hash_rounds=4,
    )
    await p.start()
    return p


@pytest.fixture
async def alice(platform: TradingPlatform) -> UserAccount:
    return await platform.create_account(
        NewAccountProfile(email="alice@example.com", name="Alice", password="secret1")
    )

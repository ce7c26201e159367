"""Unit tests for TradeSettlementEngine over an in-memory ledger store."""

import asyncio
from decimal import Decimal

import pytest

from src.bootstrap import TradingPlatform
from src.pt_account.domain.models import NewAccountProfile, UserAccount
from src.pt_common.enums import TradeSide
from src.pt_common.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    InvalidTradeSideError,
    PositionNotFoundError,
    QuoteUnavailableError,
    StorageError,
    UnknownInstrumentError,
)
from src.pt_quote.domain.models import Quote
from src.pt_quote.infrastructure.static_source import StaticQuoteSource
from src.pt_storage.infrastructure.memory_store import MemoryBlobStore


class _FailingWritesStore(MemoryBlobStore):
    """Reads succeed; every write blows up once ``fail`` is switched on."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    async def set_many(self, blobs: dict[str, str]) -> None:
        if self.fail:
            raise ConnectionError("store unavailable")
        await super().set_many(blobs)


class _SlowQuoteSource(StaticQuoteSource):
    async def quote(self, symbol: str) -> Quote | None:
        await asyncio.sleep(1)
        return await super().quote(symbol)


class TestScenario:
    async def test_buy_buy_sell_round_trip(
        self, platform: TradingPlatform, alice: UserAccount
    ) -> None:
        txn = await platform.settle_trade(alice.id, "AAPL", TradeSide.BUY, 10)
        acct = platform.accounts.find(alice.id)
        assert acct is not None
        assert txn.total == Decimal("1784.50")
        assert acct.cash_balance == Decimal("98215.50")
        assert acct.total_invested == Decimal("1784.50")
        pos = acct.position_for("AAPL")
        assert pos is not None
        assert (pos.shares, pos.avg_purchase_price, pos.total_invested) == (
            10, Decimal("178.45"), Decimal("1784.50")
        )

        await platform.settle_trade(alice.id, "AAPL", TradeSide.BUY, 5)
        acct = platform.accounts.find(alice.id)
        pos = acct.position_for("AAPL")  # type: ignore[union-attr]
        assert pos is not None
        assert pos.shares == 15
        assert pos.avg_purchase_price == Decimal("178.45")
        assert pos.total_invested == Decimal("2676.75")

        await platform.settle_trade(alice.id, "AAPL", TradeSide.SELL, 15)
        acct = platform.accounts.find(alice.id)
        assert acct is not None
        assert acct.cash_balance == Decimal("100000.00")
        assert acct.position_for("AAPL") is None
        assert acct.stocks_owned == []
        assert acct.total_invested == 0

    async def test_weighted_average_across_price_change(
        self, platform: TradingPlatform, alice: UserAccount, quotes: StaticQuoteSource
    ) -> None:
        await platform.settle_trade(alice.id, "TSLA", TradeSide.BUY, 3)
        quotes.set_price("TSLA", Decimal("251.10"))
        await platform.settle_trade(alice.id, "TSLA", TradeSide.BUY, 4)

        pos = platform.get_positions(alice.id)[0]
        expected = (3 * Decimal("248.32") + 4 * Decimal("251.10")) / 7
        assert pos.avg_purchase_price == expected

    async def test_sell_credits_market_price(
        self, platform: TradingPlatform, alice: UserAccount, quotes: StaticQuoteSource
    ) -> None:
        await platform.settle_trade(alice.id, "NFLX", TradeSide.BUY, 2)
        cash_before = platform.accounts.find(alice.id).cash_balance  # type: ignore[union-attr]
        quotes.set_price("NFLX", Decimal("700.00"))

        txn = await platform.settle_trade(alice.id, "NFLX", TradeSide.SELL, 1)

        acct = platform.accounts.find(alice.id)
        assert acct is not None
        assert txn.price == Decimal("700.00")
        assert acct.cash_balance == cash_before + Decimal("700.00")
        pos = acct.position_for("NFLX")
        assert pos is not None
        assert pos.avg_purchase_price == Decimal("623.41")


class TestTransactionLog:
    async def test_each_settlement_appends_exactly_one(
        self, platform: TradingPlatform, alice: UserAccount
    ) -> None:
        t1 = await platform.settle_trade(alice.id, "AAPL", TradeSide.BUY, 2)
        t2 = await platform.settle_trade(alice.id, "AAPL", TradeSide.SELL, 1)

        assert platform.get_transactions(alice.id) == [t1, t2]
        assert t1.total == 2 * t1.price
        assert t2.side is TradeSide.SELL
        assert t1.id != t2.id

    async def test_both_blobs_persisted(
        self, platform: TradingPlatform, alice: UserAccount, store: MemoryBlobStore
    ) -> None:
        await platform.settle_trade(alice.id, "GOOGL", TradeSide.BUY, 1)
        blobs = store.dump()
        assert '"stockSymbol":"GOOGL"' in blobs["mockUsers"]
        assert '"stockSymbol":"GOOGL"' in blobs["mockTransactions"]


class TestRejectedTradesLeaveStateUnchanged:
    @pytest.mark.parametrize(
        ("symbol", "side", "shares", "error"),
        [
            ("AAPL", TradeSide.BUY, 10_000, InsufficientFundsError),
            ("AAPL", TradeSide.SELL, 1, PositionNotFoundError),
            ("MSFT", TradeSide.SELL, 3, InsufficientSharesError),
            ("ZZZZ", TradeSide.BUY, 1, UnknownInstrumentError),
            ("MSFT", TradeSide.BUY, 0, InvalidQuantityError),
            ("MSFT", "short", 1, InvalidTradeSideError),
        ],
    )
    async def test_rejection_is_side_effect_free(
        self,
        platform: TradingPlatform,
        alice: UserAccount,
        store: MemoryBlobStore,
        symbol: str,
        side: TradeSide,
        shares: int,
        error: type[Exception],
    ) -> None:
        await platform.settle_trade(alice.id, "MSFT", TradeSide.BUY, 2)
        account_before = platform.accounts.find(alice.id)
        blobs_before = store.dump()
        log_before = platform.get_all_transactions()

        with pytest.raises(error):
            await platform.settle_trade(alice.id, symbol, side, shares)

        assert platform.accounts.find(alice.id) == account_before
        assert store.dump() == blobs_before
        assert platform.get_all_transactions() == log_before

    async def test_unknown_account(self, platform: TradingPlatform) -> None:
        with pytest.raises(AccountNotFoundError):
            await platform.settle_trade("user_missing", "AAPL", TradeSide.BUY, 1)
        assert platform.get_all_transactions() == []


class TestSideCoercion:
    async def test_plain_string_sides_settle_as_named(
        self, platform: TradingPlatform, alice: UserAccount, store: MemoryBlobStore
    ) -> None:
        await platform.settle_trade(alice.id, "AAPL", TradeSide.BUY, 10)

        bought = await platform.settle_trade(alice.id, "AAPL", "buy", 5)
        sold = await platform.settle_trade(alice.id, "AAPL", "sell", 3)

        assert bought.side is TradeSide.BUY
        assert sold.side is TradeSide.SELL
        assert platform.get_positions(alice.id)[0].shares == 12
        assert [t.side for t in platform.get_transactions(alice.id)] == [
            TradeSide.BUY, TradeSide.BUY, TradeSide.SELL
        ]
        assert '"type":"buy"' in store.dump()["mockTransactions"]


class TestInfrastructureFailures:
    async def test_write_failure_raises_storage_error_and_keeps_memory(
        self, quotes: StaticQuoteSource
    ) -> None:
        store = _FailingWritesStore()
        platform = TradingPlatform(store=store, quote_source=quotes, hash_rounds=4)
        await platform.start()

        bob = await platform.create_account(
            NewAccountProfile(email="bob@example.com", name="Bob", password="secret1")
        )
        store.fail = True

        with pytest.raises(StorageError) as exc_info:
            await platform.settle_trade(bob.id, "AAPL", TradeSide.BUY, 1)

        assert exc_info.value.http_status == 503
        assert platform.accounts.find(bob.id).cash_balance == Decimal("100000")  # type: ignore[union-attr]
        assert platform.get_all_transactions() == []

    async def test_slow_quote_source_times_out(self) -> None:
        platform = TradingPlatform(
            store=MemoryBlobStore(),
            quote_source=_SlowQuoteSource(),
            quote_timeout_seconds=0.01,
            hash_rounds=4,
        )
        await platform.start()

        bob = await platform.create_account(
            NewAccountProfile(email="bob@example.com", name="Bob", password="secret1")
        )

        with pytest.raises(QuoteUnavailableError):
            await platform.settle_trade(bob.id, "AAPL", TradeSide.BUY, 1)
        assert platform.get_all_transactions() == []


class TestConcurrency:
    async def test_concurrent_buys_never_overdraw(
        self, platform: TradingPlatform, alice: UserAccount
    ) -> None:
        # 100000 / 623.41 -> at most 160 single-share NFLX buys fit
        results = await asyncio.gather(
            *(platform.settle_trade(alice.id, "NFLX", TradeSide.BUY, 1) for _ in range(200)),
            return_exceptions=True,
        )
        settled = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientFundsError)]

        acct = platform.accounts.find(alice.id)
        assert acct is not None
        assert len(settled) == 160
        assert len(rejected) == 40
        assert acct.cash_balance >= 0
        assert acct.cash_balance == Decimal("100000") - 160 * Decimal("623.41")
        assert acct.position_for("NFLX").shares == 160  # type: ignore[union-attr]
        assert len(platform.get_transactions(alice.id)) == 160

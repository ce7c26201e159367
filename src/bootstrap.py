"""TradingPlatform: composition root for the ledger.

Built once per process (FastAPI lifespan, or directly in tests). Owns the
store, the account repository, the transaction log, the quote service and
the settlement engine; no ledger state lives at module level.
"""

import logging
from decimal import Decimal

from config.settings import Settings
from src.pt_account.domain.models import NewAccountProfile, Position, UserAccount
from src.pt_account.infrastructure.repository import AccountRepository
from src.pt_admin.application.service import AdminService, PlatformStats
from src.pt_common.enums import AccountRole, AccountStatus, TradeSide
from src.pt_gateway.auth.password import DEFAULT_ROUNDS
from src.pt_gateway.user.service import UserService
from src.pt_ledger.domain.models import Transaction
from src.pt_ledger.domain.transaction_log import TransactionLog
from src.pt_portfolio.application.service import AccountValue, PortfolioService
from src.pt_quote.application.service import QuoteService
from src.pt_quote.domain.source import QuoteSource
from src.pt_quote.infrastructure.static_source import StaticQuoteSource
from src.pt_storage.application.snapshot_writer import SnapshotWriter
from src.pt_storage.domain.store import BlobStore
from src.pt_storage.infrastructure.factory import build_blob_store
from src.pt_trading.application.service import TradeSettlementEngine

logger = logging.getLogger(__name__)


class TradingPlatform:
    def __init__(
        self,
        store: BlobStore,
        quote_source: QuoteSource,
        users_blob_key: str = "mockUsers",
        transactions_blob_key: str = "mockTransactions",
        starting_balance: Decimal = Decimal("100000"),
        storage_timeout_seconds: float = 5.0,
        quote_timeout_seconds: float = 2.0,
        hash_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self.writer = SnapshotWriter(store, timeout_seconds=storage_timeout_seconds)
        self.accounts = AccountRepository(
            self.writer,
            users_blob_key,
            starting_balance=starting_balance,
            hash_rounds=hash_rounds,
        )
        self.log = TransactionLog(self.writer, transactions_blob_key)
        self.quotes = QuoteService(quote_source, timeout_seconds=quote_timeout_seconds)
        self.engine = TradeSettlementEngine(
            self.accounts, self.log, self.quotes, self.writer, users_blob_key
        )
        self.users = UserService(self.accounts)
        self.portfolio = PortfolioService(self.accounts, self.log, self.quotes)
        self.admin = AdminService(self.accounts, self.log)

    async def start(self, admin_email: str | None = None, admin_password: str | None = None) -> None:
        """Hydrate from the store; seed the admin account when configured and absent.

        ``admin_email`` is reserved even without a password: only the seed may
        take it. The seeded account always gets a fresh id.
        """
        await self.accounts.load()
        await self.log.load()
        if not admin_email:
            return
        self.accounts.reserve_email(admin_email)

        existing = self.accounts.find_by_email(admin_email)
        if existing is not None:
            if not existing.is_admin:
                logger.warning(
                    "Account %s holds the admin email but not the admin role; not promoting",
                    existing.id,
                )
            return
        if admin_password:
            account = await self.accounts.create(
                NewAccountProfile(
                    email=admin_email,
                    name="Admin",
                    password=admin_password,
                    role=AccountRole.ADMIN,
                )
            )
            logger.info("Seeded admin account: id=%s email=%s", account.id, admin_email)

    async def close(self) -> None:
        await self.writer.close()

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    async def create_account(self, profile: NewAccountProfile) -> UserAccount:
        return await self.accounts.create(profile)

    async def authenticate(self, email: str, credential: str) -> UserAccount | None:
        return await self.accounts.authenticate(email, credential)

    async def set_account_status(self, user_id: str, status: AccountStatus) -> UserAccount:
        return await self.admin.set_account_status(user_id, status)

    async def delete_account(self, user_id: str) -> bool:
        return await self.admin.delete_account(user_id)

    async def settle_trade(
        self, user_id: str, symbol: str, side: TradeSide | str, shares: int
    ) -> Transaction:
        return await self.engine.settle(user_id, symbol, side, shares)

    def get_positions(self, user_id: str) -> list[Position]:
        return self.portfolio.get_positions(user_id)

    def get_transactions(self, user_id: str) -> list[Transaction]:
        return self.portfolio.get_transactions(user_id)

    def get_all_transactions(self) -> list[Transaction]:
        return self.admin.get_all_transactions()

    async def get_account_value(self, user_id: str) -> AccountValue:
        return await self.portfolio.get_account_value(user_id)

    def get_platform_stats(self) -> PlatformStats:
        return self.admin.get_platform_stats()


def build_platform(settings: Settings) -> TradingPlatform:
    return TradingPlatform(
        store=build_blob_store(settings),
        quote_source=StaticQuoteSource(),
        users_blob_key=settings.USERS_BLOB_KEY,
        transactions_blob_key=settings.TRANSACTIONS_BLOB_KEY,
        starting_balance=settings.STARTING_CASH_BALANCE,
        storage_timeout_seconds=settings.STORAGE_TIMEOUT_SECONDS,
        quote_timeout_seconds=settings.QUOTE_TIMEOUT_SECONDS,
        hash_rounds=settings.BCRYPT_ROUNDS,
    )

"""TradeSettlementEngine: validates and applies market orders.

One settlement, under the ledger lock:
  1. coerce the side (InvalidTradeSideError), validate the share count and
     resolve the account (AccountNotFoundError)
  2. resolve the quote (UnknownInstrumentError / QuoteUnavailableError)
  3. compute the post-trade account on a copy (validation errors raise here)
  4. build the Transaction
  5. write the users blob and the transactions blob in ONE atomic set_many
  6. install the new account and the transaction in memory

Nothing is installed until step 5 succeeds, so a validation or persistence failure
leaves both the account and the log exactly as they were, in memory and in
the store.
"""

import logging

from src.pt_account.domain.repository import AccountRepositoryProtocol
from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import TradeSide
from src.pt_common.errors import AccountNotFoundError, AppError
from src.pt_common.id_generator import generate_transaction_id
from src.pt_ledger.domain.models import Transaction
from src.pt_ledger.domain.transaction_log import TransactionLog
from src.pt_quote.application.service import QuoteService
from src.pt_storage.application.snapshot_writer import SnapshotWriter
from src.pt_trading.domain.settlement import apply_trade, validate_shares, validate_side

logger = logging.getLogger(__name__)


class TradeSettlementEngine:
    def __init__(
        self,
        accounts: AccountRepositoryProtocol,
        log: TransactionLog,
        quotes: QuoteService,
        writer: SnapshotWriter,
        users_blob_key: str,
    ) -> None:
        self._accounts = accounts
        self._log = log
        self._quotes = quotes
        self._writer = writer
        self._users_key = users_blob_key

    async def settle(
        self, user_id: str, symbol: str, side: TradeSide | str, shares: int
    ) -> Transaction:
        try:
            side = validate_side(side)
            async with self._writer.lock:
                transaction = await self._settle_locked(user_id, symbol, side, shares)
        except AppError as exc:
            logger.info(
                "Trade rejected: user=%s %s %s x%s code=%d reason=%s",
                user_id, getattr(side, "value", repr(side)), symbol, shares, exc.code, exc.message,
            )
            raise

        logger.info(
            "Trade settled: id=%s user=%s %s %s x%d @ %s total=%s",
            transaction.id, user_id, transaction.side.value, symbol,
            shares, transaction.price, transaction.total,
        )
        return transaction

    async def _settle_locked(
        self, user_id: str, symbol: str, side: TradeSide, shares: int
    ) -> Transaction:
        validate_shares(shares)
        account = self._accounts.find(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)

        quote = await self._quotes.require(symbol)
        price = quote.price
        updated = apply_trade(account, symbol, side, shares, price)

        transaction = Transaction(
            id=generate_transaction_id(),
            user_id=user_id,
            symbol=symbol,
            side=side,
            shares=shares,
            price=price,
            timestamp=utc_now(),
            total=shares * price,
        )

        await self._writer.write(
            {
                self._users_key: self._accounts.encode_with(updated),
                self._log.blob_key: self._log.encode_with(transaction),
            }
        )
        self._accounts.install(updated)
        self._log.install(transaction)
        return transaction

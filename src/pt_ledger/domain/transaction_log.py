"""TransactionLog: append-only record of every settled trade.

Ordered by insertion only. There is deliberately no update or delete: a
correction is a new offsetting transaction. The log is independent of the
account set; deleting an account leaves its history in place.

Two-phase append for settlement: ``encode_with(txn)`` renders the blob that
would result, the caller persists it (together with the account snapshot),
then ``install(txn)`` makes it visible in memory.
"""

import logging

from src.pt_ledger.domain.models import Transaction
from src.pt_ledger.infrastructure.records import decode_transactions, encode_transactions
from src.pt_storage.application.snapshot_writer import SnapshotWriter

logger = logging.getLogger(__name__)


class TransactionLog:
    def __init__(self, writer: SnapshotWriter, blob_key: str) -> None:
        self._writer = writer
        self.blob_key = blob_key
        self._entries: list[Transaction] = []

    async def load(self) -> None:
        blob = await self._writer.read(self.blob_key)
        self._entries = decode_transactions(blob, self.blob_key) if blob else []
        logger.info("Transaction log loaded: %d entries", len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def list_for_user(self, user_id: str) -> list[Transaction]:
        return [t for t in self._entries if t.user_id == user_id]

    def list_all(self) -> list[Transaction]:
        return list(self._entries)

    def encode_with(self, transaction: Transaction) -> str:
        return encode_transactions([*self._entries, transaction])

    def install(self, transaction: Transaction) -> None:
        self._entries.append(transaction)

    async def append(self, transaction: Transaction) -> Transaction:
        """Persist and install one transaction on its own."""
        async with self._writer.lock:
            await self._writer.write({self.blob_key: self.encode_with(transaction)})
            self.install(transaction)
        return transaction

"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Holds every user record in memory, hydrated once from the ledger store by
``load()``. Each mutation builds the new record set, rewrites the full users
blob through the SnapshotWriter and only then swaps the in-memory state, so a
failed write leaves the repository exactly as it was.

All mutations run under the writer's lock.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from src.pt_account.domain.models import NewAccountProfile, UserAccount, normalize_email
from src.pt_account.infrastructure.records import decode_users, encode_users
from src.pt_common.datetime_utils import utc_now
from src.pt_common.enums import AccountRole, AccountStatus
from src.pt_common.errors import AccountNotFoundError, EmailExistsError, ReservedEmailError
from src.pt_common.id_generator import generate_user_id
from src.pt_gateway.auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from src.pt_storage.application.snapshot_writer import SnapshotWriter

logger = logging.getLogger(__name__)


class AccountRepository:
    def __init__(
        self,
        writer: SnapshotWriter,
        blob_key: str,
        starting_balance: Decimal = Decimal("100000"),
        hash_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._writer = writer
        self.blob_key = blob_key
        self._starting_balance = starting_balance
        self._hash_rounds = hash_rounds
        self._accounts: dict[str, UserAccount] = {}
        self._reserved_emails: set[str] = set()
        # Compared against when the email is unknown so both failure paths cost one bcrypt check
        self._dummy_hash = hash_password("not-a-real-password", rounds=hash_rounds)

    def reserve_email(self, email: str) -> None:
        """Only an ADMIN-role profile may take ``email`` from now on."""
        self._reserved_emails.add(normalize_email(email))

    async def load(self) -> None:
        blob = await self._writer.read(self.blob_key)
        accounts = decode_users(blob, self.blob_key, self._hash_rounds) if blob else []
        self._accounts = {a.id: a for a in accounts}
        logger.info("Account repository loaded: %d accounts", len(self._accounts))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find(self, user_id: str) -> UserAccount | None:
        return self._accounts.get(user_id)

    def find_by_email(self, email: str) -> UserAccount | None:
        wanted = normalize_email(email)
        for account in self._accounts.values():
            if normalize_email(account.email) == wanted:
                return account
        return None

    def list_all(self) -> list[UserAccount]:
        return list(self._accounts.values())

    # ------------------------------------------------------------------
    # Two-phase write used by settlement
    # ------------------------------------------------------------------

    def encode_with(self, account: UserAccount) -> str:
        """Users blob as it would look with ``account`` inserted or replaced."""
        updated = dict(self._accounts)
        updated[account.id] = account
        return encode_users(list(updated.values()))

    def install(self, account: UserAccount) -> None:
        self._accounts[account.id] = account

    async def _persist(self, accounts: dict[str, UserAccount]) -> None:
        await self._writer.write({self.blob_key: encode_users(list(accounts.values()))})
        self._accounts = accounts

    # ------------------------------------------------------------------
    # Account management
    # ------------------------------------------------------------------

    async def create(self, profile: NewAccountProfile) -> UserAccount:
        if (
            profile.role is not AccountRole.ADMIN
            and normalize_email(profile.email) in self._reserved_emails
        ):
            raise ReservedEmailError()
        password_hash = hash_password(profile.password, rounds=self._hash_rounds)
        async with self._writer.lock:
            if self.find_by_email(profile.email) is not None:
                raise EmailExistsError()
            account = UserAccount(
                id=generate_user_id(),
                email=profile.email.strip(),
                name=profile.name,
                password_hash=password_hash,
                status=profile.status,
                last_active=utc_now(),
                login_count=0,
                cash_balance=self._starting_balance,
                total_invested=Decimal("0"),
                stocks_owned=[],
                portfolio=[],
                role=profile.role,
            )
            await self._persist({**self._accounts, account.id: account})
        logger.info("Account created: id=%s role=%s", account.id, account.role.value)
        return account

    async def set_status(self, user_id: str, status: AccountStatus) -> UserAccount:
        async with self._writer.lock:
            current = self._accounts.get(user_id)
            if current is None:
                raise AccountNotFoundError(user_id)
            updated = replace(current, status=status)
            await self._persist({**self._accounts, user_id: updated})
        logger.info("Account status changed: id=%s status=%s", user_id, status.value)
        return updated

    async def delete(self, user_id: str) -> bool:
        async with self._writer.lock:
            remaining = {k: v for k, v in self._accounts.items() if k != user_id}
            removed = len(remaining) < len(self._accounts)
            await self._persist(remaining)
        if removed:
            logger.info("Account deleted: id=%s", user_id)
        return removed

    async def authenticate(self, email: str, credential: str) -> UserAccount | None:
        """Return the account when ``credential`` matches, else None.

        Unknown email and wrong credential are indistinguishable to the caller.
        A successful check bumps ``login_count`` and ``last_active``.
        """
        candidate = self.find_by_email(email)
        if candidate is None:
            verify_password(credential, self._dummy_hash)
            return None
        if not verify_password(credential, candidate.password_hash):
            return None

        async with self._writer.lock:
            # Re-read under the lock; the account may have changed or gone meanwhile
            current = self._accounts.get(candidate.id)
            if current is None:
                return None
            updated = replace(
                current,
                login_count=current.login_count + 1,
                last_active=utc_now(),
            )
            await self._persist({**self._accounts, updated.id: updated})
        return updated

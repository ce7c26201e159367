"""Repository Protocol: dependency inversion for testability.

Unit tests inject a fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from src.pt_account.domain.models import NewAccountProfile, UserAccount
from src.pt_common.enums import AccountStatus


class AccountRepositoryProtocol(Protocol):
    def find(self, user_id: str) -> UserAccount | None: ...

    def find_by_email(self, email: str) -> UserAccount | None: ...

    def list_all(self) -> list[UserAccount]: ...

    def reserve_email(self, email: str) -> None: ...

    async def create(self, profile: NewAccountProfile) -> UserAccount: ...

    async def set_status(self, user_id: str, status: AccountStatus) -> UserAccount: ...

    async def delete(self, user_id: str) -> bool: ...

    async def authenticate(self, email: str, credential: str) -> UserAccount | None: ...

    def encode_with(self, account: UserAccount) -> str: ...

    def install(self, account: UserAccount) -> None: ...

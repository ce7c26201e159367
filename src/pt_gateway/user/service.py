"""User service: register and login on top of the account repository."""

from src.pt_account.domain.models import NewAccountProfile, UserAccount
from src.pt_account.domain.repository import AccountRepositoryProtocol
from src.pt_common.errors import AccountDisabledError, InvalidCredentialsError
from src.pt_gateway.auth.jwt_handler import create_access_token


class UserService:
    def __init__(self, accounts: AccountRepositoryProtocol) -> None:
        self._accounts = accounts

    async def register(self, email: str, name: str, password: str) -> UserAccount:
        """Create a plain user account with the starting cash balance.

        EmailExistsError on duplicates; ReservedEmailError for the configured admin email.
        """
        return await self._accounts.create(
            NewAccountProfile(email=email, name=name, password=password)
        )

    async def login(self, email: str, password: str) -> tuple[UserAccount, str]:
        """Authenticate and return (account, access_token).

        Note: "unknown email" and "wrong password" both raise InvalidCredentialsError
        intentionally to prevent account enumeration.
        """
        account = await self._accounts.authenticate(email, password)
        if account is None:
            raise InvalidCredentialsError()
        if account.is_blocked:
            raise AccountDisabledError()
        return account, create_access_token(account.id)

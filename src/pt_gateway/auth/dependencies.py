"""FastAPI dependencies: get_platform, get_current_user, require_admin.

Usage in any protected router:
    from src.pt_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: UserAccount = Depends(get_current_user)):
        ...
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from src.bootstrap import TradingPlatform
from src.pt_account.domain.models import UserAccount
from src.pt_common.errors import AccountDisabledError, AdminRequiredError, InvalidCredentialsError
from src.pt_gateway.auth.jwt_handler import decode_access_token

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_platform(request: Request) -> TradingPlatform:
    """The TradingPlatform built by the app lifespan."""
    return request.app.state.platform


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    platform: TradingPlatform = Depends(get_platform),
) -> UserAccount:
    """Extract and validate the Bearer token, return the live UserAccount.

    Raises HTTP 401 if the token is missing, invalid, expired, or its account is gone.
    Raises AccountDisabledError (403) if the account has been blocked.
    """
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    account = platform.accounts.find(payload["sub"])
    if account is None:
        raise _CREDENTIALS_EXCEPTION

    if account.is_blocked:
        raise AccountDisabledError()

    return account


async def require_admin(
    current_user: UserAccount = Depends(get_current_user),
) -> UserAccount:
    """Verify the caller holds the admin role (granted only to the seeded account)."""
    if not current_user.is_admin:
        raise AdminRequiredError()
    return current_user

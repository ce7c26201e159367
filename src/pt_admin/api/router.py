"""pt_admin REST API: administrator-only account management and stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from src.bootstrap import TradingPlatform
from src.pt_account.domain.models import NewAccountProfile, UserAccount
from src.pt_admin.application.schemas import (
    CreateUserRequest,
    PlatformStatsResponse,
    StatusUpdateRequest,
    UserSummary,
)
from src.pt_common.response import ApiResponse, success_response
from src.pt_gateway.auth.dependencies import get_platform, require_admin
from src.pt_trading.application.schemas import TransactionItem

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users")
async def list_users(
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    data = [UserSummary.from_domain(a).model_dump(mode="json") for a in platform.admin.list_users()]
    return success_response(data, request)


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest,
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    account = await platform.create_account(
        NewAccountProfile(
            email=body.email, name=body.name, password=body.password, status=body.status
        )
    )
    return success_response(UserSummary.from_domain(account).model_dump(mode="json"), request)


@router.patch("/users/{user_id}/status")
async def set_user_status(
    user_id: str,
    body: StatusUpdateRequest,
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    account = await platform.set_account_status(user_id, body.status)
    return success_response(UserSummary.from_domain(account).model_dump(mode="json"), request)


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    removed = await platform.delete_account(user_id)
    return success_response({"user_id": user_id, "deleted": removed}, request)


@router.get("/stats")
async def get_stats(
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    stats = platform.get_platform_stats()
    return success_response(PlatformStatsResponse.from_domain(stats).model_dump(mode="json"), request)


@router.get("/transactions")
async def list_all_transactions(
    admin: Annotated[UserAccount, Depends(require_admin)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    data = [TransactionItem.from_domain(t).model_dump(mode="json") for t in platform.get_all_transactions()]
    return success_response(data, request)

"""pt_portfolio REST API: 3 endpoints, all require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.bootstrap import TradingPlatform
from src.pt_account.domain.models import UserAccount
from src.pt_common.response import ApiResponse, success_response
from src.pt_gateway.auth.dependencies import get_current_user, get_platform
from src.pt_portfolio.application.schemas import AccountValueResponse, PositionItem
from src.pt_trading.application.schemas import TransactionItem

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/positions")
async def get_positions(
    current_user: Annotated[UserAccount, Depends(get_current_user)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    valuations = await platform.portfolio.get_position_valuations(current_user.id)
    data = [PositionItem.from_valuation(v).model_dump(mode="json") for v in valuations]
    return success_response(data, request)


@router.get("/transactions")
async def get_transactions(
    current_user: Annotated[UserAccount, Depends(get_current_user)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    txns = platform.get_transactions(current_user.id)
    data = [TransactionItem.from_domain(t).model_dump(mode="json") for t in txns]
    return success_response(data, request)


@router.get("/value")
async def get_account_value(
    current_user: Annotated[UserAccount, Depends(get_current_user)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    value = await platform.get_account_value(current_user.id)
    return success_response(AccountValueResponse.from_domain(value).model_dump(mode="json"), request)

"""pt_trading REST API: market order settlement for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.bootstrap import TradingPlatform
from src.pt_account.domain.models import UserAccount
from src.pt_common.enums import TradeSide
from src.pt_common.response import ApiResponse, success_response
from src.pt_gateway.auth.dependencies import get_current_user, get_platform
from src.pt_trading.application.schemas import TradeRequest, TransactionItem

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("")
async def settle_trade(
    body: TradeRequest,
    current_user: Annotated[UserAccount, Depends(get_current_user)],
    platform: Annotated[TradingPlatform, Depends(get_platform)],
    request: Request,
) -> ApiResponse:
    txn = await platform.settle_trade(current_user.id, body.symbol, body.side, body.shares)
    verb = "Bought" if txn.side is TradeSide.BUY else "Sold"
    data = TransactionItem.from_domain(txn)
    return success_response(
        data.model_dump(mode="json"),
        request,
        message=f"{verb} {txn.shares} shares of {txn.symbol} for {data.total_display}",
    )

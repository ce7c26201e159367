"""pt_quote REST API: public, read-only."""

from fastapi import APIRouter, Depends, Query, Request

from src.bootstrap import TradingPlatform
from src.pt_common.response import ApiResponse, success_response
from src.pt_gateway.auth.dependencies import get_platform
from src.pt_quote.application.schemas import QuoteItem

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("")
async def list_quotes(
    request: Request,
    platform: TradingPlatform = Depends(get_platform),
) -> ApiResponse:
    quotes = await platform.quotes.list_quotes()
    data = [QuoteItem.from_domain(q).model_dump(mode="json") for q in quotes]
    return success_response(data, request)


@router.get("/search")
async def search_quotes(
    request: Request,
    q: str = Query(..., min_length=1, description="Symbol or name fragment"),
    platform: TradingPlatform = Depends(get_platform),
) -> ApiResponse:
    quotes = await platform.quotes.search(q)
    data = [QuoteItem.from_domain(item).model_dump(mode="json") for item in quotes]
    return success_response(data, request)


@router.get("/{symbol}")
async def get_quote(
    symbol: str,
    request: Request,
    platform: TradingPlatform = Depends(get_platform),
) -> ApiResponse:
    quote = await platform.quotes.require(symbol)
    return success_response(QuoteItem.from_domain(quote).model_dump(mode="json"), request)

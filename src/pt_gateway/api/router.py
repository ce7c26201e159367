"""Auth API router: register, login.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.bootstrap import TradingPlatform
from src.pt_common.response import ApiResponse, success_response
from src.pt_gateway.auth.dependencies import get_platform
from src.pt_gateway.user.schemas import LoginRequest, LoginResponse, RegisterRequest, UserInfo

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    platform: TradingPlatform = Depends(get_platform),
) -> ApiResponse:
    account = await platform.users.register(body.email, body.name, body.password)
    data = UserInfo.from_domain(account)
    return success_response(data.model_dump(), request, message="User registered successfully")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    platform: TradingPlatform = Depends(get_platform),
) -> ApiResponse:
    account, access_token = await platform.users.login(body.email, body.password)
    data = LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo.from_domain(account),
    )
    return success_response(data.model_dump(), request, message="Login successful")

"""Pydantic request/response schemas for pt_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, EmailStr, Field, model_validator

from src.pt_account.domain.models import UserAccount


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str
    password: str


class UserInfo(BaseModel):
    """Minimal user info embedded in responses."""

    user_id: str
    email: str
    name: str

    @classmethod
    def from_domain(cls, account: UserAccount) -> "UserInfo":
        return cls(user_id=account.id, email=account.email, name=account.name)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    user: UserInfo

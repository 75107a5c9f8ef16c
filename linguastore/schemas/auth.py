from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    """Credentials exchanged for API tokens."""

    email: constr(strip_whitespace=True, min_length=3, max_length=254, pattern=EMAIL_PATTERN) = Field(
        ...,
        description="Email address of a registered API user.",
    )
    password: constr(min_length=1, max_length=255) = Field(
        ...,
        description="Plain-text password; only its bcrypt hash is stored.",
    )
    user_agent: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None)

    @field_validator("password")
    @classmethod
    def _password_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("password must not be blank")
        return value


class TokenRefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Previously issued refresh token.")
    user_agent: Optional[str] = Field(
        default=None, description="Client user agent string used for telemetry."
    )
    ip_address: Optional[str] = Field(
        default=None, description="Caller IP address recorded for auditing."
    )


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(default=3600)


class UserItem(BaseModel):
    """Public view of an API user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class LoginResponse(UserItem):
    """Authenticated user together with a freshly minted token pair."""

    token: str = Field(..., description="Bearer access token.")
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int

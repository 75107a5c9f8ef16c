from fastapi import APIRouter, Depends, Request, status

from linguastore.api.deps import get_auth_service, get_current_user
from linguastore.models import User
from linguastore.schemas.auth import LoginRequest, LoginResponse, TokenRefreshRequest, TokenResponse, UserItem
from linguastore.schemas.common import ApiResponse
from linguastore.services.auth import AuthService

router = APIRouter()


def _client_metadata(request: Request, user_agent: str | None, ip_address: str | None) -> dict:
    return {
        "user_agent": user_agent or request.headers.get("user-agent"),
        "ip_address": ip_address or (request.client.host if request.client else None),
    }


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Exchange email and password for an access/refresh token pair.",
)
async def login(
    payload: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[LoginResponse]:
    enriched = payload.model_copy(
        update=_client_metadata(request, payload.user_agent, payload.ip_address)
    )
    result = await service.login(enriched)
    return ApiResponse(
        code=status.HTTP_200_OK,
        message="User logged in successfully",
        data=result,
    )


@router.post(
    "/auth/token/refresh",
    response_model=ApiResponse[TokenResponse],
    summary="Rotate the refresh token and mint a new access token.",
)
async def refresh_token(
    payload: TokenRefreshRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[TokenResponse]:
    enriched = payload.model_copy(
        update=_client_metadata(request, payload.user_agent, payload.ip_address)
    )
    tokens = await service.refresh_token(enriched)
    return ApiResponse(code=status.HTTP_200_OK, message="Token refreshed successfully", data=tokens)


@router.get(
    "/user",
    response_model=ApiResponse[UserItem],
    summary="Return the user behind the bearer token.",
)
async def current_user(user: User = Depends(get_current_user)) -> ApiResponse[UserItem]:
    return ApiResponse(
        code=status.HTTP_200_OK,
        message="Authenticated user",
        data=UserItem.model_validate(user),
    )

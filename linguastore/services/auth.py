from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linguastore.core.config import AppSettings
from linguastore.models import RefreshToken, User
from linguastore.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenRefreshRequest,
    TokenResponse,
    UserItem,
)

logger = logging.getLogger(__name__)

# bcrypt ignores everything past 72 bytes and newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


class AuthenticationError(ValueError):
    """Raised when credentials or tokens cannot be verified."""


class AuthService:
    """Password login, token issuance and bearer token verification."""

    def __init__(self, session: AsyncSession, settings: AppSettings):
        self._session = session
        self._settings = settings

    async def create_user(self, *, name: str, email: str, password: str) -> User:
        """Register an API user with a bcrypt-hashed password."""
        normalized_email = email.strip().lower()
        if not normalized_email or not password:
            raise ValueError("Email and password are required.")

        user = User(
            name=name.strip() or normalized_email.split("@", 1)[0],
            email=normalized_email,
            password_hash=self.hash_password(password),
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ValueError(f"User {normalized_email} already exists.") from exc
        return user

    async def login(self, payload: LoginRequest) -> LoginResponse:
        """Verify credentials and issue a fresh token pair."""
        email = payload.email.strip().lower()
        stmt = select(User).where(User.email == email).limit(1)
        result = await self._session.execute(stmt)
        user = result.scalar_one_or_none()

        if user is None or not self.verify_password(payload.password, user.password_hash):
            logger.warning("Rejected login attempt for %s", email)
            raise AuthenticationError("Invalid credentials")

        tokens = await self._issue_tokens(
            user,
            user_agent=payload.user_agent,
            ip_address=payload.ip_address,
        )
        logger.debug("Issued tokens for user %s", user.id)
        return LoginResponse(
            **UserItem.model_validate(user).model_dump(),
            token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
        )

    async def refresh_token(self, payload: TokenRefreshRequest) -> TokenResponse:
        """Rotate refresh token and mint a new access token pair."""
        if not payload.refresh_token:
            raise AuthenticationError("refresh_token is required.")

        hashed = self._hash_secret(payload.refresh_token)
        stmt = select(RefreshToken).where(RefreshToken.token_hash == hashed)
        result = await self._session.execute(stmt)
        token = result.scalar_one_or_none()
        if not token:
            raise AuthenticationError("Refresh token not found or already revoked.")

        now = self._now()
        expires_at = self._normalize_timestamp(token.expires_at)
        if not expires_at or expires_at <= now:
            raise AuthenticationError("Refresh token has expired.")
        if token.revoked_at is not None:
            raise AuthenticationError("Refresh token has been revoked.")

        user = await self._session.get(User, token.user_id)
        if not user:
            raise AuthenticationError("User for refresh token not found.")

        token.revoked_at = now

        logger.debug("Refreshing tokens for user %s", user.id)
        return await self._issue_tokens(
            user,
            user_agent=payload.user_agent,
            ip_address=payload.ip_address,
        )

    async def authenticate(self, access_token: str) -> User:
        """Resolve the user behind a bearer access token."""
        try:
            claims = jwt.decode(
                access_token,
                self._settings.jwt_secret(),
                algorithms=[self._settings.jwt_algorithm],
                issuer=self._settings.app_name,
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as exc:
            raise AuthenticationError("Unauthenticated.") from exc

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Unauthenticated.") from exc

        user = await self._session.get(User, user_id)
        if user is None:
            raise AuthenticationError("Unauthenticated.")
        return user

    async def _issue_tokens(
        self,
        user: User,
        *,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TokenResponse:
        now = self._now()
        expires_at = now + timedelta(seconds=self._settings.access_token_ttl)
        refresh_expiry = now + timedelta(seconds=self._settings.refresh_token_ttl)

        payload: dict[str, Any] = {
            "sub": str(user.id),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._settings.app_name,
            "jti": secrets.token_hex(16),
        }

        access_token = jwt.encode(
            payload, self._settings.jwt_secret(), algorithm=self._settings.jwt_algorithm
        )
        refresh_token = secrets.token_urlsafe(48)

        refresh_record = RefreshToken(
            user_id=user.id,
            token_hash=self._hash_secret(refresh_token),
            issued_at=now,
            expires_at=refresh_expiry,
            user_agent=user_agent,
            ip_address=ip_address,
        )
        self._session.add(refresh_record)
        await self._session.flush()

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",  # nosec B106
            expires_in=self._settings.access_token_ttl,
        )

    @staticmethod
    def hash_password(password: str) -> str:
        secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt()).decode("ascii")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(secret, password_hash.encode("ascii"))
        except ValueError:
            return False

    def _hash_secret(self, value: str) -> str:
        return hashlib.sha256(value.encode("utf-8")).hexdigest()

    def _now(self) -> datetime:
        return datetime.now(tz=timezone.utc)

    def _normalize_timestamp(self, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


__all__ = ["AuthService", "AuthenticationError"]

"""SQLAlchemy models and declarative base."""

from linguastore.models.base import Base  # noqa: F401
from linguastore.models.entities import (  # noqa: F401
    RefreshToken,
    Translation,
    User,
)

__all__ = [
    "Base",
    "User",
    "RefreshToken",
    "Translation",
]

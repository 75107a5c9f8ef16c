from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by every API route."""

    code: int = Field(default=200, description="HTTP status code of the response.")
    message: str
    data: DataT


class ApiError(BaseModel):
    """Failure envelope rendered by the exception handlers."""

    code: int
    message: str
    error: Any = None

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from linguastore.services.pagination import Page

MAX_FIELD_LENGTH = 255
# Largest value a signed 64-bit INTEGER primary key can hold.
MAX_ID = 2**63 - 1


def _require_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must not be blank")
    return value


def _validate_entries(entries: dict[str, str]) -> dict[str, str]:
    if not entries:
        raise ValueError("translations must contain at least one entry")
    for key, text in entries.items():
        if not key.strip():
            raise ValueError("translation keys must not be blank")
        if not text.strip():
            raise ValueError(f"translation '{key}' must not be blank")
        if len(text) > MAX_FIELD_LENGTH:
            raise ValueError(
                f"translation '{key}' must not exceed {MAX_FIELD_LENGTH} characters"
            )
    return entries


class TranslationCreate(BaseModel):
    """Payload for creating a translation bundle."""

    context: str = Field(..., max_length=MAX_FIELD_LENGTH, description="Namespace tag, e.g. web or mobile.")
    locale: str = Field(..., max_length=MAX_FIELD_LENGTH, description="Locale code, e.g. en or fr-CA.")
    translations: dict[str, str] = Field(
        ...,
        description="Mapping of translation keys to translated text.",
    )

    @field_validator("context", "locale")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        return _require_text(value, info.field_name)

    @field_validator("translations")
    @classmethod
    def _check_entries(cls, value: dict[str, str]) -> dict[str, str]:
        return _validate_entries(value)


class TranslationUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    id: int = Field(..., ge=1, le=MAX_ID, description="Identifier of the bundle to update.")
    context: Optional[str] = Field(default=None, max_length=MAX_FIELD_LENGTH)
    locale: Optional[str] = Field(default=None, max_length=MAX_FIELD_LENGTH)
    translations: Optional[dict[str, str]] = Field(
        default=None,
        description="Entries to add or overwrite; keys not listed are kept.",
    )

    @field_validator("context", "locale")
    @classmethod
    def _not_blank(cls, value: Optional[str], info) -> Optional[str]:
        if value is None:
            return value
        return _require_text(value, info.field_name)

    @field_validator("translations")
    @classmethod
    def _check_entries(cls, value: Optional[dict[str, str]]) -> Optional[dict[str, str]]:
        if value is None:
            return value
        return _validate_entries(value)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "TranslationUpdate":
        for name in ("context", "locale", "translations"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} must not be null when provided")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields other than ``id``."""
        return self.model_dump(exclude={"id"}, exclude_unset=True)


class TranslationItem(BaseModel):
    """Serialized translation bundle."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    context: str
    locale: str
    translations: dict[str, str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("translations", mode="before")
    @classmethod
    def _normalize_stored(cls, value: Any) -> dict[str, str]:
        if not isinstance(value, Mapping):
            return {}
        return {str(key): "" if text is None else str(text) for key, text in value.items()}


class TranslationPage(BaseModel):
    """Length-aware page of translation bundles."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[TranslationItem]
    current_page: int
    per_page: int
    total: int
    last_page: int
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None

    @classmethod
    def from_page(cls, page: Page) -> "TranslationPage":
        return cls(
            data=[TranslationItem.model_validate(record) for record in page.data],
            current_page=page.current_page,
            per_page=page.per_page,
            total=page.total,
            last_page=page.last_page,
            from_=page.from_,
            to=page.to,
        )

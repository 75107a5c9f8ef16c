from __future__ import annotations

import pytest
from pydantic import ValidationError

from linguastore.schemas.translation import (
    TranslationCreate,
    TranslationItem,
    TranslationPage,
    TranslationUpdate,
)
from linguastore.services.pagination import Page


def test_create_accepts_valid_payload() -> None:
    payload = TranslationCreate(context="web", locale="en", translations={"hello": "Hello"})

    assert payload.translations == {"hello": "Hello"}


@pytest.mark.parametrize(
    "overrides",
    [
        {"context": ""},
        {"locale": "   "},
        {"context": "c" * 256},
        {"translations": {}},
        {"translations": {"hello": ""}},
        {"translations": {"": "Hello"}},
        {"translations": {"hello": 42}},
        {"translations": {"hello": "x" * 256}},
        {"translations": ["hello"]},
    ],
)
def test_create_rejects_invalid_fields(overrides) -> None:
    data = {"context": "web", "locale": "en", "translations": {"hello": "Hello"}}
    data.update(overrides)

    with pytest.raises(ValidationError):
        TranslationCreate(**data)


def test_create_requires_all_fields() -> None:
    with pytest.raises(ValidationError):
        TranslationCreate(context="web", locale="en")


def test_update_reports_only_supplied_fields() -> None:
    payload = TranslationUpdate.model_validate({"id": 3, "locale": "fr"})

    assert payload.changes() == {"locale": "fr"}
    assert TranslationUpdate(id=3).changes() == {}


@pytest.mark.parametrize(
    "data",
    [
        {"locale": "fr"},
        {"id": 0},
        {"id": 1, "context": None},
        {"id": 1, "translations": {}},
        {"id": 1, "locale": ""},
    ],
)
def test_update_rejects_invalid_payloads(data) -> None:
    with pytest.raises(ValidationError):
        TranslationUpdate.model_validate(data)


def test_item_treats_non_mapping_translations_as_empty() -> None:
    item = TranslationItem.model_validate(
        {"id": 1, "context": "web", "locale": "en", "translations": "not a map"}
    )

    assert item.translations == {}


def test_page_serializes_from_alias() -> None:
    page = Page(
        data=[{"id": 1, "context": "web", "locale": "en", "translations": {"a": "A"}}],
        current_page=1,
        per_page=10,
        total=1,
    )

    dumped = TranslationPage.from_page(page).model_dump(by_alias=True)

    assert dumped["from"] == 1
    assert dumped["to"] == 1
    assert dumped["last_page"] == 1
    assert dumped["data"][0]["translations"] == {"a": "A"}


def test_update_rejects_id_beyond_integer_range() -> None:
    with pytest.raises(ValidationError):
        TranslationUpdate(id=2**63, locale="fr")

    assert TranslationUpdate(id=2**63 - 1).id == 2**63 - 1

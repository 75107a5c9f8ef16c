from __future__ import annotations

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from linguastore.models import Translation
from linguastore.services.search import SEARCH_PAGE_SIZE, TranslationSearchEngine
from linguastore.services.store import TranslationStore


@pytest.fixture()
def store(db_session: AsyncSession) -> TranslationStore:
    return TranslationStore(db_session)


@pytest.fixture()
def engine(store: TranslationStore) -> TranslationSearchEngine:
    return TranslationSearchEngine(store)


@pytest.mark.asyncio
async def test_search_matches_context_and_locale(store: TranslationStore, engine) -> None:
    web = await store.insert(context="web", locale="en", translations={"title": "Home"})
    await store.insert(context="mobile", locale="fr", translations={"title": "Accueil"})

    page = await engine.search("WEB")

    assert [record.id for record in page.data] == [web.id]
    assert page.total == 1


@pytest.mark.asyncio
async def test_search_matches_keys_and_values(store: TranslationStore, engine) -> None:
    by_key = await store.insert(context="web", locale="en", translations={"checkout_button": "Pay"})
    by_value = await store.insert(context="web", locale="de", translations={"cta": "Zur Kasse (checkout)"})
    await store.insert(context="web", locale="fr", translations={"cta": "Payer"})

    page = await engine.search("Checkout")

    assert [record.id for record in page.data] == [by_key.id, by_value.id]


@pytest.mark.asyncio
async def test_search_unions_passes_without_duplicates(store: TranslationStore, engine) -> None:
    both = await store.insert(context="greeting", locale="en", translations={"greeting": "Hello"})
    content_only = await store.insert(context="web", locale="en", translations={"msg": "greeting card"})

    page = await engine.search("greeting")

    assert [record.id for record in page.data] == [both.id, content_only.id]
    assert page.total == 2


@pytest.mark.asyncio
async def test_search_without_match_returns_empty_page(store: TranslationStore, engine) -> None:
    await store.insert(context="web", locale="en", translations={"hello": "Hello"})

    page = await engine.search("zzz-not-there")

    assert page.data == []
    assert page.total == 0
    assert page.per_page == SEARCH_PAGE_SIZE
    assert page.last_page == 1
    assert page.from_ is None
    assert page.to is None


@pytest.mark.asyncio
async def test_search_paginates_by_one_hundred(store: TranslationStore, engine) -> None:
    for index in range(150):
        await store.insert(context="web", locale=f"xx-{index}", translations={"k": f"value {index}"})

    first = await engine.search("web")
    second = await engine.search("web", page=2)

    assert len(first.data) == 100
    assert first.total == 150
    assert first.last_page == 2
    assert (first.from_, first.to) == (1, 100)

    assert len(second.data) == 50
    assert second.current_page == 2
    assert (second.from_, second.to) == (101, 150)
    assert second.data[0].id > first.data[-1].id


@pytest.mark.asyncio
async def test_search_treats_malformed_translations_as_empty(
    db_session: AsyncSession, store: TranslationStore, engine
) -> None:
    broken = await store.insert(context="web", locale="en", translations={"hello": "Hello"})
    await db_session.execute(
        update(Translation).where(Translation.id == broken.id).values(translations=["hello"])
    )
    db_session.expire_all()

    assert (await engine.search("hello")).total == 0
    assert [record.id for record in (await engine.search("web")).data] == [broken.id]


def test_content_text_normalization() -> None:
    assert TranslationSearchEngine._as_text(None) == ""
    assert TranslationSearchEngine._as_text(True) == "true"
    assert TranslationSearchEngine._as_text(12) == "12"
    assert TranslationSearchEngine._as_mapping('{"a": "b"}') == {"a": "b"}
    assert TranslationSearchEngine._as_mapping("not json") == {}
    assert TranslationSearchEngine._as_mapping(None) == {}


@pytest.mark.asyncio
async def test_search_folds_non_ascii_case_in_context(store: TranslationStore, engine) -> None:
    editor = await store.insert(context="Éditeur", locale="fr", translations={"title": "Titre"})
    await store.insert(context="web", locale="en", translations={"title": "Title"})

    page = await engine.search("éditeur")

    assert [record.id for record in page.data] == [editor.id]
    assert page.total == 1

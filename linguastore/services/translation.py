from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from linguastore.models import Translation
from linguastore.schemas.translation import TranslationCreate, TranslationUpdate
from linguastore.services.pagination import Page, QueryOptions
from linguastore.services.search import TranslationSearchEngine
from linguastore.services.store import TranslationStore

logger = logging.getLogger(__name__)


class TranslationService:
    """Create, update, look up and search translation bundles."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        store: TranslationStore | None = None,
        search_engine: TranslationSearchEngine | None = None,
    ):
        self._session = session
        self._store = store or TranslationStore(session)
        self._search_engine = search_engine or TranslationSearchEngine(self._store)

    async def get_translation(self, context: str, locale: str) -> Translation:
        """Return the first bundle stored for ``(context, locale)``."""
        return await self._store.find_one(context=context, locale=locale)

    async def get_by_id(self, translation_id: int) -> Translation:
        return await self._store.get_by_id(translation_id)

    async def create_translation(self, payload: TranslationCreate) -> Translation:
        record = await self._store.insert(
            context=payload.context,
            locale=payload.locale,
            translations=payload.translations,
        )
        logger.debug(
            "Created translation %s (%s/%s, %d keys)",
            record.id,
            record.context,
            record.locale,
            len(payload.translations),
        )
        return record

    async def update_translation(self, payload: TranslationUpdate) -> Translation:
        """Apply a partial update, merging ``translations`` key by key."""
        changes = payload.changes()
        if not changes:
            return await self._store.get_by_id(payload.id)

        if "translations" in changes:
            existing = await self._store.get_by_id(payload.id)
            current = existing.translations if isinstance(existing.translations, dict) else {}
            merged = dict(current)
            merged.update(changes["translations"])
            changes["translations"] = merged

        record = await self._store.update(payload.id, **changes)
        logger.debug("Updated translation %s fields=%s", record.id, sorted(changes))
        return record

    async def delete_translation(self, translation_id: int) -> None:
        await self._store.delete(translation_id)
        logger.debug("Deleted translation %s", translation_id)

    async def list_translations(
        self,
        options: QueryOptions,
        *,
        context: str | None = None,
        locale: str | None = None,
    ) -> Page[Translation]:
        return await self._store.find_many({"context": context, "locale": locale}, options)

    async def search(self, keyword: str, *, page: int = 1) -> Page[Translation]:
        """Free-text search with a fixed page size of 100."""
        return await self._search_engine.search(keyword, page=page)


__all__ = ["TranslationService"]

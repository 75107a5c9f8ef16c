from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from linguastore.models import Translation
from linguastore.services.pagination import Page, QueryOptions, paginate
from linguastore.services.store import TranslationStore

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 100


class TranslationSearchEngine:
    """Keyword search across bundle context, locale, keys and values.

    Runs in two passes. The structural pass lets the database match
    ``context``/``locale``. The content pass scans every bundle in memory
    because the serialized ``translations`` column is opaque to the database
    filter. Results of both passes are unioned and ordered by id.
    """

    def __init__(self, store: TranslationStore):
        self._store = store

    async def search(self, keyword: str, *, page: int = 1) -> Page[Translation]:
        options = QueryOptions(page=page, per_page=SEARCH_PAGE_SIZE)

        structural_ids = await self._store.matching_ids(keyword)
        content_ids = await self._content_matches(keyword)
        matched = sorted(set(structural_ids) | set(content_ids))

        logger.debug(
            "Search %r matched %d structural, %d content, %d total",
            keyword,
            len(structural_ids),
            len(content_ids),
            len(matched),
        )

        if not matched:
            return Page.empty(options)

        id_page = paginate(matched, options)
        records = await self._store.fetch_many(id_page.data)
        return Page(
            data=records,
            current_page=id_page.current_page,
            per_page=id_page.per_page,
            total=id_page.total,
        )

    async def _content_matches(self, keyword: str) -> list[int]:
        needle = keyword.lower()
        matches: list[int] = []
        for record in await self._store.all():
            # SQL lower() on SQLite folds ASCII only; recheck context and locale here.
            if needle in (record.context or "").lower() or needle in (record.locale or "").lower():
                matches.append(record.id)
                continue
            entries = self._as_mapping(record.translations)
            if any(
                needle in self._as_text(key).lower() or needle in self._as_text(value).lower()
                for key, value in entries.items()
            ):
                matches.append(record.id)
        return matches

    @staticmethod
    def _as_mapping(raw: Any) -> Mapping[Any, Any]:
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                return {}
        if isinstance(raw, Mapping):
            return raw
        return {}

    @staticmethod
    def _as_text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)

from __future__ import annotations

import logging
from typing import Any, Iterable

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linguastore.models import Translation
from linguastore.services.pagination import Page, QueryOptions

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"context", "locale", "translations"})


class TranslationNotFoundError(LookupError):
    """Raised when no translation bundle matches the requested identity."""

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class TranslationQueryError(RuntimeError):
    """Raised when the storage layer fails while reading or writing bundles."""


class TranslationStore:
    """Persistence gateway for translation bundles."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def insert(
        self,
        *,
        context: str,
        locale: str,
        translations: dict[str, str],
    ) -> Translation:
        """Persist a new bundle and return it with its assigned id."""
        record = Translation(context=context, locale=locale, translations=dict(translations))
        self._session.add(record)
        try:
            await self._session.flush()
            await self._session.refresh(record)
        except SQLAlchemyError as exc:
            raise TranslationQueryError(str(exc)) from exc
        return record

    async def get_by_id(self, translation_id: int) -> Translation:
        try:
            record = await self._session.get(Translation, translation_id)
        except SQLAlchemyError as exc:
            raise TranslationQueryError(str(exc)) from exc
        except OverflowError as exc:
            # Ids outside the INTEGER range cannot reference a stored bundle.
            raise TranslationNotFoundError() from exc
        if record is None:
            raise TranslationNotFoundError()
        return record

    async def update(self, translation_id: int, **fields: Any) -> Translation:
        """Apply only the supplied top-level fields.

        ``translations`` is replaced as a whole; callers wanting key-level
        merge must pass the already merged mapping.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported fields: {', '.join(sorted(unknown))}")

        record = await self.get_by_id(translation_id)
        for name, value in fields.items():
            if name == "translations":
                value = dict(value)
            setattr(record, name, value)
        try:
            await self._session.flush()
            await self._session.refresh(record)
        except SQLAlchemyError as exc:
            raise TranslationQueryError(str(exc)) from exc
        return record

    async def delete(self, translation_id: int) -> None:
        record = await self.get_by_id(translation_id)
        try:
            await self._session.delete(record)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise TranslationQueryError(str(exc)) from exc

    async def find_one(self, **conditions: Any) -> Translation:
        """Return the first bundle (lowest id) matching every condition."""
        stmt = self._apply_conditions(select(Translation), conditions)
        stmt = stmt.order_by(Translation.id.asc()).limit(1)
        record = (await self._scalars(stmt)).first()
        if record is None:
            raise TranslationNotFoundError()
        return record

    async def find_many(
        self,
        conditions: dict[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> Page[Translation]:
        options = options or QueryOptions()
        conditions = {key: value for key, value in (conditions or {}).items() if value is not None}

        ordering = Translation.id.asc() if options.order == "asc" else Translation.id.desc()
        stmt = self._apply_conditions(select(Translation), conditions)
        stmt = stmt.order_by(ordering).limit(options.per_page).offset(options.offset)
        records = (await self._scalars(stmt)).all()

        count_stmt = self._apply_conditions(select(func.count(Translation.id)), conditions)
        try:
            total = (await self._session.execute(count_stmt)).scalar_one()
        except SQLAlchemyError as exc:
            raise TranslationQueryError(str(exc)) from exc

        return Page(
            data=list(records),
            current_page=options.page,
            per_page=options.per_page,
            total=int(total or 0),
        )

    async def all(self) -> list[Translation]:
        """Materialize every bundle in storage order."""
        stmt = select(Translation).order_by(Translation.id.asc())
        return list((await self._scalars(stmt)).all())

    async def matching_ids(self, keyword: str) -> list[int]:
        """Ids whose context or locale contains ``keyword``, ignoring case."""
        stmt = (
            select(Translation.id)
            .where(
                or_(
                    Translation.context.icontains(keyword, autoescape=True),
                    Translation.locale.icontains(keyword, autoescape=True),
                )
            )
            .order_by(Translation.id.asc())
        )
        return list((await self._scalars(stmt)).all())

    async def fetch_many(self, ids: Iterable[int]) -> list[Translation]:
        wanted = list(ids)
        if not wanted:
            return []
        stmt = select(Translation).where(Translation.id.in_(wanted)).order_by(Translation.id.asc())
        return list((await self._scalars(stmt)).all())

    async def _scalars(self, stmt: Select):
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.exception("Translation query failed")
            raise TranslationQueryError(str(exc)) from exc
        return result.scalars()

    @staticmethod
    def _apply_conditions(stmt: Select, conditions: dict[str, Any]) -> Select:
        clauses = []
        for name, value in conditions.items():
            column = getattr(Translation, name, None)
            if column is None or name == "translations":
                raise ValueError(f"Cannot filter translations by '{name}'")
            clauses.append(column == value)
        if clauses:
            stmt = stmt.where(*clauses)
        return stmt

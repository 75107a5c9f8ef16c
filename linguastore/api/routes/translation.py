from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Path, Query, status

from linguastore.api.deps import get_current_user, get_translation_service
from linguastore.schemas.common import ApiResponse
from linguastore.schemas.translation import (
    MAX_ID,
    TranslationCreate,
    TranslationItem,
    TranslationPage,
    TranslationUpdate,
)
from linguastore.services.pagination import QueryOptions
from linguastore.services.translation import TranslationService

router = APIRouter(dependencies=[Depends(get_current_user)])

MAX_PAGE = 2**31 - 1

LIST_MESSAGE = "List of translations"
CREATE_MESSAGE = "Translation created successfully"
UPDATE_MESSAGE = "Translation updated successfully"
DELETE_MESSAGE = "Translation deleted successfully"


@router.get(
    "/get/{context}/{locale}",
    response_model=ApiResponse[TranslationItem],
    summary="Fetch the first bundle stored for a context and locale.",
)
async def get_translation(
    context: str,
    locale: str,
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[TranslationItem]:
    record = await service.get_translation(context, locale)
    return ApiResponse(
        code=status.HTTP_200_OK,
        message=LIST_MESSAGE,
        data=TranslationItem.model_validate(record),
    )


@router.post(
    "/create",
    response_model=ApiResponse[TranslationItem],
    status_code=status.HTTP_201_CREATED,
    summary="Create a translation bundle.",
)
async def create_translation(
    payload: TranslationCreate,
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[TranslationItem]:
    record = await service.create_translation(payload)
    return ApiResponse(
        code=status.HTTP_201_CREATED,
        message=CREATE_MESSAGE,
        data=TranslationItem.model_validate(record),
    )


@router.patch(
    "/update",
    response_model=ApiResponse[TranslationItem],
    summary="Partially update a bundle; translation keys are merged.",
)
async def update_translation(
    payload: TranslationUpdate,
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[TranslationItem]:
    record = await service.update_translation(payload)
    return ApiResponse(
        code=status.HTTP_200_OK,
        message=UPDATE_MESSAGE,
        data=TranslationItem.model_validate(record),
    )


@router.get(
    "/search/{keyword}",
    response_model=ApiResponse[TranslationPage],
    summary="Search context, locale, keys and values for a keyword (100 per page).",
)
async def search_translations(
    keyword: str = Path(..., description="Case-insensitive substring to look for."),
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="Page number to return."),
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[TranslationPage]:
    result = await service.search(keyword, page=page)
    return ApiResponse(
        code=status.HTTP_200_OK,
        message=LIST_MESSAGE,
        data=TranslationPage.from_page(result),
    )


@router.get(
    "/list",
    response_model=ApiResponse[TranslationPage],
    summary="List bundles with optional exact context/locale filters.",
)
async def list_translations(
    context: str | None = Query(default=None, description="Exact context filter."),
    locale: str | None = Query(default=None, description="Exact locale filter."),
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="Page number to return."),
    per_page: int = Query(default=10, ge=1, le=100, description="Bundles per page."),
    order: Literal["asc", "desc"] = Query(default="asc", description="Sort direction by id."),
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[TranslationPage]:
    options = QueryOptions(page=page, per_page=per_page, order=order)
    result = await service.list_translations(options, context=context, locale=locale)
    return ApiResponse(
        code=status.HTTP_200_OK,
        message=LIST_MESSAGE,
        data=TranslationPage.from_page(result),
    )


@router.delete(
    "/{translation_id}",
    response_model=ApiResponse[None],
    summary="Delete a translation bundle.",
)
async def delete_translation(
    translation_id: int = Path(..., ge=1, le=MAX_ID),
    service: TranslationService = Depends(get_translation_service),
) -> ApiResponse[None]:
    await service.delete_translation(translation_id)
    return ApiResponse(code=status.HTTP_200_OK, message=DELETE_MESSAGE, data=None)

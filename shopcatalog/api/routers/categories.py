"""Categories router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.api.deps import PathId, get_category_service, get_session
from shopcatalog.api.pagination import PaginationParams, pagination_params
from shopcatalog.api.responses import send_no_content, send_paginated, send_success
from shopcatalog.api.schemas.category import CategoryIn, CategoryOut
from shopcatalog.api.schemas.common import Envelope
from shopcatalog.services.category_service import CategoryService

router = APIRouter()


@router.post("", status_code=201, response_model=Envelope[CategoryOut])
async def create_category(
    request: Request,
    body: CategoryIn,
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    category = await svc.create(session, **body.model_dump())
    return send_success(request, 201, CategoryOut.model_validate(category))


@router.get("", response_model=Envelope[list[CategoryOut]])
async def list_categories(
    request: Request,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    result = await svc.list(session, paging.page, paging.limit)
    return send_paginated(
        request,
        [CategoryOut.model_validate(c) for c in result.data],
        result.page,
        result.limit,
        result.total,
    )


# Registered before /{category_id} so "root" is not parsed as an id.
@router.get("/root", response_model=Envelope[list[CategoryOut]])
async def list_root_categories(
    request: Request,
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    roots = await svc.list_roots(session)
    return send_success(request, 200, [CategoryOut.model_validate(c) for c in roots])


@router.get("/{category_id}", response_model=Envelope[CategoryOut])
async def get_category(
    request: Request,
    category_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    category = await svc.get(session, category_id)
    return send_success(request, 200, CategoryOut.model_validate(category))


@router.get("/{category_id}/subcategories", response_model=Envelope[list[CategoryOut]])
async def list_subcategories(
    request: Request,
    category_id: PathId,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    result = await svc.list_subcategories(session, category_id, paging.page, paging.limit)
    return send_paginated(
        request,
        [CategoryOut.model_validate(c) for c in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.put("/{category_id}", response_model=Envelope[CategoryOut])
async def update_category(
    request: Request,
    category_id: PathId,
    body: CategoryIn,
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> JSONResponse:
    category = await svc.update(session, category_id, **body.model_dump())
    return send_success(request, 200, CategoryOut.model_validate(category))


@router.delete("/{category_id}", status_code=204, response_class=Response)
async def delete_category(
    request: Request,
    category_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: CategoryService = Depends(get_category_service),
) -> Response:
    await svc.delete(session, category_id)
    return send_no_content(request)

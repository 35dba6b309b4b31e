"""Media router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.api.deps import PathId, get_media_service, get_session
from shopcatalog.api.pagination import PaginationParams, pagination_params
from shopcatalog.api.responses import send_no_content, send_paginated, send_success
from shopcatalog.api.schemas.common import Envelope
from shopcatalog.api.schemas.media import MediaIn, MediaOut
from shopcatalog.services.media_service import MediaService

router = APIRouter()


@router.post("", status_code=201, response_model=Envelope[MediaOut])
async def create_media(
    request: Request,
    body: MediaIn,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    media = await svc.create(session, **body.model_dump())
    return send_success(request, 201, MediaOut.model_validate(media))


@router.get("/product/{product_id}", response_model=Envelope[list[MediaOut]])
async def list_product_media(
    request: Request,
    product_id: PathId,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    result = await svc.list_by_product(session, product_id, paging.page, paging.limit)
    return send_paginated(
        request,
        [MediaOut.model_validate(m) for m in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.get("/product/{product_id}/primary", response_model=Envelope[MediaOut])
async def get_primary_media(
    request: Request,
    product_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    media = await svc.get_primary(session, product_id)
    return send_success(request, 200, MediaOut.model_validate(media))


@router.put("/product/{product_id}/primary/{media_id}", response_model=Envelope[MediaOut])
async def set_primary_media(
    request: Request,
    product_id: PathId,
    media_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    media = await svc.set_primary(session, product_id, media_id)
    return send_success(request, 200, MediaOut.model_validate(media))


@router.get("/variant/{variant_id}", response_model=Envelope[list[MediaOut]])
async def list_variant_media(
    request: Request,
    variant_id: PathId,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    result = await svc.list_by_variant(session, variant_id, paging.page, paging.limit)
    return send_paginated(
        request,
        [MediaOut.model_validate(m) for m in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.get("/{media_id}", response_model=Envelope[MediaOut])
async def get_media(
    request: Request,
    media_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    media = await svc.get(session, media_id)
    return send_success(request, 200, MediaOut.model_validate(media))


@router.put("/{media_id}", response_model=Envelope[MediaOut])
async def update_media(
    request: Request,
    media_id: PathId,
    body: MediaIn,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> JSONResponse:
    media = await svc.update(session, media_id, **body.model_dump())
    return send_success(request, 200, MediaOut.model_validate(media))


@router.delete("/{media_id}", status_code=204, response_class=Response)
async def delete_media(
    request: Request,
    media_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: MediaService = Depends(get_media_service),
) -> Response:
    await svc.delete(session, media_id)
    return send_no_content(request)

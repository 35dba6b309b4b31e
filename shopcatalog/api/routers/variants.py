"""Variants router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.api.deps import PathId, get_session, get_variant_service
from shopcatalog.api.pagination import PaginationParams, pagination_params
from shopcatalog.api.responses import send_no_content, send_paginated, send_success
from shopcatalog.api.schemas.common import Envelope
from shopcatalog.api.schemas.variant import StockUpdate, VariantIn, VariantOut
from shopcatalog.services.variant_service import VariantService

router = APIRouter()


@router.post("", status_code=201, response_model=Envelope[VariantOut])
async def create_variant(
    request: Request,
    body: VariantIn,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.create(session, **body.model_dump())
    return send_success(request, 201, VariantOut.model_validate(variant))


@router.get("/sku/{sku}", response_model=Envelope[VariantOut])
async def get_variant_by_sku(
    request: Request,
    sku: str,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.get_by_sku(session, sku)
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.get("/product/{product_id}", response_model=Envelope[list[VariantOut]])
async def list_product_variants(
    request: Request,
    product_id: PathId,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    result = await svc.list_by_product(session, product_id, paging.page, paging.limit)
    return send_paginated(
        request,
        [VariantOut.model_validate(v) for v in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.get("/product/{product_id}/active", response_model=Envelope[list[VariantOut]])
async def list_active_product_variants(
    request: Request,
    product_id: PathId,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    result = await svc.list_by_product(
        session, product_id, paging.page, paging.limit, active_only=True
    )
    return send_paginated(
        request,
        [VariantOut.model_validate(v) for v in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.get("/{variant_id}", response_model=Envelope[VariantOut])
async def get_variant(
    request: Request,
    variant_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.get(session, variant_id)
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.put("/{variant_id}", response_model=Envelope[VariantOut])
async def update_variant(
    request: Request,
    variant_id: PathId,
    body: VariantIn,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.update(session, variant_id, **body.model_dump())
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.put("/{variant_id}/stock", response_model=Envelope[VariantOut])
async def update_variant_stock(
    request: Request,
    variant_id: PathId,
    body: StockUpdate,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.update_stock(session, variant_id, body.quantity)
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.put("/{variant_id}/activate", response_model=Envelope[VariantOut])
async def activate_variant(
    request: Request,
    variant_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.activate(session, variant_id)
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.put("/{variant_id}/deactivate", response_model=Envelope[VariantOut])
async def deactivate_variant(
    request: Request,
    variant_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> JSONResponse:
    variant = await svc.deactivate(session, variant_id)
    return send_success(request, 200, VariantOut.model_validate(variant))


@router.delete("/{variant_id}", status_code=204, response_class=Response)
async def delete_variant(
    request: Request,
    variant_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: VariantService = Depends(get_variant_service),
) -> Response:
    await svc.delete(session, variant_id)
    return send_no_content(request)

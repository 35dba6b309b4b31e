"""Products router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.api.deps import PathId, get_product_service, get_session
from shopcatalog.api.pagination import PaginationParams, pagination_params
from shopcatalog.api.responses import send_no_content, send_paginated, send_success
from shopcatalog.api.schemas.common import Envelope
from shopcatalog.api.schemas.product import ProductIn, ProductOut
from shopcatalog.services.product_service import ProductService

router = APIRouter()


@router.post("", status_code=201, response_model=Envelope[ProductOut])
async def create_product(
    request: Request,
    body: ProductIn,
    session: AsyncSession = Depends(get_session),
    svc: ProductService = Depends(get_product_service),
) -> JSONResponse:
    product = await svc.create(session, **body.model_dump())
    return send_success(request, 201, ProductOut.model_validate(product))


@router.get("", response_model=Envelope[list[ProductOut]])
async def list_products(
    request: Request,
    paging: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    svc: ProductService = Depends(get_product_service),
) -> JSONResponse:
    result = await svc.list(session, paging.page, paging.limit)
    return send_paginated(
        request,
        [ProductOut.model_validate(p) for p in result.data],
        result.page,
        result.limit,
        result.total,
    )


@router.get("/{product_id}", response_model=Envelope[ProductOut])
async def get_product(
    request: Request,
    product_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: ProductService = Depends(get_product_service),
) -> JSONResponse:
    product = await svc.get(session, product_id)
    return send_success(request, 200, ProductOut.model_validate(product))


@router.put("/{product_id}", response_model=Envelope[ProductOut])
async def update_product(
    request: Request,
    product_id: PathId,
    body: ProductIn,
    session: AsyncSession = Depends(get_session),
    svc: ProductService = Depends(get_product_service),
) -> JSONResponse:
    product = await svc.update(session, product_id, **body.model_dump())
    return send_success(request, 200, ProductOut.model_validate(product))


@router.delete("/{product_id}", status_code=204, response_class=Response)
async def delete_product(
    request: Request,
    product_id: PathId,
    session: AsyncSession = Depends(get_session),
    svc: ProductService = Depends(get_product_service),
) -> Response:
    await svc.delete(session, product_id)
    return send_no_content(request)

"""Coupon API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.cache import TTLCache, get_coupons_cache, get_stores_cache
from marketplace.core.database import get_db
from marketplace.core.responses import (
    BACKEND_ERROR_MESSAGE,
    COUPONS_CACHE_CONTROL,
    WRITE_ERROR_MESSAGE,
    envelope_response,
    error_response,
)
from marketplace.schemas.base import SuccessEnvelope
from marketplace.schemas.coupon import (
    CouponDeleteRequest,
    CouponEnvelope,
    CouponListEnvelope,
    CouponResponse,
    CouponUpdateRequest,
    CouponWrite,
    CouponWriteEnvelope,
    DashboardEnvelope,
    DashboardStatsResponse,
    LayoutEnvelope,
)
from marketplace.schemas.query import CouponQuery
from marketplace.services.coupon_admin import CouponAdminService
from marketplace.services.coupon_lookup import CouponLookupService
from marketplace.services.dashboard import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get coupons",
    responses={
        200: {"model": CouponListEnvelope, "description": "Coupon list, or one coupon when id is given"},
        500: {"description": "Backend failure"},
    },
)
async def get_coupons(
    request: Request,
    id: str | None = Query(default=None),
    category_id: str | None = Query(default=None, alias="categoryId"),
    store_id: str | None = Query(default=None, alias="storeId"),
    active_only: str | None = Query(default=None, alias="activeOnly"),
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_coupons_cache),
) -> JSONResponse:
    """Get one coupon by id, or the coupons matching the category/store filters.

    Any ``_t`` parameter bypasses the read cache.
    """
    query = CouponQuery.from_params(
        id=id,
        category_id=category_id,
        store_id=store_id,
        active_only=active_only,
        bypass_cache="_t" in request.query_params,
    )
    service = CouponLookupService(db, cache)
    try:
        if query.id:
            record = service.get_coupon(query)
            payload: CouponEnvelope | CouponListEnvelope = CouponEnvelope(
                coupon=CouponResponse.model_validate(record) if record else None
            )
        else:
            records = service.list_coupons(query)
            payload = CouponListEnvelope(
                coupons=[CouponResponse.model_validate(record) for record in records]
            )
    except SQLAlchemyError:
        logger.exception("Coupon read failed (%s)", query.cache_key())
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, coupons=[], coupon=None)
    return envelope_response(payload, cache_control=COUPONS_CACHE_CONTROL)


@router.get(
    "/get-dashboard",
    response_model=None,
    summary="Get admin dashboard",
    responses={200: {"model": DashboardEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_dashboard(db: Session = Depends(get_db)) -> JSONResponse:
    """Coupon statistics and the most recently created coupons."""
    service = DashboardService(db)
    try:
        stats = service.get_stats()
        recent = service.get_recent_coupons()
    except SQLAlchemyError:
        logger.exception("Dashboard read failed")
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, stats=None, coupons=[])
    return envelope_response(
        DashboardEnvelope(
            stats=DashboardStatsResponse.model_validate(stats),
            coupons=[CouponResponse.model_validate(record) for record in recent],
        )
    )


async def _layout(db: Session, latest: bool) -> JSONResponse:
    try:
        slots = DashboardService(db).get_layout(latest=latest)
    except SQLAlchemyError:
        logger.exception("Layout read failed (latest=%s)", latest)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, slots=[])
    return envelope_response(
        LayoutEnvelope(
            slots=[CouponResponse.model_validate(slot) if slot else None for slot in slots]
        ),
        cache_control=COUPONS_CACHE_CONTROL,
    )


@router.get(
    "/popular",
    response_model=None,
    summary="Get popular coupon layout",
    responses={200: {"model": LayoutEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_popular_layout(db: Session = Depends(get_db)) -> JSONResponse:
    """The eight popular-grid slots, null where no coupon is placed."""
    return await _layout(db, latest=False)


@router.get(
    "/latest",
    response_model=None,
    summary="Get latest coupon layout",
    responses={200: {"model": LayoutEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_latest_layout(db: Session = Depends(get_db)) -> JSONResponse:
    """The eight latest-grid slots, null where no coupon is placed."""
    return await _layout(db, latest=True)


@router.post(
    "/create",
    response_model=None,
    status_code=201,
    summary="Create coupon",
    responses={
        201: {"model": CouponWriteEnvelope},
        400: {"description": "Validation error"},
        500: {"description": "Backend failure"},
    },
)
async def create_coupon(
    data: CouponWrite,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
    stores_cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Create a coupon; code-type coupons need a code."""
    try:
        coupon = CouponAdminService(db).create_coupon(data)
        coupons_cache.clear()
        stores_cache.clear()
        record = CouponLookupService(db, coupons_cache).get_coupon(
            CouponQuery(id=coupon.id, bypass_cache=True)
        )
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Coupon create failed")
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    return envelope_response(
        CouponWriteEnvelope(coupon=CouponResponse.model_validate(record)), status_code=201
    )


@router.post(
    "/update",
    response_model=None,
    summary="Update coupon",
    responses={
        200: {"model": CouponWriteEnvelope},
        400: {"description": "Validation error"},
        404: {"description": "Coupon not found"},
        500: {"description": "Backend failure"},
    },
)
async def update_coupon(
    data: CouponUpdateRequest,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
    stores_cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Apply a partial update to a coupon found by id or imported ``Coupon Id``."""
    if not data.id or data.updates is None:
        return error_response("Missing coupon ID or updates", status_code=400)
    try:
        coupon = CouponAdminService(db).update_coupon(data.id, data.updates)
        if coupon is None:
            return error_response("Coupon not found", status_code=404)
        coupons_cache.clear()
        stores_cache.clear()
        record = CouponLookupService(db, coupons_cache).get_coupon(
            CouponQuery(id=coupon.id, bypass_cache=True)
        )
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Coupon update failed for %s", data.id)
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    return envelope_response(CouponWriteEnvelope(coupon=CouponResponse.model_validate(record)))


@router.post(
    "/delete",
    response_model=None,
    summary="Delete coupon",
    responses={
        200: {"model": SuccessEnvelope},
        400: {"description": "Missing coupon ID"},
        404: {"description": "Coupon not found"},
        500: {"description": "Backend failure"},
    },
)
async def delete_coupon(
    data: CouponDeleteRequest,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
) -> JSONResponse:
    """Delete every coupon whose id or imported ``Coupon Id`` matches."""
    if not data.id:
        return error_response("Missing coupon ID", status_code=400)
    try:
        deleted = CouponAdminService(db).delete_coupon(data.id)
    except SQLAlchemyError:
        logger.exception("Coupon delete failed for %s", data.id)
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    if not deleted:
        return error_response(f'Coupon with ID "{data.id}" not found', status_code=404)
    coupons_cache.clear()
    return envelope_response(SuccessEnvelope())

"""Store API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.cache import TTLCache, get_coupons_cache, get_stores_cache
from marketplace.core.database import get_db
from marketplace.core.responses import (
    BACKEND_ERROR_MESSAGE,
    STORES_CACHE_CONTROL,
    WRITE_ERROR_MESSAGE,
    envelope_response,
    error_response,
)
from marketplace.schemas.base import SuccessEnvelope
from marketplace.schemas.query import StoreQuery
from marketplace.schemas.store import (
    RegionAnalysisEnvelope,
    SlugCheckEnvelope,
    SlugCheckRequest,
    StoreCreatedEnvelope,
    StoreCreateRequest,
    StoreDeleteRequest,
    StoreEnvelope,
    StoreListEnvelope,
    StoreNetworkEnvelope,
    StoreResponse,
    StoreUpdateRequest,
)
from marketplace.services.normalizers import StoreRecord
from marketplace.services.regions import RegionAnalysisService
from marketplace.services.store_admin import StoreAdminService
from marketplace.services.store_lookup import StoreLookupService

logger = logging.getLogger(__name__)

router = APIRouter()


def _stores(records: list[StoreRecord]) -> list[StoreResponse]:
    return [StoreResponse.model_validate(record) for record in records]


@router.get(
    "/get",
    response_model=None,
    summary="Get stores",
    responses={
        200: {"model": StoreListEnvelope, "description": "Store list, or one store for id/slug"},
        500: {"description": "Backend failure"},
    },
)
async def get_stores(
    request: Request,
    id: str | None = Query(default=None),
    slug: str | None = Query(default=None),
    network_id: str | None = Query(default=None, alias="networkId"),
    category_id: str | None = Query(default=None, alias="categoryId"),
    country_code: str | None = Query(default=None, alias="countryCode"),
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Get one store by id or slug, the stores of a network, or a filtered list.

    ``id`` takes precedence over ``slug``, which takes precedence over
    ``networkId``. Any ``_t`` parameter bypasses the read cache.
    """
    query = StoreQuery(
        id=id,
        slug=slug,
        network_id=network_id,
        category_id=category_id,
        country_code=country_code,
        bypass_cache="_t" in request.query_params,
    )
    service = StoreLookupService(db, cache)
    payload: StoreEnvelope | StoreListEnvelope
    try:
        if query.id:
            record = service.get_store(query)
            payload = StoreEnvelope(store=StoreResponse.model_validate(record) if record else None)
        elif query.slug:
            record = service.get_store_by_slug(query)
            payload = StoreEnvelope(store=StoreResponse.model_validate(record) if record else None)
        elif query.network_id:
            stores = _stores(service.list_by_network(query))
            if len(stores) == 1:
                payload = StoreNetworkEnvelope(stores=stores, store=stores[0])
            else:
                payload = StoreListEnvelope(stores=stores)
        else:
            payload = StoreListEnvelope(stores=_stores(service.list_stores(query)))
    except SQLAlchemyError:
        logger.exception("Store read failed (%s)", query.cache_key())
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, stores=[], store=None)
    return envelope_response(payload, cache_control=STORES_CACHE_CONTROL)




def _fresh_store(db: Session, stores_cache: TTLCache, store_id: str) -> StoreResponse:
    record = StoreLookupService(db, stores_cache).get_store(StoreQuery(id=store_id, bypass_cache=True))
    return StoreResponse.model_validate(record)


@router.post(
    "/create",
    response_model=None,
    summary="Create store",
    responses={
        200: {"model": StoreCreatedEnvelope},
        400: {"description": "Validation error or duplicate slug"},
        500: {"description": "Backend failure"},
    },
)
async def create_store(
    data: StoreCreateRequest,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
    stores_cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Create a store; only the name is required."""
    if data.store is None:
        return error_response("Store name is required", status_code=400)
    try:
        store = StoreAdminService(db).create_store(data.store)
        stores_cache.clear()
        coupons_cache.clear()
        response = _fresh_store(db, stores_cache, store.id)
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Store create failed")
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    return envelope_response(StoreCreatedEnvelope(id=store.id, store=response))


@router.post(
    "/update",
    response_model=None,
    summary="Update store",
    responses={
        200: {"model": StoreEnvelope},
        400: {"description": "Validation error or duplicate slug"},
        404: {"description": "Store not found"},
        500: {"description": "Backend failure"},
    },
)
async def update_store(
    data: StoreUpdateRequest,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
    stores_cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Apply a partial update to a store found by UUID or legacy ``Store Id``."""
    if not data.id:
        return error_response("Missing store ID", status_code=400)
    if data.updates is None:
        return error_response("No updates provided", status_code=400)
    try:
        store = StoreAdminService(db).update_store(data.id, data.updates)
        if store is None:
            return error_response("Store not found", status_code=404)
        # Coupons embed the store name, so both caches go stale
        stores_cache.clear()
        coupons_cache.clear()
        response = _fresh_store(db, stores_cache, store.id)
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Store update failed for %s", data.id)
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    return envelope_response(StoreEnvelope(store=response))


@router.post(
    "/delete",
    response_model=None,
    summary="Delete store",
    responses={
        200: {"model": SuccessEnvelope},
        400: {"description": "Missing store ID"},
        404: {"description": "Store not found"},
        500: {"description": "Backend failure"},
    },
)
async def delete_store(
    data: StoreDeleteRequest,
    db: Session = Depends(get_db),
    coupons_cache: TTLCache = Depends(get_coupons_cache),
    stores_cache: TTLCache = Depends(get_stores_cache),
) -> JSONResponse:
    """Delete a store found by UUID or legacy ``Store Id``."""
    if not data.id:
        return error_response("Missing store ID", status_code=400)
    try:
        deleted = StoreAdminService(db).delete_store(data.id)
    except SQLAlchemyError:
        logger.exception("Store delete failed for %s", data.id)
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    if not deleted:
        return error_response("Store not found", status_code=404)
    stores_cache.clear()
    coupons_cache.clear()
    return envelope_response(SuccessEnvelope())


@router.post(
    "/check-slug",
    response_model=None,
    summary="Check store slug",
    responses={
        200: {"model": SlugCheckEnvelope},
        400: {"description": "Missing slug"},
        500: {"description": "Backend failure"},
    },
)
async def check_slug(data: SlugCheckRequest, db: Session = Depends(get_db)) -> JSONResponse:
    """Whether ``slug`` is free, or already belongs to ``excludeStoreId`` when editing."""
    if not data.slug or not data.slug.strip():
        return error_response("Missing slug", status_code=400, isUnique=False)
    try:
        is_unique = StoreAdminService(db).is_slug_available(data.slug, data.exclude_store_id)
    except SQLAlchemyError:
        logger.exception("Slug check failed for %s", data.slug)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, isUnique=False)
    return envelope_response(SlugCheckEnvelope(is_unique=is_unique))


@router.post(
    "/analyze-regions",
    response_model=None,
    summary="Analyze store regions",
    responses={200: {"model": RegionAnalysisEnvelope}, 500: {"description": "Backend failure"}},
)
async def analyze_regions(db: Session = Depends(get_db)) -> JSONResponse:
    """Group stores by the region inferred from their domain and create missing regions."""
    try:
        analysis = RegionAnalysisService(db).analyze()
    except SQLAlchemyError:
        logger.exception("Region analysis failed")
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, breakdown=[], newRegions=[])
    return envelope_response(RegionAnalysisEnvelope.model_validate(analysis))

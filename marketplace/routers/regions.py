"""Region API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.responses import (
    BACKEND_ERROR_MESSAGE,
    WRITE_ERROR_MESSAGE,
    envelope_response,
    error_response,
)
from marketplace.repositories.region_repository import RegionRepository
from marketplace.schemas.content import RegionEnvelope, RegionListEnvelope, RegionResponse
from marketplace.schemas.region import RegionCreateRequest, RegionUpdateRequest, RegionWriteEnvelope
from marketplace.services.region_admin import RegionAdminService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get regions",
    responses={200: {"model": RegionListEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_regions(
    id: str | None = Query(default=None),
    network_id: str | None = Query(default=None, alias="networkId"),
    active_only: str | None = Query(default=None, alias="activeOnly"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Get one region by id or network id, or every region."""
    repo = RegionRepository(db)
    payload: RegionEnvelope | RegionListEnvelope
    try:
        if id or network_id:
            region = repo.get_by_id(id) if id else repo.get_by_network_id(network_id or "")
            payload = RegionEnvelope(region=RegionResponse.model_validate(region) if region else None)
        else:
            regions = repo.get_all(active_only=active_only == "true")
            payload = RegionListEnvelope(regions=[RegionResponse.model_validate(r) for r in regions])
    except SQLAlchemyError:
        logger.exception("Region read failed (id=%s, networkId=%s)", id, network_id)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, regions=[], region=None)
    return envelope_response(payload)


@router.post(
    "/create",
    response_model=None,
    summary="Create region",
    responses={
        200: {"model": RegionWriteEnvelope},
        400: {"description": "Missing fields or duplicate network ID"},
        500: {"description": "Backend failure"},
    },
)
async def create_region(data: RegionCreateRequest, db: Session = Depends(get_db)) -> JSONResponse:
    """Create a region with a unique network id."""
    if data.region is None:
        return error_response("Missing region data", status_code=400)
    try:
        region = RegionAdminService(db).create_region(data.region)
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Region create failed")
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    return envelope_response(RegionWriteEnvelope(region=RegionResponse.model_validate(region)))


@router.post(
    "/update",
    response_model=None,
    summary="Update region",
    responses={
        200: {"model": RegionWriteEnvelope},
        400: {"description": "Missing fields or duplicate network ID"},
        404: {"description": "Region not found"},
        500: {"description": "Backend failure"},
    },
)
async def update_region(data: RegionUpdateRequest, db: Session = Depends(get_db)) -> JSONResponse:
    """Apply a partial update to a region."""
    if not data.id or data.updates is None:
        return error_response("Missing region ID or updates", status_code=400)
    try:
        region = RegionAdminService(db).update_region(data.id, data.updates)
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
    except SQLAlchemyError:
        logger.exception("Region update failed for %s", data.id)
        db.rollback()
        return error_response(WRITE_ERROR_MESSAGE)
    if region is None:
        return error_response("Region not found", status_code=404)
    return envelope_response(RegionWriteEnvelope(region=RegionResponse.model_validate(region)))

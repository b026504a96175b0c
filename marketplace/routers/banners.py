"""Home page banner API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.responses import BACKEND_ERROR_MESSAGE, envelope_response, error_response
from marketplace.repositories.content_repository import BannerRepository
from marketplace.schemas.content import BannerEnvelope, BannerListEnvelope, BannerResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get banners",
    responses={200: {"model": BannerListEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_banners(
    id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Banners in layout order, unplaced banners last."""
    repo = BannerRepository(db)
    payload: BannerEnvelope | BannerListEnvelope
    try:
        if id:
            banner = repo.get_by_id(id)
            payload = BannerEnvelope(banner=BannerResponse.model_validate(banner) if banner else None)
        else:
            payload = BannerListEnvelope(
                banners=[BannerResponse.model_validate(b) for b in repo.get_all()]
            )
    except SQLAlchemyError:
        logger.exception("Banner read failed (id=%s)", id)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, banners=[], banner=None)
    return envelope_response(payload)

"""Category API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.responses import BACKEND_ERROR_MESSAGE, envelope_response, error_response
from marketplace.repositories.category_repository import CategoryRepository
from marketplace.schemas.content import CategoryEnvelope, CategoryListEnvelope, CategoryResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get categories",
    responses={200: {"model": CategoryListEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_categories(
    id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Get one category by id, or all categories by name."""
    repo = CategoryRepository(db)
    payload: CategoryEnvelope | CategoryListEnvelope
    try:
        if id:
            category = repo.get_by_id(id)
            payload = CategoryEnvelope(
                category=CategoryResponse.model_validate(category) if category else None
            )
        else:
            payload = CategoryListEnvelope(
                categories=[CategoryResponse.model_validate(c) for c in repo.get_all()]
            )
    except SQLAlchemyError:
        logger.exception("Category read failed (id=%s)", id)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, categories=[], category=None)
    return envelope_response(payload)

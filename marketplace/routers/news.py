"""News API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.responses import BACKEND_ERROR_MESSAGE, envelope_response, error_response
from marketplace.repositories.content_repository import NewsRepository
from marketplace.schemas.content import NewsEnvelope, NewsListEnvelope, NewsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get news",
    responses={200: {"model": NewsListEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_news(
    id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Get one article by id, or all articles in layout order."""
    repo = NewsRepository(db)
    payload: NewsEnvelope | NewsListEnvelope
    try:
        if id:
            article = repo.get_by_id(id)
            payload = NewsEnvelope(article=NewsResponse.model_validate(article) if article else None)
        else:
            payload = NewsListEnvelope(news=[NewsResponse.model_validate(n) for n in repo.get_all()])
    except SQLAlchemyError:
        logger.exception("News read failed (id=%s)", id)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, news=[], article=None)
    return envelope_response(payload)

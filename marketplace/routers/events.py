"""Event API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.responses import BACKEND_ERROR_MESSAGE, envelope_response, error_response
from marketplace.repositories.content_repository import EventRepository
from marketplace.schemas.content import EventEnvelope, EventListEnvelope, EventResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get",
    response_model=None,
    summary="Get events",
    responses={200: {"model": EventListEnvelope}, 500: {"description": "Backend failure"}},
)
async def get_events(
    id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Events, most recent start date first."""
    repo = EventRepository(db)
    payload: EventEnvelope | EventListEnvelope
    try:
        if id:
            event = repo.get_by_id(id)
            payload = EventEnvelope(event=EventResponse.model_validate(event) if event else None)
        else:
            payload = EventListEnvelope(events=[EventResponse.model_validate(e) for e in repo.get_all()])
    except SQLAlchemyError:
        logger.exception("Event read failed (id=%s)", id)
        db.rollback()
        return error_response(BACKEND_ERROR_MESSAGE, events=[], event=None)
    return envelope_response(payload)

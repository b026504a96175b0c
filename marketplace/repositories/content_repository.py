"""Repositories for banners, events and news."""

from sqlalchemy import nulls_last
from sqlalchemy.orm import Session

from marketplace.models.content import Banner, Event, News


class BannerRepository:
    """Repository for Banner model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Banner]:
        """Get banners in layout order, unplaced banners newest first."""
        return (
            self.db.query(Banner)
            .order_by(nulls_last(Banner.layout_position.asc()), Banner.created_at.desc())
            .all()
        )

    def get_by_id(self, banner_id: str) -> Banner | None:
        return self.db.query(Banner).filter(Banner.id == banner_id).first()


class EventRepository:
    """Repository for Event model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Event]:
        return self.db.query(Event).order_by(Event.start_date.desc()).all()

    def get_by_id(self, event_id: str) -> Event | None:
        return self.db.query(Event).filter(Event.id == event_id).first()


class NewsRepository:
    """Repository for News model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[News]:
        return (
            self.db.query(News)
            .order_by(nulls_last(News.layout_position.asc()), News.created_at.desc())
            .all()
        )

    def get_by_id(self, news_id: str) -> News | None:
        return self.db.query(News).filter(News.id == news_id).first()

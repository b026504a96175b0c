"""Region repository for data access."""

from typing import Any

from sqlalchemy.orm import Session

from marketplace.models.region import Region
from marketplace.models.shared import utc_now


class RegionRepository:
    """Repository for Region model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, active_only: bool = False) -> list[Region]:
        query = self.db.query(Region)
        if active_only:
            query = query.filter(Region.is_active.is_(True))
        return query.order_by(Region.name).all()

    def get_by_id(self, region_id: str) -> Region | None:
        return self.db.query(Region).filter(Region.id == region_id).first()

    def get_by_network_id(self, network_id: str) -> Region | None:
        return self.db.query(Region).filter(Region.network_id == network_id).first()

    def create(
        self,
        name: str,
        network_id: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Region:
        region = Region(name=name, network_id=network_id, description=description, is_active=is_active)
        self.db.add(region)
        self.db.commit()
        self.db.refresh(region)
        return region

    def update(self, region: Region, values: dict[str, Any]) -> Region:
        """Apply attribute values to a region."""
        for key, value in values.items():
            setattr(region, key, value)
        region.updated_at = utc_now()
        self.db.commit()
        self.db.refresh(region)
        return region

"""Admin writes for regions (affiliate networks)."""

import logging

from sqlalchemy.orm import Session

from marketplace.models.region import Region
from marketplace.repositories.region_repository import RegionRepository
from marketplace.schemas.region import RegionCreate, RegionUpdate

logger = logging.getLogger(__name__)


class RegionAdminService:
    """Create and update regions, keeping network ids unique."""

    def __init__(self, db: Session):
        self.db = db
        self.region_repo = RegionRepository(db)

    def create_region(self, data: RegionCreate) -> Region:
        """Create a region.

        Raises:
            ValueError: If the name or network id is blank, or the network id is taken.
        """
        if not data.name or not data.network_id:
            raise ValueError("Region name and network ID are required")
        self._check_network_id(data.network_id)
        region = self.region_repo.create(
            name=data.name,
            network_id=data.network_id,
            description=data.description or "",
            is_active=data.is_active,
        )
        logger.info("Created region %s (%s)", region.id, region.network_id)
        return region

    def update_region(self, region_id: str, data: RegionUpdate) -> Region | None:
        """Apply a partial update; None when the region does not exist.

        Raises:
            ValueError: If the update is empty, blanks a required field, or
                reuses another region's network id.
        """
        values = data.model_dump(exclude_unset=True)
        if not values:
            raise ValueError("No updates provided")
        if any(key in values and not values[key] for key in ("name", "network_id")):
            raise ValueError("Region name and network ID are required")
        region = self.region_repo.get_by_id(region_id)
        if region is None:
            return None
        if "network_id" in values:
            self._check_network_id(values["network_id"], keep_id=region.id)
        region = self.region_repo.update(region, values)
        logger.info("Updated region %s fields %s", region.id, sorted(values))
        return region

    def _check_network_id(self, network_id: str, keep_id: str | None = None) -> None:
        existing = self.region_repo.get_by_network_id(network_id)
        if existing is not None and existing.id != keep_id:
            raise ValueError("Network ID already exists")

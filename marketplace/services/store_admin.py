"""Admin writes for stores."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.models.shared import generate_id, utc_now
from marketplace.models.store import Store
from marketplace.repositories.store_repository import StoreRepository
from marketplace.schemas.store import StoreCreate, StoreUpdate

logger = logging.getLogger(__name__)


class DuplicateStoreError(ValueError):
    """A unique store column (slug or legacy id) is already taken."""


class StoreAdminService:
    def __init__(self, db: Session):
        self.db = db
        self.store_repo = StoreRepository(db)

    def create_store(self, data: StoreCreate) -> Store:
        """Create a store.

        Raises:
            DuplicateStoreError: If the slug or store id belongs to another store.
        """
        values = data.model_dump(mode="json", exclude_unset=True)
        values["id"] = generate_id()
        values["legacy_created"] = utc_now().isoformat()
        store = self._save(values, lambda: self.store_repo.create(values))
        logger.info("Created store %s (%s)", store.id, store.name)
        return store

    def update_store(self, store_id: str, data: StoreUpdate) -> Store | None:
        """Apply a partial update; None when the store does not exist.

        Raises:
            ValueError: If the update carries no fields.
            DuplicateStoreError: If the new slug or store id belongs to another store.
        """
        values = data.model_dump(mode="json", exclude_unset=True)
        if not values:
            raise ValueError("No updates provided")
        store = self.store_repo.get_by_id(store_id)
        if store is None:
            return None
        found = store
        store = self._save(values, lambda: self.store_repo.update(found, values))
        logger.info("Updated store %s fields %s", store.id, sorted(values))
        return store

    def delete_store(self, store_id: str) -> bool:
        """Delete a store by UUID or legacy id; False when it does not exist."""
        store = self.store_repo.get_by_id(store_id)
        if store is None:
            return False
        self.store_repo.delete(store)
        logger.info("Deleted store %s", store_id)
        return True

    def is_slug_available(self, slug: str, exclude_store_id: str | None = None) -> bool:
        """True when no store uses ``slug``, or only the store being edited does."""
        holder = self.store_repo.get_by_slug(slug.strip())
        if holder is None:
            return True
        if exclude_store_id:
            return exclude_store_id in (holder.id, holder.store_id)
        return False

    def _save(self, values: dict[str, Any], write: Callable[[], Store]) -> Store:
        try:
            return write()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Store write rejected: %s", exc.orig)
            if "slug" in values and "slug" in str(exc.orig).lower():
                raise DuplicateStoreError("Store with this slug already exists") from exc
            raise DuplicateStoreError("Store with this id already exists") from exc

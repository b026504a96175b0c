"""Store repository for data access."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from marketplace.models.shared import as_row, utc_now
from marketplace.models.store import Store


class StoreRepository:
    """Repository for Store model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, category_id: str | None = None) -> list[Store]:
        """Get all stores, optionally restricted to one category."""
        query = self.db.query(Store)
        if category_id:
            query = query.filter(Store.category_id == category_id)
        return query.all()

    def get_all_rows(self) -> list[dict[str, Any]]:
        return [as_row(store) for store in self.get_all()]

    def get_by_id(self, store_id: str) -> Store | None:
        """Get a store by UUID, falling back to the legacy numeric id."""
        store = self.db.query(Store).filter(Store.id == store_id).first()
        if store is None:
            store = self.get_by_legacy_id(store_id)
        return store

    def get_by_legacy_id(self, legacy_id: str) -> Store | None:
        return self.db.query(Store).filter(Store.store_id == legacy_id).first()

    def get_by_slug(self, slug: str) -> Store | None:
        return self.db.query(Store).filter(Store.slug == slug).first()

    def get_by_network_id(self, network_id: str) -> list[Store]:
        return self.db.query(Store).filter(Store.network_id == network_id).all()

    def get_by_references(self, references: Iterable[str]) -> list[Store]:
        """Get every store whose UUID or legacy id is in ``references``."""
        refs = list(dict.fromkeys(references))
        if not refs:
            return []
        return (
            self.db.query(Store)
            .filter(or_(Store.id.in_(refs), Store.store_id.in_(refs)))
            .all()
        )

    def create(self, values: dict[str, Any]) -> Store:
        """Create a new store from attribute values."""
        store = Store(**values)
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        return store

    def update(self, store: Store, values: dict[str, Any]) -> Store:
        """Apply attribute values to a store and stamp its modification time."""
        for key, value in values.items():
            setattr(store, key, value)
        now = utc_now()
        store.updated_at = now
        store.legacy_modified = now.isoformat()
        self.db.commit()
        self.db.refresh(store)
        return store

    def delete(self, store: Store) -> None:
        self.db.delete(store)
        self.db.commit()

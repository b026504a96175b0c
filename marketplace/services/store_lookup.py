"""Store read pipeline behind ``/api/stores/get``."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.cache import TTLCache
from marketplace.models.shared import as_row
from marketplace.models.store import Store
from marketplace.repositories.category_repository import CategoryRepository
from marketplace.repositories.store_repository import StoreRepository
from marketplace.schemas.query import StoreQuery
from marketplace.services.normalizers import StoreRecord, convert_store_row
from marketplace.services.text import to_int

logger = logging.getLogger(__name__)


def has_country(record: StoreRecord, country_code: str) -> bool:
    if not record.country_codes:
        return False
    codes = {code.strip().upper() for code in record.country_codes.split(",")}
    return country_code.strip().upper() in codes


class StoreLookupService:
    """Resolve and normalize stores for the public read API."""

    def __init__(self, db: Session, cache: TTLCache):
        self.db = db
        self.cache = cache
        self.store_repo = StoreRepository(db)
        self.category_repo = CategoryRepository(db)

    def get_store(self, query: StoreQuery) -> StoreRecord | None:
        """Get a store by UUID or legacy ``Store Id``."""
        store_id = query.id or ""
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self._single(self.store_repo.get_by_id(store_id)),
            bypass=query.bypass_cache,
        )

    def get_store_by_slug(self, query: StoreQuery) -> StoreRecord | None:
        slug = query.slug or ""
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self._single(self.store_repo.get_by_slug(slug)),
            bypass=query.bypass_cache,
        )

    def list_by_network(self, query: StoreQuery) -> list[StoreRecord]:
        network_id = query.network_id or ""
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self.to_records(self.store_repo.get_by_network_id(network_id)),
            bypass=query.bypass_cache,
        )

    def list_stores(self, query: StoreQuery) -> list[StoreRecord]:
        """All stores, optionally filtered by category and country, highest legacy id first."""
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self._load_stores(query),
            bypass=query.bypass_cache,
        )

    def _load_stores(self, query: StoreQuery) -> list[StoreRecord]:
        records = self.to_records(self.store_repo.get_all(query.category_id))
        if query.country_code:
            country_code = query.country_code
            records = [record for record in records if has_country(record, country_code)]
        records.sort(key=lambda record: to_int(record.store_id) or 0, reverse=True)
        logger.info("Loaded %d stores (%s)", len(records), query.cache_key())
        return records

    def _single(self, store: Store | None) -> StoreRecord | None:
        if store is None:
            return None
        return self.to_records([store])[0]

    def to_records(self, stores: Sequence[Store]) -> list[StoreRecord]:
        """Normalize ``stores`` and attach their category names."""
        records = [convert_store_row(as_row(store)) for store in stores]
        category_ids = [record.main_category_id for record in records if record.main_category_id]
        if not category_ids:
            return records
        try:
            names = self.category_repo.get_names(category_ids)
        except SQLAlchemyError:
            logger.exception("Category enrichment failed for %d stores", len(records))
            self.db.rollback()
            return records
        for record in records:
            if record.main_category_id:
                record.category_name = names.get(record.main_category_id)
        return records

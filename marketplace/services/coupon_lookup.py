"""Coupon read pipeline behind ``/api/coupons/get``."""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.cache import TTLCache
from marketplace.models.coupon import Coupon
from marketplace.models.shared import as_row
from marketplace.repositories.coupon_repository import CouponRepository
from marketplace.repositories.store_repository import StoreRepository
from marketplace.schemas.query import CouponQuery
from marketplace.services.expiry import is_unexpired
from marketplace.services.normalizers import CouponRecord, convert_coupon_row, store_ids_of
from marketplace.services.store_resolution import (
    DEFAULT_STRATEGIES,
    StoreIdContext,
    StoreIdStrategy,
    resolve_store_coupons,
)
from marketplace.services.text import is_uuid

logger = logging.getLogger(__name__)


def _layout_sort_key(record: CouponRecord) -> tuple[bool, int]:
    return (record.layout_position is None, record.layout_position or 0)


def filter_active(records: Iterable[CouponRecord]) -> list[CouponRecord]:
    return [record for record in records if record.is_active]


def filter_unexpired(records: Iterable[CouponRecord], now: datetime | None = None) -> list[CouponRecord]:
    return [record for record in records if is_unexpired(record.raw_expiry, now)]


def load_store_rows(db: Session, coupons: Sequence[Coupon]) -> dict[str, dict[str, Any]]:
    """Fetch the stores referenced by ``coupons`` in one query.

    The map is keyed by both the UUID and the legacy id of each store. A
    failing query degrades to an empty map so coupons still render.
    """
    references: list[str] = []
    for coupon in coupons:
        references.extend(store_ids_of(as_row(coupon)))
    if not references:
        return {}
    try:
        stores = StoreRepository(db).get_by_references(references)
    except SQLAlchemyError:
        logger.exception("Store enrichment failed for %d references", len(references))
        db.rollback()
        return {}

    rows: dict[str, dict[str, Any]] = {}
    for store in stores:
        row = as_row(store)
        for key in (store.id, store.store_id):
            if key:
                rows[str(key)] = row
    return rows


class CouponLookupService:
    """Resolve, normalize and filter coupons for the public read API.

    Results are cached per filter combination in ``cache``; a query with
    ``bypass_cache`` always hits the database and refreshes the entry.
    """

    def __init__(
        self,
        db: Session,
        cache: TTLCache,
        strategies: Sequence[StoreIdStrategy] = DEFAULT_STRATEGIES,
    ):
        self.db = db
        self.cache = cache
        self.strategies = strategies
        self.coupon_repo = CouponRepository(db)
        self.store_repo = StoreRepository(db)

    def get_coupon(self, query: CouponQuery) -> CouponRecord | None:
        """Get one coupon by id or imported ``Coupon Id``; None when neither matches."""
        if not query.id:
            return None
        coupon_id = query.id
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self._load_coupon(coupon_id),
            bypass=query.bypass_cache,
        )

    def list_coupons(self, query: CouponQuery, now: datetime | None = None) -> list[CouponRecord]:
        """Get the coupons matching the category/store filters.

        Inactive coupons are dropped when ``active_only`` is set; expired
        coupons are always dropped.
        """
        return self.cache.get_or_load(  # type: ignore[no-any-return]
            query.cache_key(),
            lambda: self._load_coupons(query, now),
            bypass=query.bypass_cache,
        )

    def _load_coupon(self, coupon_id: str) -> CouponRecord | None:
        coupon = self.coupon_repo.get_by_id(coupon_id)
        if coupon is None:
            logger.info("Coupon %s not found", coupon_id)
            return None
        stores = load_store_rows(self.db, [coupon])
        return self.to_record(coupon, stores)

    def _load_coupons(self, query: CouponQuery, now: datetime | None) -> list[CouponRecord]:
        if query.store_id:
            coupons = resolve_store_coupons(
                self.coupon_repo,
                self.store_context(query.store_id, query.category_id),
                self.strategies,
            )
        else:
            coupons = self.coupon_repo.get_all(query.category_id)
        logger.info("Fetched %d coupons (%s)", len(coupons), query.cache_key())

        stores = load_store_rows(self.db, coupons)
        records = [self.to_record(coupon, stores) for coupon in coupons]

        if query.active_only:
            before = len(records)
            records = filter_active(records)
            logger.info("activeOnly filter removed %d coupons", before - len(records))

        before = len(records)
        records = filter_unexpired(records, now)
        logger.info("Expiry filter removed %d coupons", before - len(records))

        records.sort(key=_layout_sort_key)
        return records

    def store_context(self, store_id: str, category_id: str | None = None) -> StoreIdContext:
        """Look the requested store up so every identifier it has is known.

        UUID-shaped ids are internal ids; anything else is treated as a
        legacy numeric ``Store Id``.
        """
        if is_uuid(store_id):
            store = self.store_repo.get_by_id(store_id)
        else:
            store = self.store_repo.get_by_legacy_id(store_id)
        if store is None:
            logger.info("Store %s not found, matching coupons on the raw id", store_id)
        else:
            logger.debug("Store %s resolved to legacy id %s", store_id, store.store_id)
        return StoreIdContext.for_store(store_id, store, category_id)

    @staticmethod
    def to_record(coupon: Coupon, stores: dict[str, dict[str, Any]]) -> CouponRecord:
        row = as_row(coupon)
        store = next((stores[ref] for ref in store_ids_of(row) if ref in stores), None)
        if store is None and store_ids_of(row):
            logger.debug("Coupon %s references unknown stores %s", coupon.id, store_ids_of(row))
        return convert_coupon_row(row, store)

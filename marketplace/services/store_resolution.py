"""Ordered strategies for finding the coupons of one store.

Coupons reference stores inconsistently: the imported rows carry the legacy
numeric ``Store  Id``, admin-created rows carry store UUIDs in the
``store_ids`` array, and some rows only have a denormalized store name.
Each strategy is one way of matching; they are tried in order and the first
non-empty result wins.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from marketplace.models.coupon import Coupon
from marketplace.models.shared import as_row
from marketplace.models.store import Store
from marketplace.repositories.coupon_repository import CouponRepository
from marketplace.services.normalizers import store_ids_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreIdContext:
    """What is known about the store a caller asked for."""

    requested_id: str
    legacy_id: str | None = None
    store_uuid: str | None = None
    store_name: str | None = None
    category_id: str | None = None

    @classmethod
    def for_store(
        cls, requested_id: str, store: Store | None, category_id: str | None = None
    ) -> "StoreIdContext":
        if store is None:
            return cls(requested_id=requested_id, category_id=category_id)
        return cls(
            requested_id=requested_id,
            legacy_id=store.store_id,
            store_uuid=store.id,
            store_name=store.name,
            category_id=category_id,
        )

    @property
    def candidate_ids(self) -> list[str]:
        """Every identifier the store may appear under, deduplicated."""
        ids = [self.legacy_id, self.requested_id, self.store_uuid]
        return list(dict.fromkeys(str(i).strip() for i in ids if i and str(i).strip()))


class StoreIdStrategy(Protocol):
    name: str

    def resolve(self, repo: CouponRepository, context: StoreIdContext) -> list[Coupon]: ...


class IndexedStoreIdStrategy:
    """Indexed lookup on the legacy ``Store  Id`` column (numeric or requested id)."""

    name = "indexed"

    def resolve(self, repo: CouponRepository, context: StoreIdContext) -> list[Coupon]:
        ids = [i for i in (context.legacy_id, context.requested_id) if i]
        return repo.get_by_legacy_store_ids(ids, context.category_id)


class FullScanStoreIdStrategy:
    """Scan the whole table and match on any known identifier or the store name."""

    name = "full_scan"

    def resolve(self, repo: CouponRepository, context: StoreIdContext) -> list[Coupon]:
        return [
            coupon
            for coupon in repo.get_all(context.category_id)
            if self.matches(coupon, context)
        ]

    @staticmethod
    def matches(coupon: Coupon, context: StoreIdContext) -> bool:
        row = as_row(coupon)
        candidates = set(context.candidate_ids)
        if candidates.intersection(store_ids_of(row)):
            return True
        if context.store_name:
            name = row.get("Store Name")
            if name and str(name).strip().lower() == context.store_name.strip().lower():
                return True
        return False


DEFAULT_STRATEGIES: tuple[StoreIdStrategy, ...] = (
    IndexedStoreIdStrategy(),
    FullScanStoreIdStrategy(),
)


def resolve_store_coupons(
    repo: CouponRepository,
    context: StoreIdContext,
    strategies: Sequence[StoreIdStrategy] = DEFAULT_STRATEGIES,
) -> list[Coupon]:
    """Run ``strategies`` in order and return the first non-empty result."""
    for strategy in strategies:
        coupons = strategy.resolve(repo, context)
        if coupons:
            logger.info(
                "Store %s resolved to %d coupons via %s strategy",
                context.requested_id,
                len(coupons),
                strategy.name,
            )
            return coupons
        logger.debug("Strategy %s found no coupons for store %s", strategy.name, context.requested_id)
    logger.info("No coupons found for store %s (candidates %s)", context.requested_id, context.candidate_ids)
    return []

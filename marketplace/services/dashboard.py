"""Admin dashboard and homepage layout reads."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from marketplace.models.coupon import LAYOUT_SLOTS
from marketplace.repositories.coupon_repository import CouponRepository
from marketplace.services.coupon_lookup import CouponLookupService, load_store_rows
from marketplace.services.normalizers import CouponRecord
from marketplace.services.text import to_float, to_int

logger = logging.getLogger(__name__)

RECENT_COUPONS_LIMIT = 20


@dataclass
class DashboardStats:
    total_coupons: int
    active_coupons: int
    total_uses: int
    average_discount: str


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.coupon_repo = CouponRepository(db)

    def get_stats(self) -> DashboardStats:
        """Coupon counts, total redemptions and the mean positive discount."""
        usage = self.coupon_repo.get_usage_stats()
        total_uses = sum(max(to_int(uses) or 0, 0) for uses, _ in usage)
        discounts = [d for d in (to_float(discount) for _, discount in usage) if d > 0]
        average = sum(discounts) / len(discounts) if discounts else 0.0
        return DashboardStats(
            total_coupons=self.coupon_repo.count(),
            active_coupons=self.coupon_repo.count_active(),
            total_uses=total_uses,
            average_discount=f"{average:.2f}",
        )

    def get_recent_coupons(self, limit: int = RECENT_COUPONS_LIMIT) -> list[CouponRecord]:
        coupons = self.coupon_repo.get_recent(limit)
        stores = load_store_rows(self.db, coupons)
        return [CouponLookupService.to_record(coupon, stores) for coupon in coupons]

    def get_layout(self, latest: bool = False) -> list[CouponRecord | None]:
        """The homepage grid as ``LAYOUT_SLOTS`` entries; empty slots are None.

        When two coupons claim the same slot the most recently created wins.
        """
        coupons = self.coupon_repo.get_slot_holders(latest=latest)
        stores = load_store_rows(self.db, coupons)
        slots: list[CouponRecord | None] = [None] * LAYOUT_SLOTS
        for coupon in coupons:
            position = coupon.latest_layout_position if latest else coupon.layout_position
            if position is None or not 1 <= position <= LAYOUT_SLOTS:
                continue
            if slots[position - 1] is None:
                slots[position - 1] = CouponLookupService.to_record(coupon, stores)
        logger.debug("Layout (latest=%s) has %d filled slots", latest, sum(s is not None for s in slots))
        return slots

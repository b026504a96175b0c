"""Admin writes for coupons: create, update, delete and layout slot placement."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from marketplace.models.coupon import Coupon, CouponType
from marketplace.models.shared import as_row, generate_id, utc_now
from marketplace.repositories.coupon_repository import CouponRepository
from marketplace.schemas.coupon import CouponWrite
from marketplace.services.normalizers import COUPON_CODE_FIELDS, resolve_coupon_type
from marketplace.services.text import first_present

logger = logging.getLogger(__name__)

# Layout attribute -> flag that places a coupon in that grid
SLOT_FLAGS = {
    "layout_position": "is_popular",
    "latest_layout_position": "is_latest",
}


class CouponAdminService:
    """Create and update coupons while keeping the code/deal and layout invariants."""

    def __init__(self, db: Session):
        self.db = db
        self.coupon_repo = CouponRepository(db)

    def create_coupon(self, data: CouponWrite) -> Coupon:
        """Create a coupon.

        Raises:
            ValueError: If a code-type coupon has no code.
        """
        values = data.model_dump(mode="json", exclude_unset=True)
        values = self._apply_type_rules(values, existing=None)
        values.setdefault("is_active", True)
        values.setdefault("current_uses", 0)
        values.setdefault("store_ids", [])
        values["id"] = generate_id()
        values["legacy_created"] = utc_now().isoformat()
        self._release_slots(values, keep_id=values["id"])
        coupon = self.coupon_repo.create(values)
        logger.info("Created coupon %s (%s)", coupon.id, coupon.legacy_type)
        return coupon

    def update_coupon(self, coupon_id: str, data: CouponWrite) -> Coupon | None:
        """Apply a partial update; None when the coupon does not exist.

        Raises:
            ValueError: If the update leaves a code-type coupon without a code.
        """
        coupon = self.coupon_repo.get_by_id(coupon_id)
        if coupon is None:
            return None
        values = data.model_dump(mode="json", exclude_unset=True)
        values = self._apply_type_rules(values, existing=coupon)
        if "layout_position" in values:
            # The imported priority column outranks layout_position on read
            values["legacy_priority"] = None
        self._release_slots(values, keep_id=coupon.id)
        coupon = self.coupon_repo.update(coupon, values)
        logger.info("Updated coupon %s fields %s", coupon.id, sorted(values))
        return coupon

    def delete_coupon(self, coupon_id: str) -> int:
        """Delete the coupons matching an id or imported ``Coupon Id``; returns how many."""
        deleted = self.coupon_repo.delete_by_reference(coupon_id)
        if deleted:
            logger.info("Deleted %d coupon(s) matching %s", deleted, coupon_id)
        return deleted

    def _apply_type_rules(self, values: dict[str, Any], existing: Coupon | None) -> dict[str, Any]:
        row = as_row(existing) if existing is not None else {}
        if "legacy_type" in values and values["legacy_type"] is not None:
            coupon_type = CouponType(values["legacy_type"]).value
        else:
            coupon_type = resolve_coupon_type(row)
        values["legacy_type"] = coupon_type
        values["coupon_type"] = coupon_type

        if coupon_type == CouponType.DEAL.value:
            values["legacy_code"] = None
            values["code"] = None
            return values

        code = values["legacy_code"] if "legacy_code" in values else first_present(row, *COUPON_CODE_FIELDS)
        if code is None or not str(code).strip():
            raise ValueError("Coupon code is required for code-type coupons")
        values["legacy_code"] = str(code).strip()
        return values

    def _release_slots(self, values: dict[str, Any], keep_id: str) -> None:
        """Free the grid positions this write claims from every other coupon."""
        for attribute, flag in SLOT_FLAGS.items():
            position = values.get(attribute)
            if position is None:
                continue
            values.setdefault(flag, True)
            released = self.coupon_repo.release_slot(attribute, position, keep_id=keep_id)
            if released:
                logger.info("Released %s %d from %d coupon(s)", attribute, position, released)

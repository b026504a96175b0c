"""Coupon repository for data access."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from marketplace.models.coupon import Coupon
from marketplace.models.shared import utc_now


class CouponRepository:
    """Repository for Coupon model."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, category_id: str | None = None) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Coupon).order_by(Coupon.created_at.desc(), Coupon.id)
        if category_id:
            query = query.filter(Coupon.category_id == category_id)
        return query

    def get_all(self, category_id: str | None = None) -> list[Coupon]:
        """Get all coupons with an optional category filter."""
        return self._query(category_id).all()

    def get_by_id(self, coupon_id: str) -> Coupon | None:
        """Get a coupon by primary key, falling back to the imported ``Coupon Id``."""
        coupon = self.db.query(Coupon).filter(Coupon.id == coupon_id).first()
        if coupon is None:
            coupon = self.db.query(Coupon).filter(Coupon.external_id == coupon_id).first()
        return coupon

    def get_by_legacy_store_ids(
        self, store_ids: Iterable[str], category_id: str | None = None
    ) -> list[Coupon]:
        """Get coupons whose legacy ``Store  Id`` column matches any of ``store_ids``."""
        ids = [store_id for store_id in dict.fromkeys(store_ids) if store_id]
        if not ids:
            return []
        return self._query(category_id).filter(Coupon.legacy_store_id.in_(ids)).all()

    def get_recent(self, limit: int = 20) -> list[Coupon]:
        return (
            self.db.query(Coupon)
            .order_by(Coupon.created_at.desc(), Coupon.id)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(func.count(Coupon.id)).scalar() or 0

    def count_active(self) -> int:
        """Count coupons not explicitly deactivated."""
        return (
            self.db.query(func.count(Coupon.id))
            .filter(or_(Coupon.is_active.is_(None), Coupon.is_active.is_(True)))
            .scalar()
            or 0
        )

    def get_usage_stats(self) -> list[tuple[Any, Any]]:
        """(current_uses, discount) for every coupon."""
        return [
            (row.current_uses, row.discount)
            for row in self.db.query(Coupon.current_uses, Coupon.discount).all()
        ]

    def get_slot_holders(self, latest: bool = False) -> list[Coupon]:
        """Coupons placed in the popular (or latest) layout grid."""
        if latest:
            return (
                self.db.query(Coupon)
                .filter(Coupon.is_latest.is_(True), Coupon.latest_layout_position.isnot(None))
                .order_by(Coupon.created_at.desc(), Coupon.id)
                .all()
            )
        return (
            self.db.query(Coupon)
            .filter(Coupon.is_popular.is_(True), Coupon.layout_position.isnot(None))
            .order_by(Coupon.created_at.desc(), Coupon.id)
            .all()
        )

    def release_slot(self, attribute: str, position: int, keep_id: str | None = None) -> int:
        """Clear ``attribute == position`` on every coupon except ``keep_id``."""
        column = getattr(Coupon, attribute)
        query = self.db.query(Coupon).filter(column == position)
        if keep_id is not None:
            query = query.filter(Coupon.id != keep_id)
        released = 0
        for coupon in query.all():
            setattr(coupon, attribute, None)
            released += 1
        return released

    def create(self, values: dict[str, Any]) -> Coupon:
        """Create a new coupon from attribute values."""
        coupon = Coupon(**values)
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def update(self, coupon: Coupon, values: dict[str, Any]) -> Coupon:
        """Apply attribute values to a coupon and stamp its modification time."""
        for key, value in values.items():
            setattr(coupon, key, value)
        now = utc_now()
        coupon.updated_at = now
        coupon.legacy_modified = now.isoformat()
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def delete_by_reference(self, coupon_id: str) -> int:
        """Delete every coupon whose primary key or ``Coupon Id`` is ``coupon_id``."""
        coupons = (
            self.db.query(Coupon)
            .filter(or_(Coupon.id == coupon_id, Coupon.external_id == coupon_id))
            .all()
        )
        for coupon in coupons:
            self.db.delete(coupon)
        self.db.commit()
        return len(coupons)

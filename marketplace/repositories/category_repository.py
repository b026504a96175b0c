"""Category repository for data access."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from marketplace.models.category import Category


class CategoryRepository:
    """Repository for Category model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_by_id(self, category_id: str) -> Category | None:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_names(self, category_ids: Iterable[str]) -> dict[str, str]:
        """Map category id -> name for the given ids."""
        ids = list(dict.fromkeys(category_ids))
        if not ids:
            return {}
        rows = self.db.query(Category.id, Category.name).filter(Category.id.in_(ids)).all()
        return {row.id: row.name or "" for row in rows}

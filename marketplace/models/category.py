"""Category model used to group stores and coupons."""

from sqlalchemy import Column, DateTime, String, Text, func

from marketplace.core.database import Base
from marketplace.models.shared import generate_id


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    background_color = Column(String(32), nullable=False, default="#FFFFFF")
    logo_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

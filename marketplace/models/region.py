"""Region model grouping stores of the same affiliate network."""

from sqlalchemy import Boolean, Column, DateTime, String, Text, func

from marketplace.core.database import Base
from marketplace.models.shared import generate_id


class Region(Base):
    __tablename__ = "regions"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    network_id = Column(String(64), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

"""Store model for merchants listed on the marketplace."""

from sqlalchemy import JSON, Column, DateTime, Integer, Numeric, String, Text, func

from marketplace.core.database import Base
from marketplace.models.shared import generate_id


class Store(Base):
    """Store row.

    ``id`` is the internal UUID; ``"Store Id"`` is the legacy numeric id from
    the spreadsheet import. Both identify the same store.
    """

    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=generate_id)
    store_id = Column("Store Id", String(64), unique=True, nullable=True, index=True)
    name = Column("Store Name", String(255), nullable=False)
    slug = Column("Slug", String(255), unique=True, nullable=True, index=True)
    network_id = Column("Network ID", String(64), nullable=True, index=True)
    merchant_id = Column("Merchant Id", String(64), nullable=True)

    logo = Column("Store Logo", Text, nullable=True)
    logo_url = Column(Text, nullable=True)
    tracking_url = Column("Tracking Url", Text, nullable=True)
    tracking_link = Column("Tracking Link", Text, nullable=True)
    display_url = Column("Store Display Url", Text, nullable=True)
    website_url = Column(Text, nullable=True)

    description = Column(Text, nullable=True)
    legacy_description = Column("Store Description", Text, nullable=True)
    category_id = Column(String(64), nullable=True, index=True)
    parent_category_id = Column("Parent Category Id", String(64), nullable=True)
    category_ids = Column("Cate Ids", String(255), nullable=True)
    country_codes = Column(JSON, nullable=True)

    why_trust_us = Column(Text, nullable=True)
    more_information = Column(Text, nullable=True)
    rating = Column(Numeric(3, 2), nullable=True)
    review_count = Column(Integer, nullable=True)
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(Text, nullable=True)

    legacy_created = Column("Created Date", String(64), nullable=True)
    legacy_modified = Column("Modify Date", String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

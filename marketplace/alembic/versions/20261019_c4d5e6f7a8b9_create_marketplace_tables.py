"""create marketplace tables

Revision ID: c4d5e6f7a8b9
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c4d5e6f7a8b9"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("background_color", sa.String(length=32), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_categories_name"), "categories", ["name"], unique=False)

    op.create_table(
        "stores",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("Store Id", sa.String(length=64), nullable=True),
        sa.Column("Store Name", sa.String(length=255), nullable=False),
        sa.Column("Slug", sa.String(length=255), nullable=True),
        sa.Column("Network ID", sa.String(length=64), nullable=True),
        sa.Column("Merchant Id", sa.String(length=64), nullable=True),
        sa.Column("Store Logo", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("Tracking Url", sa.Text(), nullable=True),
        sa.Column("Tracking Link", sa.Text(), nullable=True),
        sa.Column("Store Display Url", sa.Text(), nullable=True),
        sa.Column("website_url", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("Store Description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.String(length=64), nullable=True),
        sa.Column("Parent Category Id", sa.String(length=64), nullable=True),
        sa.Column("Cate Ids", sa.String(length=255), nullable=True),
        sa.Column("country_codes", sa.JSON(), nullable=True),
        sa.Column("why_trust_us", sa.Text(), nullable=True),
        sa.Column("more_information", sa.Text(), nullable=True),
        sa.Column("rating", sa.Numeric(precision=3, scale=2), nullable=True),
        sa.Column("review_count", sa.Integer(), nullable=True),
        sa.Column("seo_title", sa.String(length=255), nullable=True),
        sa.Column("seo_description", sa.Text(), nullable=True),
        sa.Column("Created Date", sa.String(length=64), nullable=True),
        sa.Column("Modify Date", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stores_store_id", "stores", ["Store Id"], unique=True)
    op.create_index("ix_stores_slug", "stores", ["Slug"], unique=True)
    op.create_index("ix_stores_network_id", "stores", ["Network ID"], unique=False)
    op.create_index(op.f("ix_stores_category_id"), "stores", ["category_id"], unique=False)

    op.create_table(
        "coupons",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("Coupon Id", sa.String(length=64), nullable=True),
        sa.Column("Store  Id", sa.String(length=64), nullable=True),
        sa.Column("store_ids", sa.JSON(), nullable=True),
        sa.Column("Store Name", sa.String(length=255), nullable=True),
        sa.Column("Coupon Code", sa.String(length=255), nullable=True),
        sa.Column("code", sa.String(length=255), nullable=True),
        sa.Column("Coupon Type", sa.String(length=20), nullable=True),
        sa.Column("coupon_type", sa.String(length=20), nullable=True),
        sa.Column("Coupon Title", sa.Text(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("Coupon Desc", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("Coupon URL", sa.Text(), nullable=True),
        sa.Column("Coupon Deep Link", sa.Text(), nullable=True),
        sa.Column("deeplink", sa.Text(), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("discount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("discount_type", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("current_uses", sa.Integer(), nullable=True),
        sa.Column("Coupon Expiry", sa.String(length=64), nullable=True),
        sa.Column("expiry_date", sa.JSON(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("is_popular", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("Coupon Priority", sa.String(length=16), nullable=True),
        sa.Column("layout_position", sa.Integer(), nullable=True),
        sa.Column("is_latest", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("latest_layout_position", sa.Integer(), nullable=True),
        sa.Column("category_id", sa.String(length=64), nullable=True),
        sa.Column("Created Date", sa.String(length=64), nullable=True),
        sa.Column("Modify Date", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_coupons_external_id", "coupons", ["Coupon Id"], unique=False)
    op.create_index("ix_coupons_legacy_store_id", "coupons", ["Store  Id"], unique=False)
    op.create_index(op.f("ix_coupons_category_id"), "coupons", ["category_id"], unique=False)

    op.create_table(
        "regions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("network_id", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_regions_network_id"), "regions", ["network_id"], unique=True)
    op.create_index(op.f("ix_regions_is_active"), "regions", ["is_active"], unique=False)

    op.create_table(
        "banners",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("layout_position", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("layout_position"),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("banner_url", sa.Text(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("more_details", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_events_start_date"), "events", ["start_date"], unique=False)
    op.create_index(op.f("ix_events_end_date"), "events", ["end_date"], unique=False)

    op.create_table(
        "news",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("article_url", sa.Text(), nullable=True),
        sa.Column("date", sa.String(length=64), nullable=True),
        sa.Column("layout_position", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("layout_position"),
    )


def downgrade() -> None:
    op.drop_table("news")
    op.drop_index(op.f("ix_events_end_date"), table_name="events")
    op.drop_index(op.f("ix_events_start_date"), table_name="events")
    op.drop_table("events")
    op.drop_table("banners")
    op.drop_index(op.f("ix_regions_is_active"), table_name="regions")
    op.drop_index(op.f("ix_regions_network_id"), table_name="regions")
    op.drop_table("regions")
    op.drop_index(op.f("ix_coupons_category_id"), table_name="coupons")
    op.drop_index("ix_coupons_legacy_store_id", table_name="coupons")
    op.drop_index("ix_coupons_external_id", table_name="coupons")
    op.drop_table("coupons")
    op.drop_index(op.f("ix_stores_category_id"), table_name="stores")
    op.drop_index("ix_stores_network_id", table_name="stores")
    op.drop_index("ix_stores_slug", table_name="stores")
    op.drop_index("ix_stores_store_id", table_name="stores")
    op.drop_table("stores")
    op.drop_index(op.f("ix_categories_name"), table_name="categories")
    op.drop_table("categories")

"""Initial catalog schema.

Creates the books and cars tables with their unique indexes on the
natural key and the external identifier.
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Books
    op.create_table(
        "books",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("publisher", sa.String(length=32), nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("discount", sa.Float(), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column("published", sa.Date(), nullable=True),
        sa.Column("isbn", sa.Text(), nullable=False),
        sa.Column("homepage", sa.Text(), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("title", name="uq_books_title"),
        sa.UniqueConstraint("isbn", name="uq_books_isbn"),
    )

    # Cars
    op.create_table(
        "cars",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("model", sa.Text(), nullable=False),
        sa.Column("consumption", sa.Float(), nullable=True),
        sa.Column("car_type", sa.String(length=16), nullable=False),
        sa.Column("brand", sa.String(length=16), nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("discount", sa.Float(), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column("released", sa.Date(), nullable=True),
        sa.Column("model_number", sa.Text(), nullable=False),
        sa.Column("homepage", sa.Text(), nullable=True),
        sa.Column("plants", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("model", name="uq_cars_model"),
        sa.UniqueConstraint("model_number", name="uq_cars_model_number"),
    )


def downgrade() -> None:
    op.drop_table("cars")
    op.drop_table("books")

"""add search history and pickup points

Revision ID: 0002_searches_pickup_points
Revises: 0001_init
Create Date: 2026-10-18 10:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_searches_pickup_points"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade() -> None:
	op.create_table(
		"user_searches",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("user_id", sa.Integer(), nullable=False),
		sa.Column("search_query", sa.Text(), nullable=False),
		sa.Column("created_at", sa.DateTime(), nullable=True),
		sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
	)
	op.create_index("ix_user_searches_id", "user_searches", ["id"], unique=False)
	op.create_index("ix_user_searches_user_id", "user_searches", ["user_id"], unique=False)
	op.create_index("ix_user_searches_created_at", "user_searches", ["created_at"], unique=False)

	op.create_table(
		"pickup_points",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("name", sa.String(), nullable=False),
		sa.Column("location", sa.String(), nullable=False),
		sa.Column("description", sa.Text(), nullable=True),
		sa.Column("coordinates", sa.String(), nullable=True),
		sa.Column("campus", sa.String(), nullable=True),
	)
	op.create_index("ix_pickup_points_id", "pickup_points", ["id"], unique=False)


def downgrade() -> None:
	op.drop_index("ix_pickup_points_id", table_name="pickup_points")
	op.drop_table("pickup_points")
	op.drop_index("ix_user_searches_created_at", table_name="user_searches")
	op.drop_index("ix_user_searches_user_id", table_name="user_searches")
	op.drop_index("ix_user_searches_id", table_name="user_searches")
	op.drop_table("user_searches")
